"""
Shared HTTP client.

Provides a pre-configured ``requests.Session`` with a default timeout and an
identifying User-Agent. Retries are switched off: a failed request surfaces
immediately as an error and the caller decides what to do about it.

Usage::

    from granite_forager.services.http import create_session

    session = create_session()
    resp = session.get("https://api.inaturalist.org/v1/observations", params={...})
    resp.raise_for_status()
"""

from __future__ import annotations

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

#: No retries at any level; connection, read and status failures all raise.
NO_RETRY = Retry(total=0, connect=0, read=0, status=0, raise_on_status=False)

DEFAULT_TIMEOUT = 30  # seconds

USER_AGENT = "granite-forager/0.1 (observation validation)"


def create_session(
    retry: Retry | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> requests.Session:
    """
    Build a ``requests.Session`` with a non-retrying adapter mounted.

    Args:
        retry: Custom retry strategy (defaults to ``NO_RETRY``).
        timeout: Default timeout applied to every request.
    """
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=retry or NO_RETRY)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers["User-Agent"] = USER_AGENT
    s.headers["Accept"] = "application/json"

    # Every request gets ``timeout`` unless the caller passes its own.
    base_send = s.send

    def send(prepared: requests.PreparedRequest, **kwargs: object) -> requests.Response:
        kwargs.setdefault("timeout", timeout)
        return base_send(prepared, **kwargs)  # type: ignore[arg-type]

    s.send = send  # type: ignore[method-assign]
    return s
