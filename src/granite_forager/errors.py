"""Errors raised while retrieving external observation data."""

from __future__ import annotations


class FetchError(Exception):
    """An outbound request failed: transport error, non-2xx status, or a body that isn't JSON."""

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class MalformedResponseError(FetchError):
    """The response parsed as JSON but doesn't have the expected shape."""
