"""
iNaturalist API client.

Low-level HTTP client for the iNaturalist API v1: request building,
self-throttling, response caching, and page-number pagination.

API docs: https://api.inaturalist.org/v1/docs/
Rate limits: ~100 req/min recommended, 10k/day
Recommended practices: https://www.inaturalist.org/pages/api+recommended+practices

The client owns its rate-limiter and cache state; construct one per
process and share it. Pages are fetched strictly one after another so the
spacing between outbound calls always holds.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any

import requests

from granite_forager.cache import ResponseCache
from granite_forager.errors import FetchError, MalformedResponseError
from granite_forager.reference.geography import STUDY_AREA
from granite_forager.services.http import create_session

if TYPE_CHECKING:
    from granite_forager.config import Settings

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# API configuration
# ---------------------------------------------------------------------------
API_BASE = "https://api.inaturalist.org/v1"
MAX_PER_PAGE = 200  # API maximum for /observations
ICONIC_TAXA = "Fungi"
QUALITY_GRADE = "research"

# ---------------------------------------------------------------------------
# Self-throttling
# ---------------------------------------------------------------------------
MIN_REQUEST_INTERVAL = 0.6  # seconds -> at most 100 calls/minute
BURST_EVERY = 50  # every Nth call pays an extra cooldown
BURST_COOLDOWN = 2.0  # seconds

CACHE_TTL = 60 * 60  # 1 hour


def default_query_params(
    *,
    iconic_taxa: str = ICONIC_TAXA,
    quality_grade: str = QUALITY_GRADE,
    per_page: int = MAX_PER_PAGE,
) -> dict[str, Any]:
    """Standard parameters for research-grade fungi observations inside the study area."""
    return {
        "iconic_taxa": iconic_taxa,
        **STUDY_AREA.as_query_params(),
        "quality_grade": quality_grade,
        "per_page": per_page,
    }


def date_range_params(start: date | str, end: date | str) -> dict[str, str]:
    """``d1``/``d2`` parameters for an inclusive observed-on date range."""
    return {"d1": str(start), "d2": str(end)}


def month_params(year: int, month: int) -> dict[str, int]:
    return {"year": year, "month": month}


# =============================================================================
# Rate limiting
# =============================================================================


class RateLimiter:
    """Cooperative self-throttle for outbound calls.

    Enforces a minimum spacing between calls and, every ``burst_every``
    calls, an additional cooldown pause.
    """

    def __init__(
        self,
        min_interval: float = MIN_REQUEST_INTERVAL,
        burst_every: int = BURST_EVERY,
        burst_cooldown: float = BURST_COOLDOWN,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.min_interval = min_interval
        self.burst_every = burst_every
        self.burst_cooldown = burst_cooldown
        self._clock = clock
        self._sleep = sleep
        self.last_request_at: float | None = None
        self.request_count = 0

    def wait(self) -> None:
        """Block until the next outbound call is allowed, then record it."""
        if self.last_request_at is not None:
            elapsed = self._clock() - self.last_request_at
            if elapsed < self.min_interval:
                self._sleep(self.min_interval - elapsed)

        self.last_request_at = self._clock()
        self.request_count += 1

        if self.request_count % self.burst_every == 0:
            log.info(
                "iNaturalist API: %d requests made, pausing %.1fs",
                self.request_count,
                self.burst_cooldown,
            )
            self._sleep(self.burst_cooldown)


# =============================================================================
# Results
# =============================================================================


@dataclass
class PageResult:
    """One page of raw observation records."""

    records: list[dict[str, Any]]
    total: int
    page: int
    per_page: int
    total_pages: int


@dataclass
class FetchAllResult:
    """Records concatenated across every page fetched by ``request_all``."""

    records: list[dict[str, Any]] = field(default_factory=list)
    fetched_pages: int = 0

    @property
    def total(self) -> int:
        return len(self.records)


# =============================================================================
# Client
# =============================================================================


class ObservationClient:
    """Cached, rate-limited reader for ``/observations``."""

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        api_base: str = API_BASE,
        base_params: dict[str, Any] | None = None,
        rate_limiter: RateLimiter | None = None,
        cache: ResponseCache | None = None,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session if session is not None else create_session()
        self.api_base = api_base.rstrip("/")
        self.base_params = default_query_params() if base_params is None else base_params
        self.rate_limiter = rate_limiter if rate_limiter is not None else RateLimiter(clock=clock, sleep=sleep)
        self.cache = cache if cache is not None else ResponseCache(CACHE_TTL, clock=clock)
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> ObservationClient:
        return cls(
            create_session(timeout=settings.request_timeout),
            api_base=settings.api_base,
            base_params=default_query_params(
                iconic_taxa=settings.iconic_taxa,
                quality_grade=settings.quality_grade,
                per_page=settings.per_page,
            ),
            rate_limiter=RateLimiter(
                settings.min_request_interval,
                settings.burst_every,
                settings.burst_cooldown,
            ),
            cache=ResponseCache(settings.cache_ttl),
        )

    # -------------------------------------------------------------------
    # Request building
    # -------------------------------------------------------------------

    def build_url(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        *,
        include_base: bool = True,
    ) -> str:
        """Fully-resolved request URL; also serves as the cache key.

        Caller params override the base params. ``None`` values are
        dropped, lists are comma-joined, and keys are sorted so that
        equivalent queries produce identical URLs.
        """
        merged = {**self.base_params, **(params or {})} if include_base else dict(params or {})
        query: list[tuple[str, str]] = []
        for key in sorted(merged):
            value = merged[key]
            if value is None:
                continue
            if isinstance(value, list | tuple | set):
                value = ",".join(str(v) for v in value)
            query.append((key, str(value)))

        url = f"{self.api_base}/{endpoint.lstrip('/')}"
        prepared = requests.Request("GET", url, params=query).prepare()
        return prepared.url or url

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------

    def _get_json(self, url: str) -> Any:
        """GET a URL through the cache and rate limiter. No retries."""
        cached = self.cache.lookup(url)
        if cached is not None:
            log.debug("iNaturalist API: using cached data for %s", url)
            return cached.payload

        self.rate_limiter.wait()
        log.debug("iNaturalist API: fetching %s", url)
        try:
            resp = self.session.get(url)
        except requests.RequestException as exc:
            msg = f"API request failed: {exc}"
            raise FetchError(msg, url=url) from exc

        if not resp.ok:
            msg = f"API request failed: {resp.status_code} {resp.reason}"
            raise FetchError(msg, url=url, status_code=resp.status_code)

        try:
            data = resp.json()
        except ValueError as exc:
            msg = "API response body is not valid JSON"
            raise FetchError(msg, url=url, status_code=resp.status_code) from exc

        self.cache.put(url, data)
        return data

    # -------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------

    def request_page(self, params: dict[str, Any] | None = None) -> PageResult:
        """GET /observations for a single page."""
        url = self.build_url("observations", params)
        data = self._get_json(url)

        if not isinstance(data, dict):
            msg = f"Expected a JSON object, got {type(data).__name__}"
            raise MalformedResponseError(msg, url=url)
        records = data.get("results", [])
        if not isinstance(records, list):
            msg = f"Expected 'results' to be a list, got {type(records).__name__}"
            raise MalformedResponseError(msg, url=url)

        total = data.get("total_results") or 0
        page = data.get("page") or 1
        per_page = data.get("per_page") or self.base_params.get("per_page") or MAX_PER_PAGE
        if not all(isinstance(v, int) and not isinstance(v, bool) for v in (total, page, per_page)):
            msg = "Pagination fields 'total_results', 'page', 'per_page' must be integers"
            raise MalformedResponseError(msg, url=url)

        return PageResult(
            records=list(records),
            total=total,
            page=page,
            per_page=per_page,
            total_pages=math.ceil(total / per_page),
        )

    def request_all(self, params: dict[str, Any] | None = None, max_pages: int = 5) -> FetchAllResult:
        """
        Fetch pages 1..N sequentially.

        Stops at the reported last page, at the first empty page, or after
        ``max_pages``, whichever comes first. Any failed page raises and
        the pages already fetched in this call are discarded.
        """
        result = FetchAllResult()
        for page in range(1, max_pages + 1):
            page_result = self.request_page({**(params or {}), "page": page})
            result.records.extend(page_result.records)
            result.fetched_pages = page
            log.info(
                "iNaturalist: fetched page %d/%d, total observations: %d",
                page,
                min(page_result.total_pages, max_pages),
                len(result.records),
            )
            if not page_result.records or page >= page_result.total_pages:
                break
        return result

    def search_taxa(self, name: str, per_page: int = 10) -> list[dict[str, Any]]:
        """GET /taxa: search taxa by name."""
        url = self.build_url("taxa", {"q": name, "per_page": per_page}, include_base=False)
        data = self._get_json(url)
        if not isinstance(data, dict) or not isinstance(data.get("results", []), list):
            msg = "Expected a JSON object with a 'results' list"
            raise MalformedResponseError(msg, url=url)
        results: list[dict[str, Any]] = data.get("results", [])
        return results

    def clear_cache(self) -> None:
        self.cache.clear()
        log.info("iNaturalist API cache cleared")

    def stats(self) -> dict[str, Any]:
        """Request count, cache size and time of the last outbound call."""
        return {
            "request_count": self.rate_limiter.request_count,
            "cache_size": len(self.cache),
            "last_request_at": self.rate_limiter.last_request_at,
        }
