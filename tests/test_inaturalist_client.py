"""
Tests for the iNaturalist observation client: URL building, throttling,
caching, pagination and error handling.
"""

from __future__ import annotations

from unittest.mock import Mock
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from granite_forager.cache import ResponseCache
from granite_forager.config import Settings
from granite_forager.datasources.inaturalist.client import (
    MIN_REQUEST_INTERVAL,
    ObservationClient,
    RateLimiter,
    date_range_params,
    default_query_params,
    month_params,
)
from granite_forager.errors import FetchError, MalformedResponseError
from tests.conftest import FakeClock, make_response, observations_payload


def _client(session: Mock, clock: FakeClock, **kwargs: object) -> ObservationClient:
    return ObservationClient(session, clock=clock, sleep=clock.sleep, **kwargs)  # type: ignore[arg-type]


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


# =============================================================================
# Query building
# =============================================================================


class TestQueryParams:
    def test_default_params(self) -> None:
        params = default_query_params()
        assert params["iconic_taxa"] == "Fungi"
        assert params["quality_grade"] == "research"
        assert params["per_page"] == 200
        assert params["swlat"] == pytest.approx(42.6929)
        assert params["nelng"] == pytest.approx(-70.7341)

    def test_date_range_params(self) -> None:
        assert date_range_params("2024-05-01", "2024-05-31") == {"d1": "2024-05-01", "d2": "2024-05-31"}

    def test_month_params(self) -> None:
        assert month_params(2024, 9) == {"year": 2024, "month": 9}


class TestBuildUrl:
    def test_includes_base_params(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        url = client.build_url("observations", {"page": 2})
        q = _query(url)
        assert url.startswith("https://api.inaturalist.org/v1/observations?")
        assert q["iconic_taxa"] == ["Fungi"]
        assert q["page"] == ["2"]

    def test_caller_overrides_base(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        q = _query(client.build_url("observations", {"quality_grade": "needs_id"}))
        assert q["quality_grade"] == ["needs_id"]

    def test_drops_none_and_joins_lists(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        q = _query(client.build_url("observations", {"d1": None, "taxon_id": [47378, 47718]}))
        assert "d1" not in q
        assert q["taxon_id"] == ["47378,47718"]

    def test_key_order_independent(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        a = client.build_url("observations", {"d1": "2024-01-01", "page": 1})
        b = client.build_url("observations", {"page": 1, "d1": "2024-01-01"})
        assert a == b

    def test_without_base_params(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        q = _query(client.build_url("taxa", {"q": "Morchella"}, include_base=False))
        assert q == {"q": ["Morchella"]}


# =============================================================================
# Rate limiting
# =============================================================================


class TestRateLimiter:
    def test_first_call_does_not_wait(self, clock: FakeClock) -> None:
        limiter = RateLimiter(clock=clock, sleep=clock.sleep)
        limiter.wait()
        assert clock.sleeps == []
        assert limiter.request_count == 1

    def test_back_to_back_calls_wait_min_interval(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0.6, clock=clock, sleep=clock.sleep)
        limiter.wait()
        limiter.wait()
        assert clock.sleeps == [pytest.approx(0.6)]

    def test_only_remaining_gap_is_waited(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0.6, clock=clock, sleep=clock.sleep)
        limiter.wait()
        clock.advance(0.4)
        limiter.wait()
        assert clock.sleeps == [pytest.approx(0.2)]

    def test_no_wait_after_interval_elapsed(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0.6, clock=clock, sleep=clock.sleep)
        limiter.wait()
        clock.advance(5)
        limiter.wait()
        assert clock.sleeps == []

    def test_burst_cooldown_every_nth_call(self, clock: FakeClock) -> None:
        limiter = RateLimiter(min_interval=0.0, burst_every=3, burst_cooldown=2.0, clock=clock, sleep=clock.sleep)
        for _ in range(6):
            limiter.wait()
        assert clock.sleeps == [2.0, 2.0]


# =============================================================================
# request_page
# =============================================================================


class TestRequestPage:
    def test_parses_page(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response(
            observations_payload([{"id": 1}, {"id": 2}], total=450, page=1, per_page=200)
        )
        page = _client(session, clock).request_page({"page": 1})

        assert [r["id"] for r in page.records] == [1, 2]
        assert page.total == 450
        assert page.page == 1
        assert page.per_page == 200
        assert page.total_pages == 3

    def test_identical_params_hit_network_once(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        first = client.request_page({"d1": "2024-05-01"})
        second = client.request_page({"d1": "2024-05-01"})

        assert session.get.call_count == 1
        assert first == second

    def test_different_page_is_separate_cache_entry(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        client.request_page({"page": 1})
        client.request_page({"page": 2})
        assert session.get.call_count == 2

    def test_expired_cache_refetches(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock, cache=ResponseCache(ttl=3600, clock=clock))
        client.request_page({})
        clock.advance(3601)
        client.request_page({})
        assert session.get.call_count == 2

    def test_second_call_fires_after_min_delay(self, session: Mock, clock: FakeClock) -> None:
        fired_at: list[float] = []

        def _get(url: str) -> Mock:
            fired_at.append(clock())
            return make_response(observations_payload([]))

        session.get.side_effect = _get
        client = _client(session, clock)
        client.request_page({"page": 1})
        client.request_page({"page": 2})

        assert len(fired_at) == 2
        assert fired_at[1] - fired_at[0] >= MIN_REQUEST_INTERVAL

    def test_cache_hit_skips_rate_limiter(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        client.request_page({})
        client.request_page({})
        assert client.rate_limiter.request_count == 1
        assert clock.sleeps == []

    def test_http_error_raises_fetch_error(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response(None, status=503, reason="Service Unavailable")
        with pytest.raises(FetchError) as excinfo:
            _client(session, clock).request_page({})
        assert excinfo.value.status_code == 503
        assert "503" in str(excinfo.value)

    def test_transport_error_raises_fetch_error(self, session: Mock, clock: FakeClock) -> None:
        session.get.side_effect = requests.ConnectionError("connection reset")
        with pytest.raises(FetchError):
            _client(session, clock).request_page({})

    def test_unparsable_body_raises_fetch_error(self, session: Mock, clock: FakeClock) -> None:
        resp = make_response()
        resp.json.side_effect = ValueError("Expecting value")
        session.get.return_value = resp
        with pytest.raises(FetchError):
            _client(session, clock).request_page({})

    def test_failed_response_not_cached(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response(None, status=500, reason="Server Error")
        client = _client(session, clock)
        with pytest.raises(FetchError):
            client.request_page({})
        assert len(client.cache) == 0

    def test_non_object_body_is_malformed(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response([1, 2, 3])
        with pytest.raises(MalformedResponseError):
            _client(session, clock).request_page({})

    def test_results_not_list_is_malformed(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response({"total_results": 1, "results": {"id": 1}})
        with pytest.raises(MalformedResponseError):
            _client(session, clock).request_page({})

    def test_malformed_is_a_fetch_error(self) -> None:
        assert issubclass(MalformedResponseError, FetchError)

    def test_missing_pagination_fields_default(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response({"results": []})
        page = _client(session, clock).request_page({})
        assert page.total == 0
        assert page.page == 1
        assert page.total_pages == 0


# =============================================================================
# request_all
# =============================================================================


class TestRequestAll:
    def _pages(self, session: Mock, pages: list[list[dict]], total: int) -> None:
        session.get.side_effect = [
            make_response(observations_payload(records, total=total, page=i + 1, per_page=2))
            for i, records in enumerate(pages)
        ]

    def test_stops_at_total_pages(self, session: Mock, clock: FakeClock) -> None:
        self._pages(session, [[{"id": 1}, {"id": 2}], [{"id": 3}]], total=3)
        result = _client(session, clock).request_all({}, max_pages=5)

        assert [r["id"] for r in result.records] == [1, 2, 3]
        assert result.fetched_pages == 2
        assert result.total == 3
        assert session.get.call_count == 2

    def test_stops_at_empty_page(self, session: Mock, clock: FakeClock) -> None:
        self._pages(session, [[{"id": 1}, {"id": 2}], []], total=100)
        result = _client(session, clock).request_all({}, max_pages=5)

        assert result.fetched_pages == 2
        assert len(result.records) == 2

    def test_stops_at_max_pages(self, session: Mock, clock: FakeClock) -> None:
        self._pages(session, [[{"id": 1}, {"id": 2}], [{"id": 3}, {"id": 4}]], total=100)
        result = _client(session, clock).request_all({}, max_pages=2)

        assert result.fetched_pages == 2
        assert session.get.call_count == 2

    def test_requests_sequential_page_numbers(self, session: Mock, clock: FakeClock) -> None:
        self._pages(session, [[{"id": 1}, {"id": 2}], [{"id": 3}]], total=3)
        _client(session, clock).request_all({"d1": "2024-01-01"}, max_pages=5)

        pages = [_query(c.args[0])["page"] for c in session.get.call_args_list]
        assert pages == [["1"], ["2"]]

    def test_failure_propagates_without_partial_results(self, session: Mock, clock: FakeClock) -> None:
        session.get.side_effect = [
            make_response(observations_payload([{"id": 1}, {"id": 2}], total=10, per_page=2)),
            make_response(None, status=502, reason="Bad Gateway"),
        ]
        client = _client(session, clock)
        with pytest.raises(FetchError):
            client.request_all({}, max_pages=5)
        assert session.get.call_count == 2

    def test_pages_are_rate_limited(self, session: Mock, clock: FakeClock) -> None:
        self._pages(session, [[{"id": 1}, {"id": 2}], [{"id": 3}, {"id": 4}], [{"id": 5}]], total=5)
        _client(session, clock).request_all({}, max_pages=5)
        assert clock.sleeps == [pytest.approx(MIN_REQUEST_INTERVAL)] * 2


# =============================================================================
# Misc
# =============================================================================


class TestSearchTaxa:
    def test_returns_results(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response({"results": [{"id": 47378, "name": "Morchella"}]})
        results = _client(session, clock).search_taxa("Morchella")

        assert results == [{"id": 47378, "name": "Morchella"}]
        q = _query(session.get.call_args.args[0])
        assert q["q"] == ["Morchella"]
        assert "iconic_taxa" not in q


class TestStatsAndCache:
    def test_stats(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        client.request_page({})
        stats = client.stats()
        assert stats["request_count"] == 1
        assert stats["cache_size"] == 1
        assert stats["last_request_at"] == clock.now

    def test_clear_cache_forces_refetch(self, session: Mock, clock: FakeClock) -> None:
        client = _client(session, clock)
        client.request_page({})
        client.clear_cache()
        client.request_page({})
        assert session.get.call_count == 2

    def test_from_settings(self) -> None:
        settings = Settings(per_page=50, min_request_interval=1.5, burst_every=10, cache_ttl=60)
        client = ObservationClient.from_settings(settings)
        assert client.base_params["per_page"] == 50
        assert client.rate_limiter.min_interval == 1.5
        assert client.rate_limiter.burst_every == 10
        assert client.cache.ttl == 60

    def test_injected_empty_cache_is_kept(self, session: Mock, clock: FakeClock) -> None:
        shared = ResponseCache(ttl=60, clock=clock)
        client = _client(session, clock, cache=shared)
        assert client.cache is shared

        client.request_page({})
        assert len(shared) == 1

    def test_injected_rate_limiter_is_kept(self, session: Mock, clock: FakeClock) -> None:
        limiter = RateLimiter(clock=clock, sleep=clock.sleep)
        client = _client(session, clock, rate_limiter=limiter)
        assert client.rate_limiter is limiter

    def test_cached_null_body_is_a_hit(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response(None)
        client = _client(session, clock)

        with pytest.raises(MalformedResponseError):
            client.request_page({})
        with pytest.raises(MalformedResponseError):
            client.request_page({})
        assert session.get.call_count == 1

    def test_page_records_do_not_alias_cache(self, session: Mock, clock: FakeClock) -> None:
        session.get.return_value = make_response(observations_payload([{"id": 1}]))
        client = _client(session, clock)

        client.request_page({}).records.append({"id": 99})

        assert [r["id"] for r in client.request_page({}).records] == [1]
        assert session.get.call_count == 1
