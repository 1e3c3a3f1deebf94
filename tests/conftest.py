"""Shared fixtures: a controllable clock and a fake HTTP session."""

from __future__ import annotations

from typing import Any
from unittest.mock import Mock

import pytest


class FakeClock:
    """Monotonic clock whose ``sleep`` advances time instead of blocking."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(payload: Any = None, *, status: int = 200, reason: str = "OK") -> Mock:
    resp = Mock()
    resp.ok = 200 <= status < 400
    resp.status_code = status
    resp.reason = reason
    resp.json.return_value = payload
    return resp


def observations_payload(
    results: list[dict[str, Any]], *, total: int | None = None, page: int = 1, per_page: int = 200
) -> dict[str, Any]:
    return {
        "total_results": len(results) if total is None else total,
        "page": page,
        "per_page": per_page,
        "results": results,
    }


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session() -> Mock:
    s = Mock()
    s.get.return_value = make_response(observations_payload([]))
    return s
