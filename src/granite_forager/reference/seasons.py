"""Fixed month -> season calendar shared by every seasonal analysis."""

from __future__ import annotations

from enum import StrEnum


class Season(StrEnum):
    SPRING = "spring"
    SUMMER = "summer"
    FALL = "fall"
    WINTER = "winter"


# Canonical iteration order; also the tie-break order for peak selection.
SEASONS: tuple[Season, ...] = (Season.SPRING, Season.SUMMER, Season.FALL, Season.WINTER)

MONTH_TO_SEASON: dict[int, Season] = {
    12: Season.WINTER,
    1: Season.WINTER,
    2: Season.WINTER,
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.FALL,
    10: Season.FALL,
    11: Season.FALL,
}


def season_for_month(month: int | None) -> Season | None:
    """Season for a calendar month (1-12); None for a missing or invalid month."""
    if month is None:
        return None
    return MONTH_TO_SEASON.get(month)
