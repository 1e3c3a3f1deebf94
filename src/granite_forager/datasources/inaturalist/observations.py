"""Normalizing raw iNaturalist observation records."""

from __future__ import annotations

from datetime import date
from typing import Any

from granite_forager.schemas import Location, Observation, Photo, Taxon

# =============================================================================
# Field parsing
# =============================================================================


def _parse_coordinates(location: Any) -> tuple[float | None, float | None]:
    """Split a ``"lat,lng"`` string. Anything unparsable gives ``(None, None)``."""
    if not location:
        return None, None

    parts = str(location).split(",")
    if len(parts) != 2:
        return None, None

    try:
        lat = float(parts[0])
        lng = float(parts[1])
    except ValueError:
        return None, None
    return lat, lng


def _parse_date(value: Any) -> date | None:
    """Parse the ``YYYY-MM-DD`` prefix of a date or timestamp string."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def _parse_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return None


def _parse_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _parse_taxon(raw: Any) -> Taxon:
    if not isinstance(raw, dict):
        return Taxon()
    return Taxon(
        id=_parse_int(raw.get("id")),
        name=_parse_str(raw.get("name")),
        common_name=_parse_str(raw.get("preferred_common_name")),
        rank=_parse_str(raw.get("rank")),
    )


def _parse_photos(raw: Any) -> list[Photo]:
    if not isinstance(raw, list):
        return []
    return [
        Photo(
            id=_parse_int(p.get("id")),
            url=_parse_str(p.get("url")),
            square_url=_parse_str(p.get("square_url")),
            medium_url=_parse_str(p.get("medium_url")),
        )
        for p in raw
        if isinstance(p, dict)
    ]


# =============================================================================
# Public API
# =============================================================================


def normalize_record(obs: dict[str, Any]) -> Observation:
    """Convert one raw API record into an ``Observation``.

    Missing or malformed pieces become None/empty; this never raises for
    a dict input.
    """
    lat, lng = _parse_coordinates(obs.get("location"))
    user = obs.get("user") if isinstance(obs.get("user"), dict) else {}

    return Observation(
        id=_parse_int(obs.get("id")),
        taxon=_parse_taxon(obs.get("taxon")),
        location=Location(lat=lat, lng=lng, place_guess=_parse_str(obs.get("place_guess"))),
        observed_on=_parse_date(obs.get("observed_on")),
        created_at=_parse_str(obs.get("created_at")),
        quality_grade=_parse_str(obs.get("quality_grade")),
        identification_agreements=_parse_int(obs.get("num_identification_agreements")),
        photos=_parse_photos(obs.get("photos")),
        observer=_parse_str(user.get("login")),
    )


def normalize(raw_records: list[dict[str, Any]]) -> list[Observation]:
    """Normalize a batch of raw records, skipping entries that aren't objects."""
    return [normalize_record(obs) for obs in raw_records if isinstance(obs, dict)]
