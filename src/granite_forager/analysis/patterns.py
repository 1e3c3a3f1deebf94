"""Seasonal and regional frequency patterns over an observation set.

Frequencies are bucket counts divided by the number of observations that
could be bucketed (dated ones for seasons, county-tagged ones for
regions), so each frequency map sums to 1.

Peak/top selection takes the strictly highest frequency; ties go to the
bucket that comes first in the fixed order (season calendar order,
county/region enumeration order).
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Any

from granite_forager.reference.geography import REGION_BOUNDARIES, REGIONS
from granite_forager.reference.seasons import SEASONS, season_for_month
from granite_forager.schemas import Observation, RegionalAnalysis, SeasonalAnalysis

COUNTY_ORDER: tuple[str, ...] = tuple(b.name for b in REGION_BOUNDARIES)


def _ordered_frequencies(counts: Counter[str], order: Sequence[str]) -> tuple[dict[str, int], dict[str, float]]:
    """Counts and frequencies keyed in ``order`` (then any unknown keys), nonzero buckets only."""
    total = sum(counts.values())
    keys = [str(k) for k in order if counts.get(k)] + sorted(k for k in counts if k not in order)
    ordered_counts = {k: counts[k] for k in keys}
    freqs = {k: n / total for k, n in ordered_counts.items()} if total else {}
    return ordered_counts, freqs


def top_bucket(frequencies: dict[str, float]) -> str | None:
    """Key with the strictly highest frequency; earliest key wins a tie."""
    best: str | None = None
    for key, freq in frequencies.items():
        if best is None or freq > frequencies[best]:
            best = key
    return best


def seasonal_frequencies(months: Iterable[int | None]) -> dict[str, float]:
    """Season -> share of dated items, for any iterable of months."""
    counts = Counter(str(s) for s in (season_for_month(m) for m in months) if s is not None)
    return _ordered_frequencies(counts, SEASONS)[1]


def analyze_seasonal(observations: Iterable[Observation]) -> SeasonalAnalysis:
    counts: Counter[str] = Counter()
    month_counts: dict[str, Counter[int]] = {}
    for obs in observations:
        season = season_for_month(obs.month)
        if season is None or obs.month is None:
            continue
        key = str(season)
        counts[key] += 1
        month_counts.setdefault(key, Counter())[obs.month] += 1

    ordered_counts, freqs = _ordered_frequencies(counts, SEASONS)
    return SeasonalAnalysis(
        total_observations=sum(counts.values()),
        counts=ordered_counts,
        month_counts={s: dict(sorted(month_counts[s].items())) for s in ordered_counts},
        frequencies=freqs,
        peak_season=top_bucket(freqs),
    )


def analyze_regional(observations: Iterable[Observation]) -> RegionalAnalysis:
    region_counts: Counter[str] = Counter()
    county_counts: Counter[str] = Counter()
    for obs in observations:
        if obs.county is None:
            continue
        county_counts[obs.county] += 1
        if obs.region is not None:
            region_counts[obs.region] += 1

    regions, region_freqs = _ordered_frequencies(region_counts, REGIONS)
    counties, county_freqs = _ordered_frequencies(county_counts, COUNTY_ORDER)
    return RegionalAnalysis(
        total_observations=sum(county_counts.values()),
        region_counts=regions,
        region_frequencies=region_freqs,
        county_counts=counties,
        county_frequencies=county_freqs,
        top_region=top_bucket(region_freqs),
        top_county=top_bucket(county_freqs),
    )


def summarize_patterns(observations: Sequence[Observation]) -> dict[str, Any]:
    """Monthly and per-taxon breakdown of an unfiltered observation set."""
    by_month: dict[int, list[Observation]] = {}
    by_taxon: dict[str, list[Observation]] = {}
    for obs in observations:
        if obs.month is not None:
            by_month.setdefault(obs.month, []).append(obs)
        by_taxon.setdefault(obs.taxon.name or "Unknown", []).append(obs)

    monthly = [
        {
            "month": month,
            "count": len(items),
            "species": len({o.taxon.name for o in items}),
        }
        for month, items in sorted(by_month.items())
    ]
    species = sorted(
        (
            {
                "species": name,
                "count": len(items),
                "common_name": items[0].taxon.common_name,
                "months": len({o.month for o in items if o.month is not None}),
            }
            for name, items in by_taxon.items()
        ),
        key=lambda s: s["count"],
        reverse=True,
    )
    return {
        "total_observations": len(observations),
        "unique_species": len(by_taxon),
        "monthly_breakdown": monthly,
        "species_breakdown": species,
    }
