"""Resolve externally reported taxa onto internal species keys.

Resolution runs an ordered chain of matchers; the first one that returns
a match wins and later (weaker) matchers are never consulted:

    1. taxon ID            -> high
    2. scientific name     -> high
    3. common name         -> medium
    4. genus of sci. name  -> low

Observations no matcher accepts stay unmapped. They are excluded from
species analysis but kept for coverage reporting.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Protocol

from granite_forager.reference.taxonomy import TAXONOMY, TaxonomyEntry
from granite_forager.schemas import ConfidenceTier, MatchMethod, MatchResult, Observation, Taxon

log = logging.getLogger(__name__)

MIN_GENUS_LENGTH = 4  # shorter genus tokens are too ambiguous to match on


def _genus(name: str | None) -> str:
    """First whitespace-delimited token of a scientific name, lowercased."""
    if not name:
        return ""
    tokens = name.split()
    return tokens[0].lower() if tokens else ""


# =============================================================================
# Matchers
# =============================================================================


class Matcher(Protocol):
    def match(self, taxon: Taxon) -> MatchResult | None: ...


class TaxonIdMatcher:
    """Exact match on the external numeric taxon ID."""

    def __init__(self, entries: Iterable[TaxonomyEntry]) -> None:
        self.index = {tid: e.species_key for e in entries for tid in e.external_taxon_ids}

    def match(self, taxon: Taxon) -> MatchResult | None:
        if taxon.id is None or taxon.id not in self.index:
            return None
        return MatchResult(
            species_key=self.index[taxon.id],
            confidence=ConfidenceTier.HIGH,
            method=MatchMethod.TAXON_ID,
            matched_value=taxon.id,
        )


class ScientificNameMatcher:
    """Case-insensitive exact match on the reported scientific name."""

    def __init__(self, entries: Iterable[TaxonomyEntry]) -> None:
        self.index = {n.lower(): e.species_key for e in entries for n in e.scientific_names}

    def match(self, taxon: Taxon) -> MatchResult | None:
        if not taxon.name:
            return None
        key = self.index.get(taxon.name.lower())
        if key is None:
            return None
        return MatchResult(
            species_key=key,
            confidence=ConfidenceTier.HIGH,
            method=MatchMethod.SCIENTIFIC_NAME,
            matched_value=taxon.name,
        )


class CommonNameMatcher:
    """Case-insensitive exact match on the reported common name."""

    def __init__(self, entries: Iterable[TaxonomyEntry]) -> None:
        self.index = {n.lower(): e.species_key for e in entries for n in e.common_names}

    def match(self, taxon: Taxon) -> MatchResult | None:
        if not taxon.common_name:
            return None
        key = self.index.get(taxon.common_name.lower())
        if key is None:
            return None
        return MatchResult(
            species_key=key,
            confidence=ConfidenceTier.MEDIUM,
            method=MatchMethod.COMMON_NAME,
            matched_value=taxon.common_name,
        )


class GenusMatcher:
    """Match the genus token against the genus of every entry's scientific names.

    Entries are tried in table order; the first with a matching genus wins.
    """

    def __init__(self, entries: Iterable[TaxonomyEntry], min_length: int = MIN_GENUS_LENGTH) -> None:
        self.entries = tuple(entries)
        self.min_length = min_length

    def match(self, taxon: Taxon) -> MatchResult | None:
        genus = _genus(taxon.name)
        if len(genus) < self.min_length:
            return None
        for entry in self.entries:
            if any(_genus(name) == genus for name in entry.scientific_names):
                return MatchResult(
                    species_key=entry.species_key,
                    confidence=ConfidenceTier.LOW,
                    method=MatchMethod.GENUS_MATCH,
                    matched_value=(taxon.name or "").split()[0],
                )
        return None


def default_matchers(entries: Sequence[TaxonomyEntry]) -> list[Matcher]:
    """The standard chain, strongest first."""
    return [
        TaxonIdMatcher(entries),
        ScientificNameMatcher(entries),
        CommonNameMatcher(entries),
        GenusMatcher(entries),
    ]


# =============================================================================
# Mapper
# =============================================================================


@dataclass
class SpeciesGroups:
    """Observations partitioned by resolved species key."""

    mapped: dict[str, list[Observation]] = field(default_factory=dict)
    unmapped: list[Observation] = field(default_factory=list)

    @property
    def stats(self) -> dict[str, int]:
        mapped_count = sum(len(v) for v in self.mapped.values())
        return {
            "total_observations": mapped_count + len(self.unmapped),
            "mapped_observations": mapped_count,
            "unmapped_observations": len(self.unmapped),
            "mapped_species": len(self.mapped),
        }


class TaxonomyMapper:
    """Resolves observations to internal species keys via the matcher chain."""

    def __init__(
        self,
        entries: Sequence[TaxonomyEntry] = TAXONOMY,
        matchers: Sequence[Matcher] | None = None,
    ) -> None:
        self.entries = tuple(entries)
        self.matchers = list(matchers) if matchers is not None else default_matchers(self.entries)
        self._by_key = {e.species_key: e for e in self.entries}

    def resolve(self, observation: Observation) -> MatchResult | None:
        """First successful matcher wins; None if nothing matches."""
        for matcher in self.matchers:
            result = matcher.match(observation.taxon)
            if result is not None:
                return result
        return None

    def filter_by_species(self, observations: Iterable[Observation], species_key: str) -> list[Observation]:
        """Observations resolving to ``species_key``, tagged with their match."""
        matched: list[Observation] = []
        methods: dict[str, int] = {}
        for obs in observations:
            result = self.resolve(obs)
            if result is not None and result.species_key == species_key:
                matched.append(obs.model_copy(update={"match": result}))
                methods[result.method] = methods.get(result.method, 0) + 1

        log.debug("Match methods for %s: %s", species_key, methods)
        log.info("Mapped %d observations to %s", len(matched), species_key)
        return matched

    def group_by_species(self, observations: Iterable[Observation]) -> SpeciesGroups:
        groups = SpeciesGroups()
        for obs in observations:
            result = self.resolve(obs)
            if result is None:
                groups.unmapped.append(obs)
            else:
                groups.mapped.setdefault(result.species_key, []).append(
                    obs.model_copy(update={"match": result})
                )
        return groups

    def names_for(self, species_key: str) -> TaxonomyEntry | None:
        """All external names and IDs mapped onto a species key."""
        return self._by_key.get(species_key)

    def mapping_stats(self) -> dict[str, int]:
        return {
            "species_count": len(self.entries),
            "scientific_names_count": sum(len(e.scientific_names) for e in self.entries),
            "common_names_count": sum(len(e.common_names) for e in self.entries),
            "taxon_ids_count": sum(len(e.external_taxon_ids) for e in self.entries),
        }


# =============================================================================
# Coverage audit
# =============================================================================

_PARENTHESIZED = re.compile(r"\(([^)]+)\)")


def extract_scientific_name(display_name: str | None) -> str | None:
    """First scientific name from a ``"Common (Genus species, ...)"`` label."""
    if not display_name:
        return None
    m = _PARENTHESIZED.search(display_name)
    if not m:
        return None
    return m.group(1).split(",")[0].strip()


@dataclass
class CoverageReport:
    total_species: int
    mapped_species: int
    coverage_pct: float
    missing: list[dict[str, str | None]]
    extra: list[str]
    status: str
    priority: str

    @property
    def message(self) -> str:
        return f"{self.coverage_pct}% coverage - {len(self.missing)} species need mapping"


def _coverage_status(pct: float) -> str:
    if pct >= 90:
        return "excellent"
    if pct >= 75:
        return "good"
    if pct >= 50:
        return "fair"
    return "poor"


def coverage_report(
    catalog: Mapping[str, str],
    entries: Sequence[TaxonomyEntry] = TAXONOMY,
) -> CoverageReport:
    """Compare a species catalog (key -> display name) against the taxonomy table.

    ``missing`` lists catalog species with no taxonomy entry; ``extra`` lists
    taxonomy entries not in the catalog.
    """
    mapped_keys = {e.species_key for e in entries}
    missing = [
        {"key": key, "name": name, "scientific_name": extract_scientific_name(name)}
        for key, name in catalog.items()
        if key not in mapped_keys
    ]
    extra = [e.species_key for e in entries if e.species_key not in catalog]
    covered = len(catalog) - len(missing)
    pct = round(covered / len(catalog) * 100, 1) if catalog else 0.0

    return CoverageReport(
        total_species=len(catalog),
        mapped_species=covered,
        coverage_pct=pct,
        missing=missing,
        extra=extra,
        status=_coverage_status(pct),
        priority="high" if missing else "low",
    )
