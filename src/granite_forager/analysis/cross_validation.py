"""Correlate user foraging reports with external observation patterns.

Both sources are reduced to season -> share distributions on the same
calendar. For every season where either side is nonzero the score is
``1 - |user - external|``; the correlation is the mean of those scores.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from granite_forager.analysis.patterns import seasonal_frequencies
from granite_forager.datasources.reports import UserReport
from granite_forager.reference.seasons import SEASONS
from granite_forager.schemas import CorrelationGrade, CrossValidationResult, Status, ValidationResult


def seasonal_correlation(user: Mapping[str, float], external: Mapping[str, float]) -> float:
    scores = [
        1 - abs(user.get(season, 0.0) - external.get(season, 0.0))
        for season in SEASONS
        if user.get(season, 0.0) > 0 or external.get(season, 0.0) > 0
    ]
    return sum(scores) / len(scores) if scores else 0.0


def correlation_grade(correlation: float) -> CorrelationGrade:
    if correlation > 0.7:
        return CorrelationGrade.HIGH
    if correlation > 0.4:
        return CorrelationGrade.MODERATE
    return CorrelationGrade.LOW


class CrossValidator:
    def cross_validate(
        self,
        species_key: str,
        user_reports: Sequence[UserReport],
        cached_result: ValidationResult | None,
    ) -> CrossValidationResult:
        """Needs both user reports and a successful validation for the same species."""
        if (
            not user_reports
            or cached_result is None
            or cached_result.species_key != species_key
            or cached_result.seasonal_analysis is None
        ):
            same_species = cached_result is not None and cached_result.species_key == species_key
            return CrossValidationResult(
                species_key=species_key,
                status=Status.INSUFFICIENT_DATA,
                user_report_count=len(user_reports),
                external_observation_count=cached_result.observation_count if same_species else 0,
            )

        user_freqs = seasonal_frequencies(r.month for r in user_reports)
        correlation = seasonal_correlation(user_freqs, cached_result.seasonal_analysis.frequencies)
        return CrossValidationResult(
            species_key=species_key,
            status=Status.SUCCESS,
            user_report_count=len(user_reports),
            external_observation_count=cached_result.observation_count,
            seasonal_correlation=correlation,
            correlation_grade=correlation_grade(correlation),
            user_frequencies=user_freqs,
        )
