"""Score the probability model against empirical observation frequencies.

For a handful of sampled (season, county) conditions the model's
predicted probability is compared with the share of the species'
observations that fall in exactly that season and county:

    accuracy = 1 - |predicted - empirical|      if predicted > 0
             = 1 if empirical == 0 else 0       if predicted == 0

The mean over all conditions is graded excellent/good/fair/poor and
drives the recommendations.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from granite_forager.analysis.patterns import analyze_regional, analyze_seasonal
from granite_forager.reference.geography import COUNTY_REGIONS
from granite_forager.reference.seasons import Season, season_for_month
from granite_forager.schemas import (
    AccuracyGrade,
    ConditionComparison,
    ModelComparison,
    Observation,
    Recommendation,
    RegionalAnalysis,
    SeasonalAnalysis,
    Status,
    ValidationResult,
)

log = logging.getLogger(__name__)

#: ``predict(species_key, weather_conditions, region) -> probability in [0, 1]``
Predictor = Callable[[str, dict[str, Any], str | None], float]

LOW_SAMPLE_SIZE = 10
PEAK_SEASON_MIN_ACCURACY = 0.7
MODEL_MIN_ACCURACY = 0.6


@dataclass(frozen=True)
class SampleCondition:
    season: str
    county: str


SAMPLE_CONDITIONS: tuple[SampleCondition, ...] = (
    SampleCondition(Season.SPRING, "grafton"),
    SampleCondition(Season.SUMMER, "coos"),
    SampleCondition(Season.FALL, "merrimack"),
    SampleCondition(Season.FALL, "cheshire"),
)


def condition_accuracy(predicted: float, empirical: float) -> float:
    if predicted > 0:
        return 1 - abs(predicted - empirical)
    return 1.0 if empirical == 0 else 0.0


def accuracy_grade(accuracy: float) -> AccuracyGrade:
    if accuracy > 0.8:
        return AccuracyGrade.EXCELLENT
    if accuracy > 0.6:
        return AccuracyGrade.GOOD
    if accuracy > 0.4:
        return AccuracyGrade.FAIR
    return AccuracyGrade.POOR


def _pct(value: float) -> int:
    return round(value * 100)


class ModelValidator:
    """Compares ``predict`` output with observed seasonal/regional frequencies."""

    def __init__(
        self,
        conditions: Sequence[SampleCondition] = SAMPLE_CONDITIONS,
        weather: Mapping[str, Any] | None = None,
        county_regions: Mapping[str, str] = COUNTY_REGIONS,
    ) -> None:
        self.conditions = tuple(conditions)
        self.weather = dict(weather or {})
        self.county_regions = county_regions

    def compare_with_model(
        self,
        species_key: str,
        observations: Sequence[Observation],
        predict: Predictor,
    ) -> ModelComparison:
        total = len(observations)
        rows: list[ConditionComparison] = []
        for condition in self.conditions:
            region = self.county_regions.get(condition.county)
            weather = {**self.weather, "season": condition.season}
            raw = float(predict(species_key, weather, region))
            predicted = min(max(raw, 0.0), 1.0)
            if predicted != raw:
                log.warning("Prediction %.3f for %s outside [0, 1], clamped", raw, species_key)

            matching = sum(
                1
                for obs in observations
                if season_for_month(obs.month) == condition.season and obs.county == condition.county
            )
            empirical = matching / total if total else 0.0
            rows.append(
                ConditionComparison(
                    season=condition.season,
                    county=condition.county,
                    region=region,
                    predicted=predicted,
                    empirical=empirical,
                    observation_count=matching,
                    accuracy=condition_accuracy(predicted, empirical),
                )
            )

        average = sum(r.accuracy for r in rows) / len(rows) if rows else 0.0
        return ModelComparison(conditions=rows, average_accuracy=average, accuracy_grade=accuracy_grade(average))

    def recommendations(
        self,
        seasonal: SeasonalAnalysis,
        regional: RegionalAnalysis,
        comparison: ModelComparison,
    ) -> list[Recommendation]:
        recs: list[Recommendation] = []

        peak = seasonal.peak_season
        if peak:
            peak_row = next((r for r in comparison.conditions if r.season == peak), None)
            if peak_row is not None and peak_row.accuracy < PEAK_SEASON_MIN_ACCURACY:
                recs.append(
                    Recommendation(
                        type="seasonal_adjustment",
                        priority="high",
                        message=f"Consider increasing {peak} multiplier - observations show this as peak season",
                        evidence=f"{_pct(seasonal.frequencies[peak])}% of observations occur in {peak}",
                    )
                )

        top = regional.top_region
        if top:
            recs.append(
                Recommendation(
                    type="regional_validation",
                    priority="medium",
                    message=f"{top} shows highest observation frequency",
                    evidence=f"{_pct(regional.region_frequencies[top])}% of observations in this region",
                )
            )

        if comparison.average_accuracy < MODEL_MIN_ACCURACY:
            recs.append(
                Recommendation(
                    type="model_accuracy",
                    priority="high",
                    message="Model accuracy is below 60% - consider updating multipliers",
                    evidence=f"Average accuracy: {_pct(comparison.average_accuracy)}%",
                )
            )
        return recs

    def validate(
        self,
        species_key: str,
        observations: Sequence[Observation],
        predict: Predictor,
        *,
        date_range: Mapping[str, Any] | None = None,
    ) -> ValidationResult:
        """Full validation for one species' county-tagged observations."""
        if not observations:
            return ValidationResult(
                species_key=species_key,
                status=Status.NO_DATA,
                date_range=dict(date_range or {}),
                message=f"No observations found for {species_key} in the study area",
            )

        low_sample = len(observations) < LOW_SAMPLE_SIZE
        if low_sample:
            log.warning(
                "Small sample size: only %d observations for %s. Results may be less reliable.",
                len(observations),
                species_key,
            )

        seasonal = analyze_seasonal(observations)
        regional = analyze_regional(observations)
        comparison = self.compare_with_model(species_key, observations, predict)

        return ValidationResult(
            species_key=species_key,
            status=Status.SUCCESS,
            observation_count=len(observations),
            date_range=dict(date_range or {}),
            low_sample_size=low_sample,
            seasonal_analysis=seasonal,
            regional_analysis=regional,
            model_comparison=comparison,
            recommendations=self.recommendations(seasonal, regional, comparison),
        )
