"""
Domain models for the observation validation pipeline.

Pydantic models for normalized observations and for the results the
analysis layer produces. The normalizer converts raw API records into
``Observation``; everything downstream works on these models only.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Status / grades
# =============================================================================


class Status(StrEnum):
    """Terminal status of a validation or cross-validation run."""

    SUCCESS = "success"
    NO_DATA = "no_data"
    INSUFFICIENT_DATA = "insufficient_data"
    ERROR = "error"


class ConfidenceTier(StrEnum):
    """Strength of a taxonomy match, decided by which matcher succeeded."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class MatchMethod(StrEnum):
    TAXON_ID = "taxon_id"
    SCIENTIFIC_NAME = "scientific_name"
    COMMON_NAME = "common_name"
    GENUS_MATCH = "genus_match"


class AccuracyGrade(StrEnum):
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CorrelationGrade(StrEnum):
    HIGH = "high"
    MODERATE = "moderate"
    LOW = "low"


# =============================================================================
# Observations
# =============================================================================


class Taxon(BaseModel):
    """Taxon identity as reported by the external source."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str | None = None
    common_name: str | None = None
    rank: str | None = None


class Location(BaseModel):
    """Point location. Both coordinates are None when the source had none."""

    model_config = ConfigDict(frozen=True)

    lat: float | None = None
    lng: float | None = None
    place_guess: str | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


class Photo(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    url: str | None = None
    square_url: str | None = None
    medium_url: str | None = None


class MatchResult(BaseModel):
    """Outcome of resolving an observation onto an internal species key."""

    model_config = ConfigDict(frozen=True)

    species_key: str
    confidence: ConfidenceTier
    method: MatchMethod
    matched_value: int | str


class Observation(BaseModel):
    """A single species sighting, normalized from the external record.

    Instances are frozen. Geographic assignment and taxonomy filtering
    return tagged copies (``county``/``region``/``match``) rather than
    mutating in place.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    taxon: Taxon = Field(default_factory=Taxon)
    location: Location = Field(default_factory=Location)
    observed_on: date | None = None
    created_at: str | None = None
    quality_grade: str | None = None
    identification_agreements: int | None = None
    photos: list[Photo] = Field(default_factory=list)
    observer: str | None = None

    county: str | None = None
    region: str | None = None
    match: MatchResult | None = None

    @property
    def month(self) -> int | None:
        """Calendar month (1-12) of the observation date, if known."""
        return self.observed_on.month if self.observed_on else None


# =============================================================================
# Analysis results
# =============================================================================


class SeasonalAnalysis(BaseModel):
    """Season counts and empirical frequencies for one observation set."""

    total_observations: int
    counts: dict[str, int] = Field(default_factory=dict)
    month_counts: dict[str, dict[int, int]] = Field(default_factory=dict)
    frequencies: dict[str, float] = Field(default_factory=dict)
    peak_season: str | None = None


class RegionalAnalysis(BaseModel):
    """Region/county counts and empirical frequencies for one observation set."""

    total_observations: int
    region_counts: dict[str, int] = Field(default_factory=dict)
    region_frequencies: dict[str, float] = Field(default_factory=dict)
    county_counts: dict[str, int] = Field(default_factory=dict)
    county_frequencies: dict[str, float] = Field(default_factory=dict)
    top_region: str | None = None
    top_county: str | None = None


class ConditionComparison(BaseModel):
    """Model prediction vs. empirical frequency for one (season, county) condition."""

    season: str
    county: str
    region: str | None
    predicted: float
    empirical: float
    observation_count: int
    accuracy: float = Field(..., ge=0, le=1)


class ModelComparison(BaseModel):
    conditions: list[ConditionComparison] = Field(default_factory=list)
    average_accuracy: float = Field(..., ge=0, le=1)
    accuracy_grade: AccuracyGrade


class Recommendation(BaseModel):
    type: str
    priority: str
    message: str
    evidence: str


class ValidationResult(BaseModel):
    """Outcome of validating the probability model for one species."""

    species_key: str
    status: Status
    observation_count: int = 0
    data_source: str = "iNaturalist"
    date_range: dict[str, Any] = Field(default_factory=dict)
    low_sample_size: bool = False
    seasonal_analysis: SeasonalAnalysis | None = None
    regional_analysis: RegionalAnalysis | None = None
    model_comparison: ModelComparison | None = None
    recommendations: list[Recommendation] = Field(default_factory=list)
    message: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CrossValidationResult(BaseModel):
    """Agreement between user reports and external observations for one species."""

    species_key: str
    status: Status
    user_report_count: int = 0
    external_observation_count: int = 0
    seasonal_correlation: float | None = Field(default=None, ge=0, le=1)
    correlation_grade: CorrelationGrade | None = None
    user_frequencies: dict[str, float] = Field(default_factory=dict)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
