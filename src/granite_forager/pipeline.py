"""
Observation validation pipeline.

Inbound entry points used by the UI layer:

- ``validate_species(species_key, date_range)``: fetch -> normalize ->
  assign counties -> resolve taxonomy -> patterns -> model comparison.
- ``cross_validate_species(species_key)``: compare the cached validation
  for a species with independent user reports.

Fetch failures never escape ``validate_species``; they come back as a
result with ``status="error"``. Callers branch on ``status``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from granite_forager.analysis.cross_validation import CrossValidator
from granite_forager.analysis.geography import GeographicAssigner
from granite_forager.analysis.taxonomy import TaxonomyMapper
from granite_forager.analysis.validation import ModelValidator, Predictor
from granite_forager.datasources.inaturalist.client import ObservationClient
from granite_forager.datasources.inaturalist.observations import normalize
from granite_forager.errors import FetchError
from granite_forager.schemas import CrossValidationResult, Status, ValidationResult

if TYPE_CHECKING:
    from granite_forager.config import Settings
    from granite_forager.datasources.reports import UserReport

log = logging.getLogger(__name__)

DEFAULT_MAX_PAGES = 3


class ReportSource(Protocol):
    def reports_for(self, species_key: str) -> list[UserReport]: ...


class ValidationPipeline:
    """Wires the client, normalizer and analysis stages together.

    Keeps the latest ``ValidationResult`` per species in memory; each run
    overwrites the previous one for that species.
    """

    def __init__(
        self,
        client: ObservationClient,
        predict: Predictor,
        reports: ReportSource | None = None,
        *,
        mapper: TaxonomyMapper | None = None,
        assigner: GeographicAssigner | None = None,
        validator: ModelValidator | None = None,
        cross_validator: CrossValidator | None = None,
        max_pages: int = DEFAULT_MAX_PAGES,
    ) -> None:
        self.client = client
        self.predict = predict
        self.reports = reports
        self.mapper = mapper or TaxonomyMapper()
        self.assigner = assigner or GeographicAssigner()
        self.validator = validator or ModelValidator()
        self.cross_validator = cross_validator or CrossValidator()
        self.max_pages = max_pages
        self._results: dict[str, ValidationResult] = {}

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        predict: Predictor,
        reports: ReportSource | None = None,
    ) -> ValidationPipeline:
        return cls(
            ObservationClient.from_settings(settings),
            predict,
            reports,
            max_pages=settings.max_pages,
        )

    def validate_species(self, species_key: str, date_range: dict[str, Any] | None = None) -> ValidationResult:
        params = dict(date_range or {})
        log.info("Starting validation for %s", species_key)

        try:
            fetched = self.client.request_all(params, max_pages=self.max_pages)
        except FetchError as exc:
            log.error("Validation error for %s: %s", species_key, exc)
            result = ValidationResult(
                species_key=species_key,
                status=Status.ERROR,
                date_range=params,
                message=str(exc),
            )
            self._results[species_key] = result
            return result

        log.info("Retrieved %d observations in %d pages", fetched.total, fetched.fetched_pages)
        observations = normalize(fetched.records)
        in_area = self.assigner.assign_all(observations)
        matched = self.mapper.filter_by_species(in_area, species_key)

        result = self.validator.validate(species_key, matched, self.predict, date_range=params)
        self._results[species_key] = result
        return result

    def cross_validate_species(self, species_key: str) -> CrossValidationResult:
        user_reports = self.reports.reports_for(species_key) if self.reports is not None else []
        return self.cross_validator.cross_validate(species_key, user_reports, self._results.get(species_key))

    def result_for(self, species_key: str) -> ValidationResult | None:
        return self._results.get(species_key)

    def all_results(self) -> dict[str, ValidationResult]:
        return dict(self._results)

    def clear(self) -> None:
        """Drop cached validation results and cached API responses."""
        self._results.clear()
        self.client.clear_cache()
