"""
Prefect flow for validating several species in one run.

Run locally:
    python -m granite_forager.flows.validate morels chanterelles

Run with Prefect dashboard:
    prefect server start &
    python -m granite_forager.flows.validate morels
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from prefect import flow, task
from prefect.cache_policies import NO_CACHE

from granite_forager.config import get_settings
from granite_forager.datasources.inaturalist.client import date_range_params
from granite_forager.datasources.reports import ReportStore
from granite_forager.pipeline import ValidationPipeline
from granite_forager.predictors import TablePredictor
from granite_forager.schemas import CrossValidationResult, Status, ValidationResult


@task(name="validate-species", retries=0, cache_policy=NO_CACHE)
def validate_one(
    pipeline: ValidationPipeline, species_key: str, date_range: dict[str, Any]
) -> ValidationResult:
    """Fetch and validate one species. Fetch failures come back as status=error."""
    return pipeline.validate_species(species_key, date_range)


@task(name="cross-validate-species", retries=0, cache_policy=NO_CACHE)
def cross_validate_one(pipeline: ValidationPipeline, species_key: str) -> CrossValidationResult:
    return pipeline.cross_validate_species(species_key)


def summarize(result: ValidationResult, cross: CrossValidationResult | None) -> dict[str, Any]:
    comparison = result.model_comparison
    return {
        "status": str(result.status),
        "observation_count": result.observation_count,
        "low_sample_size": result.low_sample_size,
        "accuracy_grade": str(comparison.accuracy_grade) if comparison else None,
        "peak_season": result.seasonal_analysis.peak_season if result.seasonal_analysis else None,
        "recommendations": len(result.recommendations),
        "cross_validation": str(cross.status) if cross else None,
        "correlation_grade": str(cross.correlation_grade) if cross and cross.correlation_grade else None,
        "message": result.message,
    }


@flow(name="validate-species", log_prints=True)
def validate_all(
    species_keys: list[str],
    start: str | None = None,
    end: str | None = None,
    predictions_path: Path | None = None,
    reports_path: Path | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Validate each species against iNaturalist observations.

    Species are processed sequentially through a single pipeline so the
    client's rate limit and response cache are shared across the run.
    Cross-validation runs for species that validated successfully and
    have user reports.
    """
    settings = get_settings()
    predictor = TablePredictor.from_json(predictions_path) if predictions_path else TablePredictor()
    reports = ReportStore.from_json(reports_path) if reports_path else ReportStore()
    pipeline = ValidationPipeline.from_settings(settings, predictor, reports)

    date_range = date_range_params(start, end) if start and end else {}
    summary: dict[str, dict[str, Any]] = {}
    for species_key in species_keys:
        print(f"Validating {species_key}...")
        result = validate_one(pipeline, species_key, date_range)

        cross = None
        if result.status == Status.SUCCESS and reports.reports_for(species_key):
            cross = cross_validate_one(pipeline, species_key)

        summary[species_key] = summarize(result, cross)
        print(f"{species_key}: {result.status} ({result.observation_count} observations)")

    stats = pipeline.client.stats()
    print(f"Done. {stats['request_count']} API requests, {stats['cache_size']} cached responses.")
    return summary


if __name__ == "__main__":
    validate_all(sys.argv[1:] or ["morels"])
