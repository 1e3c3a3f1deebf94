"""Granite Forager - validates foraging predictions against citizen-science data.

Architecture::

    datasources/   External data (iNaturalist client + normalizer, user reports)
    cache.py       In-memory response cache with TTL
    reference/     Static tables (taxonomy, county boxes, season calendar)
    analysis/      Pure logic (taxonomy matching, region assignment, patterns,
                   model validation, cross-validation)
    pipeline.py    validate_species / cross_validate_species entry points
    flows/         Prefect orchestration for batch validation runs
    services/      Shared utilities (HTTP session)

Data flow: client -> normalizer -> geography -> taxonomy -> patterns
-> model validator -> cross validator.
"""

__version__ = "0.1.0"

from granite_forager.config import Settings
from granite_forager.pipeline import ValidationPipeline
from granite_forager.schemas import CrossValidationResult, Observation, ValidationResult

__all__ = [
    "CrossValidationResult",
    "Observation",
    "Settings",
    "ValidationPipeline",
    "ValidationResult",
    "__version__",
]
