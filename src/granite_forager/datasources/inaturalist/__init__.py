"""iNaturalist fungi observation data source.

Fetches research-grade fungi observations inside the New Hampshire study
area and normalizes them into ``Observation`` models.

Public API:
  - client: ObservationClient (rate-limited, cached, paginated), RateLimiter
  - observations: normalize, normalize_record
"""

from granite_forager.datasources.inaturalist.client import (
    FetchAllResult,
    ObservationClient,
    PageResult,
    RateLimiter,
    date_range_params,
    default_query_params,
    month_params,
)
from granite_forager.datasources.inaturalist.observations import normalize, normalize_record

__all__ = [
    "FetchAllResult",
    "ObservationClient",
    "PageResult",
    "RateLimiter",
    "date_range_params",
    "default_query_params",
    "month_params",
    "normalize",
    "normalize_record",
]
