"""Static reference data.

Tables that don't change with API calls: study-area and county bounds,
the season calendar, and the species taxonomy mapping.

Adding a new module:
1. Create ``reference/{name}.py`` with constants/dataclasses
2. Re-export from this ``__init__.py``
"""

from granite_forager.reference.geography import COUNTY_REGIONS as COUNTY_REGIONS
from granite_forager.reference.geography import REGION_BOUNDARIES as REGION_BOUNDARIES
from granite_forager.reference.geography import STUDY_AREA as STUDY_AREA
from granite_forager.reference.geography import BoundingBox as BoundingBox
from granite_forager.reference.geography import RegionBoundary as RegionBoundary
from granite_forager.reference.seasons import SEASONS as SEASONS
from granite_forager.reference.seasons import Season as Season
from granite_forager.reference.seasons import season_for_month as season_for_month
from granite_forager.reference.taxonomy import TAXONOMY as TAXONOMY
from granite_forager.reference.taxonomy import TaxonomyEntry as TaxonomyEntry
