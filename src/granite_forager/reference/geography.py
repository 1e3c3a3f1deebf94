"""Geographic bounds for the New Hampshire study area and its counties.

County shapes are approximated by lat/lng rectangles. Some rectangles
overlap along shared borders (e.g. Sullivan/Cheshire); the order of
``REGION_BOUNDARIES`` decides which county wins a point in the overlap.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BoundingBox:
    """N/S/E/W lat-lng rectangle, edges inclusive."""

    north: float
    south: float
    east: float
    west: float

    def contains(self, lat: float, lng: float) -> bool:
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def as_query_params(self) -> dict[str, float]:
        """Return iNaturalist ``swlat/swlng/nelat/nelng`` query parameters."""
        return {"swlat": self.south, "swlng": self.west, "nelat": self.north, "nelng": self.east}


@dataclass(frozen=True)
class RegionBoundary:
    """A county approximated by a rectangle, plus the broader region it belongs to."""

    name: str
    label: str
    region: str
    bounds: BoundingBox


# Whole-state box: used for API queries and to reject points before county lookup
STUDY_AREA = BoundingBox(north=45.3057, south=42.6929, east=-70.7341, west=-72.5570)

# Evaluation order matters: first containing rectangle wins.
REGION_BOUNDARIES: tuple[RegionBoundary, ...] = (
    RegionBoundary(
        "coos", "Coos County", "Great North Woods",
        BoundingBox(north=45.3057, south=44.3895, east=-70.8737, west=-71.6056),
    ),
    RegionBoundary(
        "grafton", "Grafton County", "White Mountains",
        BoundingBox(north=44.3895, south=43.5284, east=-71.4703, west=-72.5570),
    ),
    RegionBoundary(
        "carroll", "Carroll County", "White Mountains",
        BoundingBox(north=44.3895, south=43.5284, east=-70.8737, west=-71.4703),
    ),
    RegionBoundary(
        "sullivan", "Sullivan County", "Dartmouth-Sunapee",
        BoundingBox(north=43.5284, south=42.9335, east=-71.8761, west=-72.5570),
    ),
    RegionBoundary(
        "merrimack", "Merrimack County", "Merrimack Valley",
        BoundingBox(north=43.5284, south=42.9335, east=-71.4703, west=-71.8761),
    ),
    RegionBoundary(
        "belknap", "Belknap County", "Lakes Region",
        BoundingBox(north=43.5284, south=43.1979, east=-71.1814, west=-71.4703),
    ),
    RegionBoundary(
        "cheshire", "Cheshire County", "Monadnock Region",
        BoundingBox(north=43.2081, south=42.6929, east=-71.8761, west=-72.5570),
    ),
    RegionBoundary(
        "hillsborough", "Hillsborough County", "Merrimack Valley",
        BoundingBox(north=43.2081, south=42.6929, east=-71.4703, west=-71.8761),
    ),
    RegionBoundary(
        "strafford", "Strafford County", "Seacoast",
        BoundingBox(north=43.5284, south=43.1979, east=-70.7341, west=-71.1814),
    ),
    RegionBoundary(
        "rockingham", "Rockingham County", "Seacoast",
        BoundingBox(north=43.1979, south=42.6929, east=-70.7341, west=-71.4703),
    ),
)

BOUNDARIES_BY_NAME: dict[str, RegionBoundary] = {b.name: b for b in REGION_BOUNDARIES}

COUNTY_REGIONS: dict[str, str] = {b.name: b.region for b in REGION_BOUNDARIES}

# Distinct regions in first-seen county order
REGIONS: tuple[str, ...] = tuple(dict.fromkeys(b.region for b in REGION_BOUNDARIES))
