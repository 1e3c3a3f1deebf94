"""Assign observations to counties by coordinate.

Counties are approximated by rectangles (see ``reference.geography``).
A point outside the study area is rejected before any county is tested;
otherwise the first rectangle in enumeration order that contains the
point wins.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from granite_forager.reference.geography import REGION_BOUNDARIES, STUDY_AREA, BoundingBox, RegionBoundary
from granite_forager.schemas import Observation

log = logging.getLogger(__name__)


class GeographicAssigner:
    """Ordered (county, rectangle) lookup with a whole-area pre-check."""

    def __init__(
        self,
        boundaries: Sequence[RegionBoundary] = REGION_BOUNDARIES,
        study_area: BoundingBox = STUDY_AREA,
    ) -> None:
        self.boundaries = tuple(boundaries)
        self.study_area = study_area

    def find_boundary(self, lat: float | None, lng: float | None) -> RegionBoundary | None:
        if lat is None or lng is None:
            return None
        if not self.study_area.contains(lat, lng):
            return None
        for boundary in self.boundaries:
            if boundary.bounds.contains(lat, lng):
                return boundary
        return None

    def assign_region(self, lat: float | None, lng: float | None) -> str | None:
        """County name for a coordinate, or None outside every rectangle."""
        boundary = self.find_boundary(lat, lng)
        return boundary.name if boundary else None

    def tag(self, observation: Observation) -> Observation:
        """Copy of the observation tagged with ``county`` and ``region`` (both None if unassigned)."""
        boundary = self.find_boundary(observation.location.lat, observation.location.lng)
        return observation.model_copy(
            update={
                "county": boundary.name if boundary else None,
                "region": boundary.region if boundary else None,
            }
        )

    def assign_all(self, observations: Iterable[Observation]) -> list[Observation]:
        """Tag every observation and keep only those that fall inside a county."""
        tagged = [self.tag(obs) for obs in observations]
        inside = [obs for obs in tagged if obs.county is not None]
        log.info("Found %d of %d observations within study area counties", len(inside), len(tagged))
        return inside
