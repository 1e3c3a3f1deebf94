"""Adapters that expose an exported probability model as a ``predict`` callable.

The probability model lives outside this package. When it isn't importable
(CLI runs, batch flows) its predictions can be exported as a JSON table::

    {
      "default": 0.0,
      "species": {
        "morels": {"spring": {"White Mountains": 0.7, "*": 0.4}, "fall": {"*": 0.05}}
      }
    }

``"*"`` matches any region. Missing entries fall back to ``default``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

WILDCARD = "*"


@dataclass
class TablePredictor:
    """species -> season -> region -> probability lookup."""

    species: dict[str, dict[str, dict[str, float]]] = field(default_factory=dict)
    default: float = 0.0

    @classmethod
    def from_json(cls, path: Path) -> TablePredictor:
        with path.open() as f:
            data: dict[str, Any] = json.load(f)
        return cls(species=data.get("species", {}), default=float(data.get("default", 0.0)))

    def __call__(self, species_key: str, weather: dict[str, Any], region: str | None) -> float:
        by_season = self.species.get(species_key, {}).get(str(weather.get("season", "")), {})
        if region is not None and region in by_season:
            return float(by_season[region])
        return float(by_season.get(WILDCARD, self.default))
