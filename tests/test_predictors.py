"""
Tests for the exported-prediction table adapter.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from granite_forager.predictors import TablePredictor

if TYPE_CHECKING:
    from pathlib import Path

TABLE = {
    "default": 0.05,
    "species": {
        "morels": {
            "spring": {"White Mountains": 0.7, "*": 0.4},
            "fall": {"*": 0.1},
        }
    },
}


class TestTablePredictor:
    def test_region_match(self) -> None:
        predict = TablePredictor(species=TABLE["species"])
        assert predict("morels", {"season": "spring"}, "White Mountains") == 0.7

    def test_wildcard_region(self) -> None:
        predict = TablePredictor(species=TABLE["species"])
        assert predict("morels", {"season": "spring"}, "Seacoast") == 0.4
        assert predict("morels", {"season": "fall"}, None) == 0.1

    def test_default(self) -> None:
        predict = TablePredictor(species=TABLE["species"], default=0.05)
        assert predict("morels", {"season": "winter"}, "Seacoast") == 0.05
        assert predict("maitake", {"season": "fall"}, "Seacoast") == 0.05

    def test_empty_table(self) -> None:
        assert TablePredictor()("morels", {}, None) == 0.0

    def test_from_json(self, tmp_path: Path) -> None:
        path = tmp_path / "predictions.json"
        path.write_text(json.dumps(TABLE))

        predict = TablePredictor.from_json(path)

        assert predict.default == 0.05
        assert predict("morels", {"season": "spring"}, "White Mountains") == 0.7
