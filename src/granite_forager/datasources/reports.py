"""User foraging reports.

Reports are collected by the reporting subsystem (outside this package)
and exported as a JSON list. ``ReportStore`` is the read side used for
cross-validation: ``reports_for(species_key)``.
"""

from __future__ import annotations

import datetime as dt
import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator


class UserReport(BaseModel):
    """One foraging attempt logged by a user."""

    id: str | None = None
    date: dt.date | None = None
    county: str = ""
    species: str = ""
    predicted_probability: float = Field(default=0.0, ge=0, le=1)
    actual_success: bool = False
    quantity_found: Literal["none", "light", "moderate", "heavy"] = "none"
    confidence_level: Literal["low", "medium", "high"] = "medium"
    weather_conditions: dict[str, Any] = Field(default_factory=dict)
    user_notes: str = ""

    @field_validator("date", mode="before")
    @classmethod
    def _date_prefix(cls, value: Any) -> Any:
        # Exports sometimes carry full timestamps; the calendar date is what matters.
        if isinstance(value, str):
            return value[:10] or None
        return value

    @property
    def month(self) -> int | None:
        return self.date.month if self.date else None


_REPORT_LIST = TypeAdapter(list[UserReport])


class ReportStore:
    """In-memory collection of user reports."""

    def __init__(self, reports: list[UserReport] | None = None) -> None:
        self._reports: list[UserReport] = list(reports or [])

    @classmethod
    def from_json(cls, path: Path) -> ReportStore:
        """Load a JSON export (a list of report objects)."""
        with path.open() as f:
            data = json.load(f)
        return cls(_REPORT_LIST.validate_python(data))

    def add(self, report: UserReport | dict[str, Any]) -> UserReport:
        if isinstance(report, dict):
            report = UserReport.model_validate(report)
        self._reports.append(report)
        return report

    def all(self) -> list[UserReport]:
        return list(self._reports)

    def reports_for(self, species_key: str) -> list[UserReport]:
        return [r for r in self._reports if r.species == species_key]

    def reports_for_county(self, county: str) -> list[UserReport]:
        return [r for r in self._reports if r.county == county]

    def __len__(self) -> int:
        return len(self._reports)
