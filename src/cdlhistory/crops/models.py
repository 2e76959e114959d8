"""Data models for crop taxonomy and per-year history records."""

from __future__ import annotations

from pydantic import BaseModel, Field

from cdlhistory.core.types import CropType, WarningKind


class CropTaxonomyEntry(BaseModel):
    """Display name, render color and semantic type for one CDL code."""

    model_config = {"frozen": True}

    name: str
    color: str
    type: CropType


class HistoryObservation(BaseModel):
    """Minimal per-year input accepted by the history analyzer."""

    model_config = {"frozen": True}

    year: int
    crop_name: str
    crop_type: CropType | None = None
    confidence: int | None = Field(default=None, ge=0, le=100)


class YearRecord(BaseModel):
    """One enriched CDL observation for a single year at a single point."""

    model_config = {"frozen": True}

    year: int
    crop_code: int
    crop_name: str
    color: str
    crop_type: CropType
    confidence: int = Field(ge=0, le=100)
    transition_warning: str | None = None
    warnings: tuple[str, ...] = ()


class TransitionWarning(BaseModel):
    """A finding emitted by the history analyzer for one year."""

    model_config = {"frozen": True}

    year: int
    warning: str
    kind: WarningKind


class HistorySummary(BaseModel):
    """Aggregate statistics over an annotated history sequence."""

    years_with_data: int = 0
    first_year: int | None = None
    last_year: int | None = None
    type_counts: dict[str, int] = Field(default_factory=dict)
    crop_counts: dict[str, int] = Field(default_factory=dict)
    dominant_crop: str | None = None
    mean_confidence: float | None = None
    warning_years: list[int] = Field(default_factory=list)
    crop_changes: int = 0
