"""Deterministic aggregate statistics over an annotated crop history."""

from __future__ import annotations

from collections import Counter
from typing import Sequence

from cdlhistory.crops.models import HistorySummary, YearRecord


def summarize_history(records: Sequence[YearRecord]) -> HistorySummary:
    """Summarize a history sequence for display next to the per-year list.

    The dominant crop is the one observed in the most years; ties go to the
    crop seen most recently. ``crop_changes`` counts adjacent observed years
    whose crop code differs.
    """
    if not records:
        return HistorySummary()

    ordered = sorted(records, key=lambda r: r.year)

    crop_counts = Counter(r.crop_name for r in ordered)
    type_counts = Counter(r.crop_type.value for r in ordered)

    last_seen = {r.crop_name: r.year for r in ordered}
    dominant_crop = max(crop_counts, key=lambda name: (crop_counts[name], last_seen[name]))

    crop_changes = sum(
        1 for prev, cur in zip(ordered, ordered[1:]) if prev.crop_code != cur.crop_code
    )
    mean_confidence = round(sum(r.confidence for r in ordered) / len(ordered), 1)

    return HistorySummary(
        years_with_data=len(ordered),
        first_year=ordered[0].year,
        last_year=ordered[-1].year,
        type_counts=dict(type_counts),
        crop_counts=dict(crop_counts),
        dominant_crop=dominant_crop,
        mean_confidence=mean_confidence,
        warning_years=[r.year for r in ordered if r.warnings],
        crop_changes=crop_changes,
    )
