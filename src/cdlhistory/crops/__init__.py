"""Crop taxonomy, accuracy estimates and history plausibility checks.

Everything in this package is pure and synchronous; the lookup tables are
read-only and built once at import.
"""

from cdlhistory.crops.accuracy import estimate_accuracy
from cdlhistory.crops.models import (
    CropTaxonomyEntry,
    HistoryObservation,
    HistorySummary,
    TransitionWarning,
    YearRecord,
)
from cdlhistory.crops.summary import summarize_history
from cdlhistory.crops.taxonomy import CROP_TAXONOMY, lookup, resolve
from cdlhistory.crops.transitions import (
    analyze_crop_history,
    attach_warnings,
    validate_transition,
)

__all__ = [
    "CROP_TAXONOMY",
    "CropTaxonomyEntry",
    "HistoryObservation",
    "HistorySummary",
    "TransitionWarning",
    "YearRecord",
    "analyze_crop_history",
    "attach_warnings",
    "estimate_accuracy",
    "lookup",
    "resolve",
    "summarize_history",
    "validate_transition",
]
