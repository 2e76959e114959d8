"""Rule-based plausibility checks over year-to-year crop sequences."""

from __future__ import annotations

from typing import Sequence

from cdlhistory.core.types import CropType, WarningKind
from cdlhistory.crops.models import HistoryObservation, TransitionWarning, YearRecord

LOW_CONFIDENCE_THRESHOLD = 50

_REMOVAL_TARGETS = frozenset({CropType.ANNUAL, CropType.PASTURE})
_PERSISTENT_LAND_COVER = frozenset({CropType.FOREST, CropType.DEVELOPED})


def _confidence_suffix(confidence: int | None) -> str:
    if confidence is None:
        return ""
    return f" ({confidence}% confidence)"


def validate_transition(
    from_type: CropType | None,
    to_type: CropType | None,
    from_name: str,
    to_name: str,
    confidence: int | None = None,
) -> str | None:
    """Check whether a change between two consecutive years is plausible.

    Rules are evaluated in order and the first match wins:

    1. Anything becoming a permanent crop (orchard, vineyard) is suspicious,
       since those take 3-7 years to establish.
    2. A permanent crop becoming an annual crop or pasture is suspicious.
    3. A change into forest or developed land is suspicious, since those are
       normally lasting land uses.

    Returns:
        A warning message, or None when the transition is unremarkable or
        either crop type is unknown.
    """
    if from_type is None or to_type is None:
        return None

    suffix = _confidence_suffix(confidence)

    if to_type == CropType.PERMANENT:
        return (
            f"{to_name} typically requires 3-7 years to establish. "
            f"Single-year detection may indicate misclassification{suffix}."
        )

    if from_type == CropType.PERMANENT and to_type in _REMOVAL_TARGETS:
        return (
            f"Unlikely transition from established {from_name} to {to_name}. "
            f"Permanent crops are not typically removed after establishment{suffix}."
        )

    if to_type in _PERSISTENT_LAND_COVER and from_type != to_type:
        return (
            f"Land use change to {to_name} is typically permanent. "
            f"Brief detection may indicate misclassification{suffix}."
        )

    return None


def analyze_crop_history(
    records: Sequence[HistoryObservation | YearRecord],
) -> list[TransitionWarning]:
    """Scan a crop history for implausible patterns.

    The records are ordered by ascending year before scanning, so adjacency
    always means the previous and next observed years. Each year is checked
    for:

    - a permanent crop whose neighbours on both sides are not permanent
      (a missing neighbour counts as different),
    - an implausible transition from the previous year (see
      ``validate_transition``),
    - a confidence below ``LOW_CONFIDENCE_THRESHOLD``.

    All findings are returned in scan order; a year may appear more than once.
    Missing crop types or confidences only switch the affected check off.
    Confidence is bounded to 0-100 by the input models, so an out-of-range
    value is rejected with ``ValidationError`` when the record is built,
    before it reaches this function.
    """
    ordered = sorted(records, key=lambda record: record.year)
    warnings: list[TransitionWarning] = []

    for i, current in enumerate(ordered):
        prev = ordered[i - 1] if i > 0 else None
        nxt = ordered[i + 1] if i < len(ordered) - 1 else None

        if current.crop_type == CropType.PERMANENT:
            prev_different = prev is None or prev.crop_type != CropType.PERMANENT
            next_different = nxt is None or nxt.crop_type != CropType.PERMANENT
            if prev_different and next_different:
                warnings.append(
                    TransitionWarning(
                        year=current.year,
                        kind=WarningKind.ISOLATED_PERMANENT,
                        warning=(
                            f"Single year of {current.crop_name} is highly unlikely. "
                            "Permanent crops take years to establish and produce"
                            f"{_confidence_suffix(current.confidence)}."
                        ),
                    )
                )

        if prev is not None:
            message = validate_transition(
                prev.crop_type,
                current.crop_type,
                prev.crop_name,
                current.crop_name,
                current.confidence,
            )
            if message:
                warnings.append(
                    TransitionWarning(
                        year=current.year,
                        kind=WarningKind.TRANSITION,
                        warning=message,
                    )
                )

        if current.confidence is not None and current.confidence < LOW_CONFIDENCE_THRESHOLD:
            warnings.append(
                TransitionWarning(
                    year=current.year,
                    kind=WarningKind.LOW_CONFIDENCE,
                    warning=(
                        f"Low confidence ({current.confidence}%) for "
                        f"{current.crop_name} classification."
                    ),
                )
            )

    return warnings


def attach_warnings(
    records: Sequence[YearRecord],
    warnings: Sequence[TransitionWarning],
) -> list[YearRecord]:
    """Return copies of *records* carrying the warnings found for their year.

    ``warnings`` keeps every finding for the year in scan order and
    ``transition_warning`` holds the last of them. Records without findings
    are returned unchanged. Input order is preserved.
    """
    by_year: dict[int, list[str]] = {}
    for finding in warnings:
        by_year.setdefault(finding.year, []).append(finding.warning)

    annotated: list[YearRecord] = []
    for record in records:
        messages = by_year.get(record.year)
        if not messages:
            annotated.append(record)
            continue
        annotated.append(
            record.model_copy(
                update={
                    "transition_warning": messages[-1],
                    "warnings": record.warnings + tuple(messages),
                }
            )
        )
    return annotated
