"""Core type definitions shared across cdlhistory modules."""

from __future__ import annotations

from enum import StrEnum


class CropType(StrEnum):
    """Coarse semantic category layered over raw CDL crop codes."""

    ANNUAL = "annual"
    PERENNIAL = "perennial"
    PERMANENT = "permanent"
    PASTURE = "pasture"
    FOREST = "forest"
    DEVELOPED = "developed"
    WATER = "water"
    OTHER = "other"


class WarningKind(StrEnum):
    """Which history check produced a warning."""

    ISOLATED_PERMANENT = "isolated_permanent"
    TRANSITION = "transition"
    LOW_CONFIDENCE = "low_confidence"


# CDL codes that mean "nothing classified here this year".
NO_DATA_CODE = 0
CLOUDS_NO_DATA_CODE = 81
NO_DATA_CODES: frozenset[int] = frozenset({NO_DATA_CODE, CLOUDS_NO_DATA_CODE})
