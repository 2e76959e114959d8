"""Estimated classification accuracy per CDL code.

CropScape point queries do not return a per-pixel confidence, so the
published NASS CDL accuracy assessments stand in for it: explicit values
for well-studied codes, then a default per semantic crop type.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from cdlhistory.core.types import CropType
from cdlhistory.crops.taxonomy import crop_type_of

CROP_ACCURACY_ESTIMATES: Mapping[int, int] = MappingProxyType(
    {
        # Major row crops
        1: 90,  # Corn
        5: 90,  # Soybeans
        24: 88,  # Winter Wheat
        23: 87,  # Spring Wheat
        21: 85,  # Barley
        2: 82,  # Cotton
        3: 83,  # Rice
        4: 82,  # Sorghum
        6: 80,  # Sunflower
        22: 84,  # Durum Wheat
        27: 82,  # Rye
        28: 83,  # Oats
        31: 81,  # Canola
        # Hay, pulses, roots
        36: 75,  # Alfalfa
        37: 72,  # Other Hay/Non Alfalfa
        10: 78,  # Peanuts
        42: 76,  # Dry Beans
        43: 80,  # Potatoes
        176: 70,  # Grassland/Pasture
        59: 68,  # Sod/Grass Seed
        # Specialty vegetables, mixed signatures
        47: 65,  # Misc Vegs & Fruits
        54: 72,  # Tomatoes
        49: 68,  # Onions
        206: 70,  # Carrots
        214: 68,  # Broccoli
        227: 66,  # Lettuce
        # Orchards and vineyards
        69: 75,  # Grapes
        68: 78,  # Apples
        66: 76,  # Cherries
        67: 74,  # Peaches
        72: 80,  # Citrus
        75: 78,  # Almonds
        76: 77,  # Walnuts
        204: 75,  # Pistachios
        211: 76,  # Olives
        # Land cover
        63: 85,  # Forest
        141: 86,  # Deciduous Forest
        142: 88,  # Evergreen Forest
        82: 80,  # Developed
        83: 92,  # Water
        111: 95,  # Open Water
        121: 78,  # Developed/Open Space
        122: 80,  # Developed/Low Intensity
        123: 82,  # Developed/Med Intensity
        124: 85,  # Developed/High Intensity
        # Double crops
        26: 70,  # Dbl Crop WinWht/Soybeans
        225: 68,  # Dbl Crop WinWht/Corn
        226: 67,  # Dbl Crop Oats/Corn
        241: 72,  # Dbl Crop Corn/Soybeans
        # No data
        0: 50,
        81: 0,  # Clouds/No Data
    }
)

TYPE_ACCURACY_DEFAULTS: Mapping[CropType, int] = MappingProxyType(
    {
        CropType.ANNUAL: 75,
        CropType.PERENNIAL: 70,
        CropType.PERMANENT: 73,
        CropType.PASTURE: 68,
        CropType.FOREST: 85,
        CropType.DEVELOPED: 80,
        CropType.WATER: 92,
        CropType.OTHER: 65,
    }
)


def estimate_accuracy(code: int) -> int:
    """Estimated classification accuracy (0-100) for a CDL code.

    Args:
        code: CDL crop code.

    Returns:
        The tabulated estimate for the code when one exists, otherwise the
        default for the code's semantic crop type.
    """
    estimate = CROP_ACCURACY_ESTIMATES.get(code)
    if estimate is not None:
        return estimate
    return TYPE_ACCURACY_DEFAULTS[crop_type_of(code)]
