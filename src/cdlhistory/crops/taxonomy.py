"""Static CDL crop taxonomy: code -> name, render color, semantic crop type.

Codes and colors follow the USDA NASS Cropland Data Layer legend; see
https://www.nass.usda.gov/Research_and_Science/Cropland/sarsfaqs2.php#Section1_14.0
for the full code list. Codes not in the table resolve through ``resolve()``
to an ``Unknown (<code>)`` entry of type ``CropType.OTHER``.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from cdlhistory.core.types import CropType
from cdlhistory.crops.models import CropTaxonomyEntry

FALLBACK_COLOR = "#cccccc"
FALLBACK_TYPE = CropType.OTHER

_ROWS: dict[int, tuple[str, str, CropType]] = {
    1: ("Corn", "#ffd300", CropType.ANNUAL),
    2: ("Cotton", "#ff2626", CropType.ANNUAL),
    3: ("Rice", "#00a8e5", CropType.ANNUAL),
    4: ("Sorghum", "#ff9e0c", CropType.ANNUAL),
    5: ("Soybeans", "#267000", CropType.ANNUAL),
    6: ("Sunflower", "#ffff00", CropType.ANNUAL),
    10: ("Peanuts", "#70a800", CropType.ANNUAL),
    11: ("Tobacco", "#00af49", CropType.ANNUAL),
    12: ("Sweet Corn", "#ffd300", CropType.ANNUAL),
    13: ("Pop or Orn Corn", "#ffd300", CropType.ANNUAL),
    14: ("Mint", "#00af49", CropType.PERENNIAL),
    21: ("Barley", "#ffd300", CropType.ANNUAL),
    22: ("Durum Wheat", "#e2007c", CropType.ANNUAL),
    23: ("Spring Wheat", "#896054", CropType.ANNUAL),
    24: ("Winter Wheat", "#d8b56b", CropType.ANNUAL),
    25: ("Other Small Grains", "#a57000", CropType.ANNUAL),
    26: ("Dbl Crop WinWht/Soybeans", "#d69ebc", CropType.ANNUAL),
    27: ("Rye", "#707000", CropType.ANNUAL),
    28: ("Oats", "#ab6c00", CropType.ANNUAL),
    29: ("Millet", "#b29200", CropType.ANNUAL),
    30: ("Speltz", "#a57000", CropType.ANNUAL),
    31: ("Canola", "#ffd300", CropType.ANNUAL),
    32: ("Flaxseed", "#a800e5", CropType.ANNUAL),
    33: ("Safflower", "#ff6666", CropType.ANNUAL),
    34: ("Rape Seed", "#ff6666", CropType.ANNUAL),
    35: ("Mustard", "#ffcc66", CropType.ANNUAL),
    36: ("Alfalfa", "#ff00ff", CropType.PERENNIAL),
    37: ("Other Hay/Non Alfalfa", "#e57ae5", CropType.PERENNIAL),
    38: ("Camelina", "#ffcc00", CropType.ANNUAL),
    39: ("Buckwheat", "#e56300", CropType.ANNUAL),
    41: ("Sugarbeets", "#ff2626", CropType.ANNUAL),
    42: ("Dry Beans", "#70a800", CropType.ANNUAL),
    43: ("Potatoes", "#ffae42", CropType.ANNUAL),
    44: ("Other Crops", "#ffd300", CropType.ANNUAL),
    45: ("Sugarcane", "#a800e5", CropType.PERENNIAL),
    46: ("Sweet Potatoes", "#ff6666", CropType.ANNUAL),
    47: ("Misc Vegs & Fruits", "#ffae42", CropType.ANNUAL),
    48: ("Watermelons", "#ff6666", CropType.ANNUAL),
    49: ("Onions", "#ffae42", CropType.ANNUAL),
    50: ("Cucumbers", "#70a800", CropType.ANNUAL),
    51: ("Chick Peas", "#ff8c00", CropType.ANNUAL),
    52: ("Lentils", "#d68900", CropType.ANNUAL),
    53: ("Peas", "#00af49", CropType.ANNUAL),
    54: ("Tomatoes", "#ff2626", CropType.ANNUAL),
    55: ("Caneberries", "#ff6666", CropType.PERENNIAL),
    56: ("Hops", "#00af49", CropType.PERENNIAL),
    57: ("Herbs", "#00af49", CropType.PERENNIAL),
    58: ("Clover/Wildflowers", "#ffc0e5", CropType.PERENNIAL),
    59: ("Sod/Grass Seed", "#00af49", CropType.PASTURE),
    60: ("Switchgrass", "#ddc91b", CropType.PERENNIAL),
    61: ("Fallow/Idle Cropland", "#896054", CropType.OTHER),
    63: ("Forest", "#004d00", CropType.FOREST),
    64: ("Shrubland", "#d69ebc", CropType.OTHER),
    65: ("Barren", "#ff6666", CropType.OTHER),
    66: ("Cherries", "#ff0000", CropType.PERMANENT),
    67: ("Peaches", "#ff6666", CropType.PERMANENT),
    68: ("Apples", "#ff0000", CropType.PERMANENT),
    69: ("Grapes", "#a800e5", CropType.PERMANENT),
    70: ("Christmas Trees", "#004d00", CropType.PERMANENT),
    71: ("Other Tree Crops", "#70a800", CropType.PERMANENT),
    72: ("Citrus", "#ff9e0c", CropType.PERMANENT),
    74: ("Pecans", "#70a800", CropType.PERMANENT),
    75: ("Almonds", "#ffae42", CropType.PERMANENT),
    76: ("Walnuts", "#896054", CropType.PERMANENT),
    77: ("Pears", "#70a800", CropType.PERMANENT),
    81: ("Clouds/No Data", "#cccccc", CropType.OTHER),
    82: ("Developed", "#e5cee5", CropType.DEVELOPED),
    83: ("Water", "#00ffe5", CropType.WATER),
    87: ("Wetlands", "#0096a0", CropType.WATER),
    88: ("Nonag/Undefined", "#ffff00", CropType.OTHER),
    92: ("Aquaculture", "#00ffff", CropType.WATER),
    111: ("Open Water", "#4d70a3", CropType.WATER),
    112: ("Perennial Ice/Snow", "#ffffff", CropType.OTHER),
    121: ("Developed/Open Space", "#e5cee5", CropType.DEVELOPED),
    122: ("Developed/Low Intensity", "#d69ebc", CropType.DEVELOPED),
    123: ("Developed/Med Intensity", "#e5007c", CropType.DEVELOPED),
    124: ("Developed/High Intensity", "#a80000", CropType.DEVELOPED),
    131: ("Barren", "#d69ebc", CropType.OTHER),
    141: ("Deciduous Forest", "#70a800", CropType.FOREST),
    142: ("Evergreen Forest", "#00af49", CropType.FOREST),
    143: ("Mixed Forest", "#d8b56b", CropType.FOREST),
    152: ("Shrubland", "#ffc0e5", CropType.OTHER),
    176: ("Grassland/Pasture", "#ffd300", CropType.PASTURE),
    190: ("Woody Wetlands", "#b5b5ff", CropType.WATER),
    195: ("Herbaceous Wetlands", "#00ffff", CropType.WATER),
    204: ("Pistachios", "#d69ebc", CropType.PERMANENT),
    205: ("Triticale", "#d69ebc", CropType.ANNUAL),
    206: ("Carrots", "#ff9e0c", CropType.ANNUAL),
    207: ("Asparagus", "#70a800", CropType.PERENNIAL),
    208: ("Garlic", "#ffae42", CropType.ANNUAL),
    209: ("Cantaloupes", "#ff6666", CropType.ANNUAL),
    210: ("Prunes", "#a800e5", CropType.PERMANENT),
    211: ("Olives", "#70a800", CropType.PERMANENT),
    212: ("Oranges", "#ff9e0c", CropType.PERMANENT),
    213: ("Honeydew Melons", "#70a800", CropType.ANNUAL),
    214: ("Broccoli", "#00af49", CropType.ANNUAL),
    216: ("Peppers", "#ff2626", CropType.ANNUAL),
    217: ("Pomegranates", "#ff0000", CropType.PERMANENT),
    218: ("Nectarines", "#ff6666", CropType.PERMANENT),
    219: ("Greens", "#00af49", CropType.ANNUAL),
    220: ("Plums", "#a800e5", CropType.PERMANENT),
    221: ("Strawberries", "#ff0000", CropType.PERENNIAL),
    222: ("Squash", "#ff9e0c", CropType.ANNUAL),
    223: ("Apricots", "#ff9e0c", CropType.PERMANENT),
    224: ("Vetch", "#a800e5", CropType.ANNUAL),
    225: ("Dbl Crop WinWht/Corn", "#d8b56b", CropType.ANNUAL),
    226: ("Dbl Crop Oats/Corn", "#d8b56b", CropType.ANNUAL),
    227: ("Lettuce", "#70a800", CropType.ANNUAL),
    229: ("Pumpkins", "#ff9e0c", CropType.ANNUAL),
    230: ("Dbl Crop Lettuce/Durum Wht", "#d8b56b", CropType.ANNUAL),
    231: ("Dbl Crop Lettuce/Cantaloupe", "#d8b56b", CropType.ANNUAL),
    232: ("Dbl Crop Lettuce/Cotton", "#d8b56b", CropType.ANNUAL),
    233: ("Dbl Crop Lettuce/Barley", "#d8b56b", CropType.ANNUAL),
    234: ("Dbl Crop Durum Wht/Sorghum", "#d8b56b", CropType.ANNUAL),
    235: ("Dbl Crop Barley/Sorghum", "#d8b56b", CropType.ANNUAL),
    236: ("Dbl Crop WinWht/Sorghum", "#d8b56b", CropType.ANNUAL),
    237: ("Dbl Crop Barley/Corn", "#d8b56b", CropType.ANNUAL),
    238: ("Dbl Crop WinWht/Cotton", "#d8b56b", CropType.ANNUAL),
    239: ("Dbl Crop Soybeans/Cotton", "#d8b56b", CropType.ANNUAL),
    240: ("Dbl Crop Soybeans/Oats", "#d8b56b", CropType.ANNUAL),
    241: ("Dbl Crop Corn/Soybeans", "#d8b56b", CropType.ANNUAL),
    242: ("Blueberries", "#0000ff", CropType.PERENNIAL),
    243: ("Cabbage", "#70a800", CropType.ANNUAL),
    244: ("Cauliflower", "#ffffff", CropType.ANNUAL),
    245: ("Celery", "#70a800", CropType.ANNUAL),
    246: ("Radishes", "#ff0000", CropType.ANNUAL),
    247: ("Turnips", "#a800e5", CropType.ANNUAL),
    248: ("Eggplants", "#a800e5", CropType.ANNUAL),
    249: ("Gourds", "#ff9e0c", CropType.ANNUAL),
    250: ("Cranberries", "#ff0000", CropType.PERENNIAL),
    254: ("Dbl Crop Barley/Soybeans", "#d8b56b", CropType.ANNUAL),
}

CROP_TAXONOMY: Mapping[int, CropTaxonomyEntry] = MappingProxyType(
    {
        code: CropTaxonomyEntry(name=name, color=color, type=crop_type)
        for code, (name, color, crop_type) in _ROWS.items()
    }
)


def lookup(code: int) -> CropTaxonomyEntry | None:
    """Return the taxonomy entry for *code*, or None if the code is unmapped."""
    return CROP_TAXONOMY.get(code)


def resolve(code: int) -> CropTaxonomyEntry:
    """Return the taxonomy entry for *code*, falling back for unmapped codes."""
    entry = CROP_TAXONOMY.get(code)
    if entry is not None:
        return entry
    return CropTaxonomyEntry(
        name=f"Unknown ({code})",
        color=FALLBACK_COLOR,
        type=FALLBACK_TYPE,
    )


def crop_type_of(code: int) -> CropType:
    """Semantic crop type for *code*; unmapped codes are ``CropType.OTHER``."""
    return resolve(code).type


def codes_of_type(crop_type: CropType) -> list[int]:
    """All mapped codes of the given semantic type, ascending."""
    return sorted(code for code, entry in CROP_TAXONOMY.items() if entry.type == crop_type)
