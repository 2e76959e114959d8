"""CropScape point queries for the Cropland Data Layer.

Provides the GetCDLValue HTTP client, a fixture-backed mock source, the
response parser, and the sequential multi-year history scan.
"""

from cdlhistory.cropscape.client import CDLValueSource, CropScapeClient
from cdlhistory.cropscape.mock import MockCDLSource
from cdlhistory.cropscape.parser import CDLValue, parse_cdl_value
from cdlhistory.cropscape.projection import wgs84_to_albers
from cdlhistory.cropscape.service import (
    create_cdl_source,
    iter_cdl_history,
    query_cdl_history,
    query_cdl_point,
)

__all__ = [
    "CDLValue",
    "CDLValueSource",
    "CropScapeClient",
    "MockCDLSource",
    "create_cdl_source",
    "iter_cdl_history",
    "parse_cdl_value",
    "query_cdl_history",
    "query_cdl_point",
    "wgs84_to_albers",
]
