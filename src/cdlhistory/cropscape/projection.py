"""WGS84 to CONUS Albers Equal Area Conic (EPSG:5070) projection.

CropScape's GetCDLValue endpoint takes x/y in EPSG:5070 metres rather than
latitude/longitude.
"""

from __future__ import annotations

import math

# GRS80 ellipsoid, USGS CONUS Albers parameters.
_A = 6378137.0
_E = 0.08181919084262
_LAT0 = math.radians(23.0)
_LAT1 = math.radians(29.5)
_LAT2 = math.radians(45.5)
_LON0 = math.radians(-96.0)


def _m(phi: float) -> float:
    sin_phi = math.sin(phi)
    return math.cos(phi) / math.sqrt(1 - _E * _E * sin_phi * sin_phi)


def _q(phi: float) -> float:
    sin_phi = math.sin(phi)
    return (1 - _E * _E) * (
        sin_phi / (1 - _E * _E * sin_phi * sin_phi)
        - (1 / (2 * _E)) * math.log((1 - _E * sin_phi) / (1 + _E * sin_phi))
    )


_M1 = _m(_LAT1)
_M2 = _m(_LAT2)
_Q1 = _q(_LAT1)
_Q2 = _q(_LAT2)
_N = (_M1 * _M1 - _M2 * _M2) / (_Q2 - _Q1)
_C = _M1 * _M1 + _N * _Q1
_RHO0 = _A * math.sqrt(_C - _N * _q(_LAT0)) / _N


def wgs84_to_albers(lat: float, lng: float) -> tuple[float, float]:
    """Project a WGS84 coordinate to EPSG:5070 ``(x, y)`` in metres."""
    rho = _A * math.sqrt(_C - _N * _q(math.radians(lat))) / _N
    theta = _N * (math.radians(lng) - _LON0)
    x = rho * math.sin(theta)
    y = _RHO0 - rho * math.cos(theta)
    return x, y
