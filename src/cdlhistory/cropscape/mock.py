"""Mock CDL source with fixture point histories for development/testing."""

from __future__ import annotations

from cdlhistory.core.config import CropScapeConfig
from cdlhistory.cropscape.client import NO_DATA_RESULT


def _structured(code: int, category: str, color: str) -> str:
    return (
        f'<Result>{{x: 0.0, y: 0.0, value: {code}, category: "{category}", '
        f'color: "{color}"}}</Result>'
    )


class MockCDLSource:
    """Answers point queries from an in-memory table of fixture locations.

    Points are matched on coordinates rounded to four decimals. Unknown
    points and years outside a fixture answer with the no-data result.
    """

    def __init__(self, config: CropScapeConfig | None = None) -> None:
        self.config = config or CropScapeConfig(provider="mock")
        self._points: dict[tuple[float, float], dict[int, str]] = {}
        self.calls: list[tuple[float, float, int]] = []
        self._load_fixtures()

    def _load_fixtures(self) -> None:
        # Story County, IA: corn/soybean rotation.
        self.add_point(
            42.0308,
            -93.6319,
            {
                year: "<Result>1</Result>" if year % 2 == 0 else "<Result>5</Result>"
                for year in range(2008, 2024)
            },
        )
        # Stanislaus County, CA: field crops with one spurious almond year.
        self.add_point(
            37.5585,
            -120.9977,
            {
                2018: "<Result>24</Result>",
                2019: "<Result>24</Result>",
                2020: "<Result>36</Result>",
                2021: _structured(75, "Almonds", "#ffae42"),
                2022: "<Result>24</Result>",
                2023: "<Result>81</Result>",
            },
        )
        # Gulf of Mexico: outside coverage every year.
        self.add_point(26.0, -90.0, {})

    def add_point(self, lat: float, lng: float, payloads: dict[int, str]) -> None:
        """Register (or replace) the per-year payloads for a point."""
        self._points[(round(lat, 4), round(lng, 4))] = dict(payloads)

    async def fetch_value(self, lat: float, lng: float, year: int) -> str:
        self.calls.append((lat, lng, year))
        payloads = self._points.get((round(lat, 4), round(lng, 4)), {})
        return payloads.get(year, NO_DATA_RESULT)
