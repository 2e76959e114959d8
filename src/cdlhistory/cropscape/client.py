"""CropScape GetCDLValue client and the source protocol it implements."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol, runtime_checkable

import httpx

from cdlhistory.core.config import CropScapeConfig
from cdlhistory.cropscape.projection import wgs84_to_albers

logger = logging.getLogger(__name__)

# What the service means by "outside coverage for this year".
NO_DATA_RESULT = "<Result>0</Result>"
_NO_DATA_MARKERS = ("Failed to get value", "No data")


@runtime_checkable
class CDLValueSource(Protocol):
    """Anything that can answer a single point/year CDL query with raw XML."""

    async def fetch_value(self, lat: float, lng: float, year: int) -> str: ...


class CropScapeClient:
    """Talks to the NASS CropScape CDLService over HTTP."""

    def __init__(self, config: CropScapeConfig) -> None:
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url,
            timeout=httpx.Timeout(config.timeout_seconds),
            headers={
                "User-Agent": config.user_agent,
                "Accept": "text/xml,application/xml,*/*",
            },
        )
        self._max_retries = config.max_retries

    async def __aenter__(self) -> CropScapeClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    # -- public API ----------------------------------------------------------

    async def fetch_value(self, lat: float, lng: float, year: int) -> str:
        """Return the raw GetCDLValue XML for one point and year.

        A refusal that the service phrases as "no data" is returned as
        ``NO_DATA_RESULT`` rather than raised.

        Raises:
            httpx.HTTPError: On transport failure, timeout, or any other
                non-success status once retries are exhausted.
        """
        x, y = wgs84_to_albers(lat, lng)
        params = {"year": str(year), "x": f"{x:.2f}", "y": f"{y:.2f}"}
        logger.debug("GetCDLValue year=%s lat=%s lng=%s x=%s y=%s", year, lat, lng, params["x"], params["y"])
        return await self._get("/GetCDLValue", params)

    async def close(self) -> None:
        await self._http.aclose()

    # -- internal ------------------------------------------------------------

    async def _get(self, path: str, params: dict[str, str]) -> str:
        last_exc: Exception | None = None
        for attempt in range(self._max_retries + 1):
            try:
                resp = await self._http.get(path, params=params)
                if resp.status_code >= 400 and any(m in resp.text for m in _NO_DATA_MARKERS):
                    return NO_DATA_RESULT
                if resp.status_code >= 500 and attempt < self._max_retries:
                    last_exc = httpx.HTTPStatusError(
                        f"Server error {resp.status_code}",
                        request=resp.request,
                        response=resp,
                    )
                    logger.warning(
                        "CropScape returned %s (attempt %d/%d)",
                        resp.status_code,
                        attempt + 1,
                        self._max_retries + 1,
                    )
                    await asyncio.sleep(2**attempt * 0.5)
                    continue
                resp.raise_for_status()
                return resp.text
            except httpx.TransportError as exc:
                last_exc = exc
                if attempt < self._max_retries:
                    await asyncio.sleep(2**attempt * 0.5)
                    continue
                raise
        raise last_exc  # type: ignore[misc]
