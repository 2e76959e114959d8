"""Point and multi-year CDL queries, enriched and checked for plausibility.

Years are always fetched one at a time, each request awaited before the
next is issued. CropScape degrades badly under concurrent load, so there is
deliberately no fan-out here.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import aclosing, asynccontextmanager
from typing import AsyncIterator, Iterable

import httpx

from cdlhistory.core.config import CropScapeConfig, Settings
from cdlhistory.core.types import NO_DATA_CODES
from cdlhistory.crops.accuracy import estimate_accuracy
from cdlhistory.crops.models import YearRecord
from cdlhistory.crops.taxonomy import resolve
from cdlhistory.crops.transitions import analyze_crop_history, attach_warnings
from cdlhistory.cropscape.client import CDLValueSource, CropScapeClient
from cdlhistory.cropscape.mock import MockCDLSource
from cdlhistory.cropscape.parser import parse_cdl_value

logger = logging.getLogger(__name__)

SOURCE_REGISTRY: dict[str, type] = {
    "cropscape": CropScapeClient,
    "mock": MockCDLSource,
}


def create_cdl_source(config: CropScapeConfig) -> CDLValueSource:
    """Factory: instantiate the CDL source named by ``config.provider``."""
    provider = config.provider.lower()
    if provider not in SOURCE_REGISTRY:
        available = ", ".join(sorted(SOURCE_REGISTRY))
        raise ValueError(
            f"Unknown CDL provider {config.provider!r}. "
            f"Available: {available}"
        )
    return SOURCE_REGISTRY[provider](config)


@asynccontextmanager
async def _open_source(source: CDLValueSource | None) -> AsyncIterator[CDLValueSource]:
    """Yield *source*, or a configured one that is closed on exit."""
    if source is not None:
        yield source
        return
    owned = create_cdl_source(Settings().cropscape)
    try:
        yield owned
    finally:
        close = getattr(owned, "close", None)
        if close is not None:
            await close()


def _request_timeout(src: CDLValueSource) -> float:
    config = getattr(src, "config", None)
    if isinstance(config, CropScapeConfig):
        return config.timeout_seconds
    return Settings().cropscape.timeout_seconds


async def query_cdl_point(
    lat: float,
    lng: float,
    year: int,
    *,
    source: CDLValueSource | None = None,
    timeout: float | None = None,
) -> YearRecord | None:
    """Query and enrich the CDL classification for one point and year.

    Returns:
        The enriched record, or None when the year has no data or the query
        failed for any reason (timeout, HTTP error, unparseable payload, or
        any other error from the source). Failures are logged, never raised;
        only cancellation propagates.
    """
    async with _open_source(source) as src:
        if timeout is None:
            timeout = _request_timeout(src)
        try:
            text = await asyncio.wait_for(src.fetch_value(lat, lng, year), timeout)
            value = parse_cdl_value(text)
        except TimeoutError:
            logger.warning("CDL query for %s at (%s, %s) timed out after %ss", year, lat, lng, timeout)
            return None
        except httpx.HTTPError as exc:
            logger.warning("CDL query for %s at (%s, %s) failed: %s", year, lat, lng, exc)
            return None
        except ValueError as exc:
            logger.warning("Unparseable CDL response for %s at (%s, %s): %s", year, lat, lng, exc)
            return None
        except Exception:
            logger.exception("CDL query for %s at (%s, %s) failed unexpectedly", year, lat, lng)
            return None

    if value.code in NO_DATA_CODES:
        logger.debug("No data value (%s) for %s at (%s, %s)", value.code, year, lat, lng)
        return None

    entry = resolve(value.code)
    confidence = value.confidence if value.confidence is not None else estimate_accuracy(value.code)

    return YearRecord(
        year=year,
        crop_code=value.code,
        crop_name=entry.name,
        color=entry.color,
        crop_type=entry.type,
        confidence=confidence,
    )


async def iter_cdl_history(
    lat: float,
    lng: float,
    years: Iterable[int] | None = None,
    *,
    source: CDLValueSource | None = None,
    timeout: float | None = None,
) -> AsyncIterator[YearRecord]:
    """Yield enriched records year by year, in the order given.

    Records are not yet checked for plausibility. A consumer that stops early
    (or is cancelled) keeps everything already yielded.
    """
    if years is None:
        years = Settings().history.years()

    async with _open_source(source) as src:
        for year in years:
            record = await query_cdl_point(lat, lng, year, source=src, timeout=timeout)
            if record is not None:
                yield record


async def query_cdl_history(
    lat: float,
    lng: float,
    *,
    years: Iterable[int] | None = None,
    source: CDLValueSource | None = None,
    newest_first: bool | None = None,
    timeout: float | None = None,
) -> list[YearRecord]:
    """Query the full CDL history at a point and annotate it with warnings.

    Years without data or whose query failed are simply absent. If every
    year fails the result is an empty list. If the scan is cancelled, the
    years completed so far are analyzed and returned instead of raising.

    Args:
        lat: Latitude (WGS84).
        lng: Longitude (WGS84).
        years: Years to query; defaults to the configured window, newest first.
        source: CDL source to query; defaults to one built from configuration.
        newest_first: Order of the returned list. Warnings are always computed
            on ascending years; this only affects presentation.
        timeout: Per-request timeout in seconds.

    Returns:
        Annotated records sorted by year.
    """
    if newest_first is None:
        newest_first = Settings().history.newest_first

    records: list[YearRecord] = []
    try:
        async with aclosing(
            iter_cdl_history(lat, lng, years, source=source, timeout=timeout)
        ) as stream:
            async for record in stream:
                records.append(record)
    except asyncio.CancelledError:
        task = asyncio.current_task()
        if task is not None:
            task.uncancel()
        logger.info(
            "CDL history at (%s, %s) cancelled after %d years with data; returning partial result",
            lat,
            lng,
            len(records),
        )
    records.sort(key=lambda r: r.year)

    warnings = analyze_crop_history(records)
    annotated = attach_warnings(records, warnings)
    if newest_first:
        annotated.reverse()

    logger.info(
        "CDL history at (%s, %s): %d years with data, %d warnings",
        lat,
        lng,
        len(annotated),
        len(warnings),
    )
    return annotated
