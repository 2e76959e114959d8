"""Parser for CropScape GetCDLValue responses.

The service wraps its answer in a ``<Result>`` element holding either a bare
code, e.g. ``<Result>1</Result>``, or a loose object literal such as
``<Result>{x: -1016985.0, y: 1876045.5, value: 24, category: "Winter Wheat",
color: "#d8b56b"}</Result>``.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, Field

_RESULT_RE = re.compile(r"<Result>(.*?)</Result>", re.DOTALL)
_VALUE_RE = re.compile(r"""["']?value["']?\s*:\s*(\d+)""")
_CONFIDENCE_RE = re.compile(r"""["']?confidence["']?\s*:\s*(\d+(?:\.\d+)?)""")


class CDLValue(BaseModel):
    """A crop code read from one GetCDLValue response."""

    code: int
    confidence: int | None = Field(default=None, ge=0, le=100)


def parse_cdl_value(text: str) -> CDLValue:
    """Extract the crop code (and any inline confidence) from a response body.

    Raises:
        ValueError: If the envelope is missing or no integer code can be read.
    """
    match = _RESULT_RE.search(text)
    if match is None:
        raise ValueError("response has no <Result> element")

    content = match.group(1).strip()

    if content.startswith("{"):
        value_match = _VALUE_RE.search(content)
        if value_match is None:
            raise ValueError(f"no value field in structured result: {content[:80]!r}")
        confidence: int | None = None
        confidence_match = _CONFIDENCE_RE.search(content)
        if confidence_match is not None:
            confidence = round(float(confidence_match.group(1)))
        return CDLValue(code=int(value_match.group(1)), confidence=confidence)

    try:
        code = int(content)
    except ValueError:
        raise ValueError(f"invalid crop code: {content[:80]!r}") from None
    return CDLValue(code=code)
