"""Cell value extraction.

Spreadsheet cells store the value a reader sees in several shapes:

* a plain scalar (text, number, date, bool),
* a formula whose displayed value is its cached result,
* a hyperlink whose displayed value is its text,
* rich text split into formatted runs.

Each shape is decoded into exactly one variant below, and
:func:`extract_shape` maps every variant to the scalar a human would read
off the cell.  Absence is always the empty string, never ``None``.

Two kinds of input are accepted:

* openpyxl cells and values (``CellRichText``, ``ArrayFormula`` ...);
* plain mappings as they appear in JSON payloads
  (``{"result": ...}``, ``{"text": ...}``, ``{"richText": [{"text": ...}]}``).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Union

from openpyxl.cell.rich_text import CellRichText, TextBlock
from openpyxl.worksheet.formula import ArrayFormula, DataTableFormula

logger = logging.getLogger(__name__)

CellValue = Union[str, int, float, bool, datetime, date, time, timedelta, Decimal]

_SCALAR_TYPES = (str, int, float, bool, datetime, date, time, timedelta, Decimal)

# Marker for "no cached value was supplied" (``None`` is a valid cached value).
_NO_CACHE = object()


# ---------------------------------------------------------------------------
# Cell shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EmptyCell:
    """Missing cell or a cell without a value."""


@dataclass(frozen=True)
class ScalarCell:
    """Literal value."""

    value: CellValue


@dataclass(frozen=True)
class FormulaCell:
    """Formula cell; ``result`` is the last computed value, if any."""

    result: Any = None
    formula: str = ""


@dataclass(frozen=True)
class HyperlinkCell:
    """Hyperlink or other text-object cell."""

    text: Any = None
    target: str = ""


@dataclass(frozen=True)
class RichTextCell:
    """Rich text: the plain text of each formatted run, in order."""

    runs: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UnrecognizedCell:
    """Object value of a shape none of the decoders know."""

    raw: Any = None


CellShape = Union[EmptyCell, ScalarCell, FormulaCell, HyperlinkCell, RichTextCell, UnrecognizedCell]


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def _run_text(run: Any) -> str:
    if isinstance(run, TextBlock):
        return run.text or ""
    if isinstance(run, Mapping):
        text = run.get("text")
        return "" if text is None else str(text)
    return "" if run is None else str(run)


def _decode_mapping(raw: Mapping, cached: Any) -> CellShape:
    if "result" in raw:
        result = raw["result"]
        if result is None and cached is not _NO_CACHE:
            result = cached
        return FormulaCell(result=result, formula=str(raw.get("formula") or ""))
    if "text" in raw:
        return HyperlinkCell(text=raw["text"], target=str(raw.get("hyperlink") or ""))
    runs = raw.get("richText")
    if isinstance(runs, list):
        return RichTextCell(runs=tuple(_run_text(r) for r in runs))
    return UnrecognizedCell(raw=raw)


def decode_value(raw: Any, cached: Any = _NO_CACHE) -> CellShape:
    """Decode a raw cell value into its shape.

    Args:
        raw: The stored value (openpyxl value or JSON-style mapping).
        cached: Cached formula result from a ``data_only`` workbook load.
            Only consulted for formula shapes.
    """
    if raw is None:
        return EmptyCell()
    if isinstance(raw, CellRichText):
        return RichTextCell(runs=tuple(_run_text(r) for r in raw))
    if isinstance(raw, (ArrayFormula, DataTableFormula)):
        result = None if cached is _NO_CACHE else cached
        return FormulaCell(result=result, formula=str(getattr(raw, "text", "") or ""))
    if isinstance(raw, _SCALAR_TYPES):
        return ScalarCell(value=raw)
    if isinstance(raw, Mapping):
        return _decode_mapping(raw, cached)
    return UnrecognizedCell(raw=raw)


def decode_cell(cell: Any, cached: Any = _NO_CACHE) -> CellShape:
    """Decode an openpyxl cell (or ``None``) into its shape."""
    if cell is None:
        return EmptyCell()
    raw = getattr(cell, "value", None)
    if raw is None:
        return EmptyCell()

    # openpyxl keeps formulas as "=..." strings tagged with data_type "f"
    if getattr(cell, "data_type", None) == "f" and isinstance(raw, str):
        result = None if cached is _NO_CACHE else cached
        return FormulaCell(result=result, formula=raw)

    link = getattr(cell, "hyperlink", None)
    if link is not None and isinstance(raw, (str, CellRichText)):
        text = "".join(_run_text(r) for r in raw) if isinstance(raw, CellRichText) else raw
        return HyperlinkCell(text=text, target=str(getattr(link, "target", "") or ""))

    return decode_value(raw, cached)


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def extract_shape(shape: CellShape) -> Any:
    """Return the displayed value of a decoded cell ("" when absent)."""
    if isinstance(shape, EmptyCell):
        return ""
    if isinstance(shape, ScalarCell):
        return shape.value
    if isinstance(shape, FormulaCell):
        return "" if shape.result is None else shape.result
    if isinstance(shape, HyperlinkCell):
        return "" if shape.text is None else shape.text
    if isinstance(shape, RichTextCell):
        return "".join(shape.runs)
    if isinstance(shape, UnrecognizedCell):
        logger.debug("Unrecognized cell value %r, treating as empty", shape.raw)
        return ""
    raise TypeError(f"Unknown cell shape: {shape!r}")


def extract_value(raw: Any, cached: Any = _NO_CACHE) -> Any:
    """Displayed value of a raw cell value."""
    return extract_shape(decode_value(raw, cached))


def extract(cell: Any, cached: Any = _NO_CACHE) -> Any:
    """Displayed value of an openpyxl cell."""
    return extract_shape(decode_cell(cell, cached))


def as_text(value: Any) -> str:
    """Render an extracted value as text (numbers like ``3.0`` become ``"3"``)."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return "" if value is None else str(value)
