"""Shared value normalization for HTML and Excel ingestion.

Every function here is pure and total: numeric and date coercion fall back to
a default instead of raising, so one odd cell never aborts a scan.
"""
from __future__ import annotations

import math
import re
from datetime import datetime
from io import BytesIO
from pathlib import Path
from typing import BinaryIO

from mt5_import.config import SETTINGS
from mt5_import.domain.models import Side

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")
# Longest leading float, as JavaScript's parseFloat reads it.
_FLOAT_PREFIX_RE = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_MT5_DATE_RE = re.compile(r"(\d{4})\.(\d{2})\.(\d{2})")
_ISO_DATE_RE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")

_BUY_TOKENS = frozenset({"BUY", "LONG", "IN"})

_ENTITIES = (
    ("&nbsp;", " "),
    ("&quot;", '"'),
    ("&amp;", "&"),
)


def ensure_bytes(source: BytesIO | Path | bytes | BinaryIO) -> bytes:
    if isinstance(source, (bytes, bytearray)):
        return bytes(source)
    if isinstance(source, BytesIO):
        return source.getvalue()
    if isinstance(source, Path):
        return source.read_bytes()
    if hasattr(source, "read"):
        data = source.read()
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data)
    raise TypeError(f"Unsupported source type: {type(source)!r}")


def decode_report_bytes(data: bytes) -> str:
    """Decode an exported report; MT5 writes HTML as UTF-16LE with a BOM."""
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return data.decode("utf-16")
    if data.startswith(b"\xef\xbb\xbf"):
        return data.decode("utf-8-sig")
    sample = data[:512]
    if len(sample) >= 4 and sample[1::2].count(0) >= len(sample[1::2]) * 0.9:
        return data.decode("utf-16-le", errors="replace")
    for encoding in ("utf-8", "cp1252"):
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    return data.decode("latin-1")


def extract_text(markup: str) -> str:
    text = _TAG_RE.sub("", markup or "")
    for entity, replacement in _ENTITIES:
        text = text.replace(entity, replacement)
    return text.strip()


def parse_number(value: str) -> float:
    """Parse a locale-flavored number; commas are treated as decimal points.

    ``"1 234,56"`` reads as ``1234.56`` but ``"1.234,56"`` becomes
    ``"1.234.56"`` and reads as ``1.234``. Unparseable input gives ``0.0``.
    """
    text = _WHITESPACE_RE.sub("", extract_text(value)).replace(",", ".")
    match = _FLOAT_PREFIX_RE.match(text)
    if not match:
        return 0.0
    try:
        number = float(match.group(0))
    except ValueError:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def today_iso() -> str:
    return datetime.now(SETTINGS.timezone).date().isoformat()


def canonical_date(value: str) -> str:
    """Return the first ``YYYY.MM.DD`` or ``YYYY-MM-DD`` date in ``value`` as ISO.

    Falls back to today's date when nothing recognizable is present.
    """
    text = value or ""
    match = _MT5_DATE_RE.search(text) or _ISO_DATE_RE.search(text)
    if match:
        return f"{match.group(1)}-{match.group(2)}-{match.group(3)}"
    return today_iso()


def canonical_side(token: str) -> Side:
    if (token or "").strip().upper() in _BUY_TOKENS:
        return Side.BUY
    return Side.SELL
