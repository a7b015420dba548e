"""Typed view over the loosely-typed values a spreadsheet engine returns."""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from numbers import Number

from mt5_import.infrastructure.parsing.utils import parse_number


class CellKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    TEMPORAL = "temporal"
    EMPTY = "empty"


@dataclass(frozen=True)
class CellValue:
    kind: CellKind
    value: object = None

    @classmethod
    def from_raw(cls, raw: object) -> "CellValue":
        if raw is None:
            return EMPTY_CELL
        if isinstance(raw, bool):
            return cls(CellKind.TEXT, "true" if raw else "false")
        if isinstance(raw, datetime):
            # NaT compares unequal to itself
            if raw != raw:
                return EMPTY_CELL
            return cls(CellKind.TEMPORAL, raw)
        if isinstance(raw, date):
            return cls(CellKind.TEMPORAL, datetime(raw.year, raw.month, raw.day))
        if isinstance(raw, Number):
            number = float(raw)
            if math.isnan(number):
                return EMPTY_CELL
            return cls(CellKind.NUMBER, number)
        text = str(raw)
        if not text.strip():
            return EMPTY_CELL
        return cls(CellKind.TEXT, text)

    @property
    def is_empty(self) -> bool:
        return self.kind is CellKind.EMPTY

    def as_text(self) -> str:
        if self.kind is CellKind.EMPTY:
            return ""
        if self.kind is CellKind.NUMBER:
            number = float(self.value)
            if number.is_integer():
                return str(int(number))
            return repr(number)
        if self.kind is CellKind.TEMPORAL:
            return self.value.strftime("%Y-%m-%d %H:%M:%S")
        return str(self.value).strip()

    def as_number(self) -> float:
        if self.kind is CellKind.NUMBER:
            return float(self.value)
        if self.kind is CellKind.TEXT:
            return parse_number(str(self.value))
        return 0.0


EMPTY_CELL = CellValue(CellKind.EMPTY)
