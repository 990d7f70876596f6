from typing import Any, Dict, Optional, Union
import math

Cell = Union[str, int, float, bool, None]
Row = Dict[str, Any]

MISSING_SENTINEL = "N/A"


def is_missing(value: Cell) -> bool:
    return value is None


def is_blank(value: Cell) -> bool:
    """Missing for reporting purposes: None, empty string or the "N/A" sentinel."""
    return value is None or value == "" or value == MISSING_SENTINEL


def parse_number(value: Cell) -> Optional[float]:
    """
    Parse a cell as a finite float. Returns None for missing cells, booleans,
    strings that do not parse, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    elif isinstance(value, str):
        if "_" in value:
            return None
        try:
            num = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(num):
        return None
    return num


def cell_text(value: Cell) -> str:
    """String form of a cell, used for equality, substring tests and group keys."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def round2(value: float) -> float:
    # half away from zero on the value scaled by 100
    if not math.isfinite(abs(value) * 100):
        return value
    scaled = math.floor(abs(value) * 100 + 0.5) / 100
    return math.copysign(scaled, value) if scaled else 0.0


def round2_finite(value: Optional[float]) -> Optional[float]:
    """round2, or None when the value is missing or overflowed to NaN/infinity."""
    if value is None or not math.isfinite(value):
        return None
    return round2(value)
