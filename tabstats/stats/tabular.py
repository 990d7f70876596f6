import logging
from typing import List, Dict, Any, Optional, Tuple, Iterable
from collections import OrderedDict
import pandas as pd
import numpy as np

from tabstats.models import (
    Anomaly,
    Filter,
    FilterOperator,
    GroupAggregate,
    MissingReport,
    StatisticsSummary,
)
from tabstats.registry import get_reducer, reduce_count
from tabstats.stats.cells import Row, cell_text, is_blank, is_missing, parse_number, round2, round2_finite

logger = logging.getLogger(__name__)

ANOMALY_MIN_VALUES = 3
ANOMALY_THRESHOLD = 2.0
TYPE_SAMPLE_SIZE = 100
BOOLEAN_TOKENS = {"true", "false", "1", "0", "yes", "no"}
# pandas resolves these to the current time; they are not calendar dates
RELATIVE_DATE_WORDS = {"now", "today"}

# ----------------------
# Helpers
# ----------------------
def _numeric_values(data: List[Row], column: str) -> List[Tuple[int, float]]:
    """(row index, value) for every row whose cell parses as a number."""
    values = []
    for idx, row in enumerate(data):
        num = parse_number(row.get(column))
        if num is not None:
            values.append((idx, num))
    return values

def _parses_as_date(value: Any) -> bool:
    if str(value).strip().lower() in RELATIVE_DATE_WORDS:
        return False
    return not pd.isnull(pd.to_datetime(str(value), errors="coerce"))

def _to_filter(raw) -> Filter:
    if isinstance(raw, Filter):
        return raw
    return Filter(**raw)

# ----------------------
# Operations
# ----------------------

def compute_column_statistics(data: List[Row], column: str) -> Optional[StatisticsSummary]:
    """
    count, mean, median, min, max and sum over the numeric cells of a column.
    Returns None when the dataset is empty or no cell parses as a number.
    """
    if not data:
        return None
    values = pd.Series([v for _, v in _numeric_values(data, column)], dtype=float)
    if values.empty:
        return None
    return StatisticsSummary(
        column=column,
        count=int(values.count()),
        mean=round2_finite(float(values.mean())),
        median=round2_finite(float(values.median())),
        min=float(values.min()),
        max=float(values.max()),
        sum=round2_finite(float(values.sum())),
    )

def detect_anomalies(data: List[Row], column: str) -> List[Anomaly]:
    """
    Flag values further than two population standard deviations from the
    column mean. Needs at least three numeric values.
    """
    indexed = _numeric_values(data, column)
    if len(indexed) < ANOMALY_MIN_VALUES:
        return []
    numbers = np.array([v for _, v in indexed], dtype=float)
    mean = float(numbers.mean())
    std = float(numbers.std())  # ddof=0: population
    if std == 0:
        return []
    threshold = ANOMALY_THRESHOLD * std
    anomalies: List[Anomaly] = []
    for idx, value in indexed:
        if abs(value - mean) > threshold:
            anomalies.append(Anomaly(index=idx, value=value, deviation=round2((value - mean) / std)))
    logger.debug("column %s: %d anomalies out of %d values", column, len(anomalies), len(indexed))
    return anomalies

def count_missing_values(data: List[Row], columns: Iterable[str]) -> Dict[str, MissingReport]:
    total = len(data)
    missing: Dict[str, MissingReport] = {}
    for col in columns:
        count = sum(1 for row in data if is_blank(row.get(col)))
        percentage = round2(count / total * 100) if total else 0.0
        missing[col] = MissingReport(count=count, percentage=percentage)
    return missing

def _matches(row: Row, flt: Filter) -> bool:
    value = row.get(flt.column)
    if is_missing(value):
        return False
    op = flt.operator
    if op == FilterOperator.equals:
        return cell_text(value) == cell_text(flt.value)
    if op == FilterOperator.contains:
        return cell_text(flt.value).lower() in cell_text(value).lower()
    if op in (FilterOperator.greater, FilterOperator.less):
        lhs = parse_number(value)
        rhs = parse_number(flt.value)
        if lhs is None or rhs is None:
            return False
        return lhs > rhs if op == FilterOperator.greater else lhs < rhs
    raise ValueError(f"unsupported filter operator: {op!r}")

def filter_rows(data: List[Row], filters) -> List[Row]:
    """
    Keep rows satisfying every filter. Filters may be Filter models or plain
    dicts; an unknown operator raises ValueError.
    """
    parsed = [_to_filter(f) for f in (filters or [])]
    kept = [row for row in data if all(_matches(row, f) for f in parsed)]
    logger.debug("filter_rows kept %d of %d rows with %d filters", len(kept), len(data), len(parsed))
    return kept

def group_by_column(data: List[Row], column: str) -> Dict[str, List[Row]]:
    groups: Dict[str, List[Row]] = OrderedDict()
    for row in data:
        key = cell_text(row.get(column))
        groups.setdefault(key, []).append(row)
    return groups

def aggregate_groups(groups: Dict[str, List[Row]], aggregate_column: str, operation: str = "sum") -> List[GroupAggregate]:
    """
    Reduce each group's numeric values in aggregate_column with a registered
    reducer (sum, avg/mean, count, min, max). Unknown operations count.
    """
    reducer = get_reducer(operation)
    if reducer is None:
        logger.warning("unknown aggregate operation %r, falling back to count", operation)
        reducer = reduce_count
    result: List[GroupAggregate] = []
    for key, rows in groups.items():
        values = [v for _, v in _numeric_values(rows, aggregate_column)]
        aggregated = reducer(values)
        result.append(GroupAggregate(
            group=key,
            value=round2_finite(aggregated),
            count=len(rows),
        ))
    return result

def _sample(data: List[Row], column: str) -> List[Any]:
    sample = []
    for row in data:
        value = row.get(column)
        if value is None or value == "":
            continue
        sample.append(value)
        if len(sample) >= TYPE_SAMPLE_SIZE:
            break
    return sample

def infer_column_types(data: List[Row], columns: Iterable[str]) -> Dict[str, str]:
    """
    Classify columns from their first non-empty values. Checks run in order
    number, date, boolean, so a 0/1 column is "number".
    """
    types: Dict[str, str] = {}
    for col in columns:
        sample = _sample(data, col)
        if not sample:
            types[col] = "unknown"
        elif all(parse_number(v) is not None for v in sample):
            types[col] = "number"
        elif any(_parses_as_date(v) for v in sample):
            types[col] = "date"
        elif all(cell_text(v).lower() in BOOLEAN_TOKENS for v in sample):
            types[col] = "boolean"
        else:
            types[col] = "string"
    return types
