from typing import List, Optional

from tabstats.models import ColumnProfile, DatasetProfile
from tabstats.stats.cells import Row, cell_text, is_missing
from tabstats.stats.tabular import (
    compute_column_statistics,
    count_missing_values,
    detect_anomalies,
    infer_column_types,
)

PREVIEW_ROWS = 10

def dataset_columns(data: List[Row]) -> List[str]:
    """Union of row keys in first-seen order."""
    seen = {}
    for row in data:
        for key in row.keys():
            seen.setdefault(key, None)
    return list(seen)

def profile_dataset(data: List[Row], columns: Optional[List[str]] = None) -> DatasetProfile:
    """
    Per column: inferred type and missing report; numeric columns also get
    summary statistics and an anomaly count.
    """
    columns = list(columns) if columns is not None else dataset_columns(data)
    types = infer_column_types(data, columns)
    missing = count_missing_values(data, columns)
    profile = {}
    for col in columns:
        meta = ColumnProfile(column=col, type=types[col], missing=missing[col])
        if types[col] == "number":
            meta.statistics = compute_column_statistics(data, col)
            meta.anomaly_count = len(detect_anomalies(data, col))
        profile[col] = meta
    return DatasetProfile(row_count=len(data), columns=columns, profile=profile)

def describe_schema(columns: List[str], sample: List[Row]) -> str:
    """
    Text block listing each column with an example value from the first row,
    followed by the row count.
    """
    if not columns:
        return "No data"
    first = sample[0] if sample else {}
    lines = ["Columns:"]
    for col in columns:
        value = first.get(col)
        example = "N/A" if is_missing(value) else cell_text(value)
        lines.append(f'- {col}: example value "{example}"')
    lines.append("")
    lines.append(f"Total rows: {len(sample)}")
    return "\n".join(lines)

def preview_rows(data: List[Row], limit: int = PREVIEW_ROWS) -> str:
    return "\n".join(
        ", ".join("" if is_missing(v) else cell_text(v) for v in row.values())
        for row in data[:limit]
    )
