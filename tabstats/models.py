from enum import Enum
from pydantic import BaseModel
from typing import List, Dict, Any, Optional

class FilterOperator(str, Enum):
    equals = "equals"
    contains = "contains"
    greater = "greater"
    less = "less"

class Filter(BaseModel):
    column: str
    operator: FilterOperator
    value: Any = None

class StatisticsSummary(BaseModel):
    column: str
    count: int
    mean: Optional[float] = None  # None when the value overflows
    median: Optional[float] = None
    min: float
    max: float
    sum: Optional[float] = None

class Anomaly(BaseModel):
    index: int
    value: float
    deviation: float

class MissingReport(BaseModel):
    count: int
    percentage: float

class GroupAggregate(BaseModel):
    group: str
    value: Optional[float] = None  # None when the group has no numeric values
    count: int

class ColumnProfile(BaseModel):
    column: str
    type: str
    missing: MissingReport
    statistics: Optional[StatisticsSummary] = None
    anomaly_count: int = 0

class DatasetProfile(BaseModel):
    row_count: int
    columns: List[str] = []
    profile: Dict[str, ColumnProfile] = {}

# -------------------------
# Request bodies
# -------------------------
class DatasetCreate(BaseModel):
    rows: List[Dict[str, Any]]
    name: Optional[str] = None

class ColumnRequest(BaseModel):
    column: str

class ColumnsRequest(BaseModel):
    columns: Optional[List[str]] = None

class FilterRequest(BaseModel):
    filters: List[Filter] = []

class AggregateRequest(BaseModel):
    group_by: str
    column: str
    operation: str = "sum"
    filters: List[Filter] = []
