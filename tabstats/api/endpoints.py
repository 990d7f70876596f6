# tabstats/api/endpoints.py
import logging
import uuid
from fastapi import APIRouter, Depends, HTTPException
from typing import Dict, Any

from tabstats.config import Settings, load_settings
from tabstats.models import (
    AggregateRequest,
    ColumnRequest,
    ColumnsRequest,
    DatasetCreate,
    FilterRequest,
)
from tabstats.registry import list_reducers
from tabstats.stats import tabular
from tabstats.stats.profile import dataset_columns, describe_schema, preview_rows, profile_dataset

logger = logging.getLogger(__name__)

router = APIRouter()

# in-memory store
_DATASETS: Dict[str, Dict[str, Any]] = {}

def get_settings() -> Settings:
    return load_settings()

def _get_dataset(dataset_id: str) -> Dict[str, Any]:
    dataset = _DATASETS.get(dataset_id)
    if dataset is None:
        raise HTTPException(status_code=404, detail="dataset not found")
    return dataset

def _metadata(dataset_id: str, dataset: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "dataset_id": dataset_id,
        "name": dataset["name"],
        "row_count": len(dataset["rows"]),
        "columns": dataset["columns"],
    }

@router.post("/datasets", status_code=201)
def create_dataset(payload: DatasetCreate, settings: Settings = Depends(get_settings)):
    if len(payload.rows) > settings.max_rows:
        raise HTTPException(status_code=413, detail=f"dataset exceeds {settings.max_rows} rows")
    dataset_id = str(uuid.uuid4())
    _DATASETS[dataset_id] = {
        "name": payload.name,
        "rows": payload.rows,
        "columns": dataset_columns(payload.rows),
    }
    logger.info("stored dataset %s (%d rows)", dataset_id, len(payload.rows))
    return _metadata(dataset_id, _DATASETS[dataset_id])

@router.get("/datasets/{dataset_id}")
def get_dataset(dataset_id: str):
    return _metadata(dataset_id, _get_dataset(dataset_id))

@router.delete("/datasets/{dataset_id}")
def delete_dataset(dataset_id: str):
    if _DATASETS.pop(dataset_id, None) is None:
        raise HTTPException(status_code=404, detail="dataset not found")
    logger.info("deleted dataset %s", dataset_id)
    return {"deleted": dataset_id}

@router.get("/datasets/{dataset_id}/profile")
def get_profile(dataset_id: str):
    dataset = _get_dataset(dataset_id)
    return profile_dataset(dataset["rows"], dataset["columns"])

@router.get("/datasets/{dataset_id}/schema")
def get_schema(dataset_id: str):
    dataset = _get_dataset(dataset_id)
    return {
        "description": describe_schema(dataset["columns"], dataset["rows"]),
        "preview": preview_rows(dataset["rows"]),
    }

@router.post("/datasets/{dataset_id}/statistics")
def column_statistics(dataset_id: str, payload: ColumnRequest):
    dataset = _get_dataset(dataset_id)
    return tabular.compute_column_statistics(dataset["rows"], payload.column)

@router.post("/datasets/{dataset_id}/anomalies")
def column_anomalies(dataset_id: str, payload: ColumnRequest):
    dataset = _get_dataset(dataset_id)
    anomalies = tabular.detect_anomalies(dataset["rows"], payload.column)
    return {"column": payload.column, "anomalies": anomalies}

@router.post("/datasets/{dataset_id}/missing")
def missing_values(dataset_id: str, payload: ColumnsRequest):
    dataset = _get_dataset(dataset_id)
    columns = payload.columns if payload.columns is not None else dataset["columns"]
    return tabular.count_missing_values(dataset["rows"], columns)

@router.post("/datasets/{dataset_id}/filter")
def filter_dataset(dataset_id: str, payload: FilterRequest):
    dataset = _get_dataset(dataset_id)
    rows = tabular.filter_rows(dataset["rows"], payload.filters)
    return {"row_count": len(rows), "rows": rows}

@router.post("/datasets/{dataset_id}/aggregate")
def aggregate_dataset(dataset_id: str, payload: AggregateRequest):
    dataset = _get_dataset(dataset_id)
    rows = tabular.filter_rows(dataset["rows"], payload.filters)
    groups = tabular.group_by_column(rows, payload.group_by)
    return {
        "group_by": payload.group_by,
        "column": payload.column,
        "operation": payload.operation,
        "groups": tabular.aggregate_groups(groups, payload.column, payload.operation),
    }

@router.post("/datasets/{dataset_id}/types")
def column_types(dataset_id: str, payload: ColumnsRequest):
    dataset = _get_dataset(dataset_id)
    columns = payload.columns if payload.columns is not None else dataset["columns"]
    return tabular.infer_column_types(dataset["rows"], columns)

@router.get("/operations")
def operations():
    return {"aggregate": list_reducers()}
