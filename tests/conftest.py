# tests/conftest.py
import os
import sys

import pytest

# Ensure the project root (one level up from tests/) is on sys.path
ROOT = os.path.dirname(os.path.dirname(__file__))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

@pytest.fixture
def sales_rows():
    return [
        {"region": "north", "product": "Widget", "units": 10, "price": "2.50"},
        {"region": "north", "product": "Gadget", "units": "12", "price": "N/A"},
        {"region": "south", "product": "widget pro", "units": 11, "price": 3.0},
        {"region": None, "product": "Gizmo", "units": "", "price": "4.25"},
        {"region": "south", "product": "Gadget", "units": 9},
    ]

@pytest.fixture
def client():
    from fastapi.testclient import TestClient
    from tabstats.api import endpoints
    from tabstats.main import app

    endpoints._DATASETS.clear()
    with TestClient(app) as c:
        yield c
    endpoints._DATASETS.clear()
