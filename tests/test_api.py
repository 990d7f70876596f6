ROWS = [
    {"g": "red", "v": 1, "name": "Alpha"},
    {"g": "red", "v": 2, "name": "beta"},
    {"g": "blue", "v": 3, "name": "Gamma"},
    {"g": "blue", "v": "", "name": "N/A"},
]

def _upload(client, rows=ROWS):
    resp = client.post("/datasets", json={"rows": rows, "name": "sample"})
    assert resp.status_code == 201
    return resp.json()["dataset_id"]

def test_create_and_get_dataset(client):
    dataset_id = _upload(client)
    resp = client.get(f"/datasets/{dataset_id}")
    assert resp.status_code == 200
    body = resp.json()
    assert body["row_count"] == 4
    assert body["columns"] == ["g", "v", "name"]
    assert body["name"] == "sample"

def test_unknown_dataset_is_404(client):
    assert client.get("/datasets/missing").status_code == 404
    assert client.post("/datasets/missing/statistics", json={"column": "v"}).status_code == 404

def test_delete_dataset(client):
    dataset_id = _upload(client)
    assert client.delete(f"/datasets/{dataset_id}").json() == {"deleted": dataset_id}
    assert client.get(f"/datasets/{dataset_id}").status_code == 404

def test_upload_row_limit(client, monkeypatch):
    monkeypatch.setenv("TABSTATS_MAX_ROWS", "2")
    resp = client.post("/datasets", json={"rows": ROWS})
    assert resp.status_code == 413

def test_statistics_endpoint(client):
    dataset_id = _upload(client)
    body = client.post(f"/datasets/{dataset_id}/statistics", json={"column": "v"}).json()
    assert body["count"] == 3
    assert body["sum"] == 6.0
    assert body["median"] == 2.0
    assert client.post(f"/datasets/{dataset_id}/statistics", json={"column": "name"}).json() is None

def test_anomalies_endpoint(client):
    dataset_id = _upload(client, [{"v": 10}] * 9 + [{"v": 100}])
    body = client.post(f"/datasets/{dataset_id}/anomalies", json={"column": "v"}).json()
    assert body["anomalies"] == [{"index": 9, "value": 100.0, "deviation": 3.0}]

def test_missing_endpoint_defaults_to_all_columns(client):
    dataset_id = _upload(client)
    body = client.post(f"/datasets/{dataset_id}/missing", json={}).json()
    assert body["v"] == {"count": 1, "percentage": 25.0}
    assert body["name"] == {"count": 1, "percentage": 25.0}
    assert body["g"]["count"] == 0

def test_filter_endpoint(client):
    dataset_id = _upload(client)
    resp = client.post(f"/datasets/{dataset_id}/filter", json={
        "filters": [{"column": "name", "operator": "contains", "value": "A"}],
    })
    body = resp.json()
    assert body["row_count"] == 4  # "N/A" contains "a" too
    resp = client.post(f"/datasets/{dataset_id}/filter", json={
        "filters": [{"column": "v", "operator": "greater", "value": 1}],
    })
    assert [r["v"] for r in resp.json()["rows"]] == [2, 3]

def test_filter_endpoint_rejects_unknown_operator(client):
    dataset_id = _upload(client)
    resp = client.post(f"/datasets/{dataset_id}/filter", json={
        "filters": [{"column": "v", "operator": "between", "value": 1}],
    })
    assert resp.status_code == 422

def test_aggregate_endpoint(client):
    dataset_id = _upload(client)
    body = client.post(f"/datasets/{dataset_id}/aggregate", json={
        "group_by": "g", "column": "v", "operation": "sum",
    }).json()
    assert body["groups"] == [
        {"group": "red", "value": 3.0, "count": 2},
        {"group": "blue", "value": 3.0, "count": 2},
    ]

def test_aggregate_endpoint_with_filters(client):
    dataset_id = _upload(client)
    body = client.post(f"/datasets/{dataset_id}/aggregate", json={
        "group_by": "g", "column": "v", "operation": "max",
        "filters": [{"column": "name", "operator": "equals", "value": "N/A"}],
    }).json()
    assert body["groups"] == [{"group": "blue", "value": None, "count": 1}]

def test_types_profile_and_schema(client):
    dataset_id = _upload(client)
    types = client.post(f"/datasets/{dataset_id}/types", json={"columns": ["v", "g"]}).json()
    assert types == {"v": "number", "g": "string"}
    profile = client.get(f"/datasets/{dataset_id}/profile").json()
    assert profile["row_count"] == 4
    assert profile["profile"]["v"]["statistics"]["mean"] == 2.0
    schema = client.get(f"/datasets/{dataset_id}/schema").json()
    assert schema["description"].endswith("Total rows: 4")
    assert schema["preview"].splitlines()[0] == "red, 1, Alpha"

def test_operations_lists_reducers(client):
    ops = client.get("/operations").json()["aggregate"]
    assert set(ops) == {"sum", "avg", "mean", "count", "min", "max"}

def test_delete_dataset_twice(client):
    dataset_id = _upload(client)
    assert client.delete(f"/datasets/{dataset_id}").status_code == 200
    assert client.delete(f"/datasets/{dataset_id}").status_code == 404
