from fastapi.testclient import TestClient

from latmap.api.main import app

client = TestClient(app)


def test_health_ok():
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_heatmap_svg():
    r = client.post(
        "/api/heatmap",
        json={
            "trace": "time latency\n0 10\n10 20\n20 5\n",
            "config": {"min_lat": 0, "max_lat": 20, "step_lat": 10, "step_sec": 10},
        },
    )
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("image/svg+xml")
    assert r.text.count("onmouseover=") == 3


def test_heatmap_bad_time_unit():
    r = client.post("/api/heatmap", json={"trace": "0 10\n", "config": {"units_time": "min"}})
    assert r.status_code == 400
    assert "time units" in r.json()["detail"]


def test_heatmap_invalid_config():
    r = client.post("/api/heatmap", json={"trace": "0 10\n", "config": {"box_size": 0}})
    assert r.status_code == 422
