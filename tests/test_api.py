"""
HTTP tests for the FastAPI app via TestClient; no server process needed.
"""
import pytest
from fastapi.testclient import TestClient

from context_analyzer.main import app


@pytest.fixture
def client():
    return TestClient(app)


MUTUAL = [
    {"path": "src/a.ts", "content": "import { b } from './b'\nexport const a = 1"},
    {"path": "src/b.ts", "content": "import { a } from './a'\nexport const b = 1"},
    {"path": "src/c.ts", "content": "export const c = 1"},
]


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_analyze_returns_results_and_summary(client):
    resp = client.post("/api/analyze", json={"files": MUTUAL})
    assert resp.status_code == 200
    body = resp.json()
    assert [r["file"] for r in body["results"]][-1] == "src/c.ts"
    assert body["results"][0]["severity"] == "critical"
    assert body["summary"]["total_files"] == 3
    assert body["summary"]["critical_issues"] == 2


def test_camel_case_config(client):
    chain = [
        {"path": f"src/f{i}.ts", "content": f"import './f{i + 1}'\nexport const v{i} = 1"}
        for i in range(3)
    ] + [{"path": "src/f3.ts", "content": "export const v3 = 1"}]
    resp = client.post("/api/analyze", json={"files": chain, "config": {"maxDepth": 1}})
    assert resp.status_code == 200
    top = resp.json()["results"][0]
    assert top["file"] == "src/f0.ts"
    assert top["severity"] == "critical"


def test_summary_endpoint(client):
    resp = client.post("/api/analyze/summary", json={"files": MUTUAL})
    assert resp.status_code == 200
    assert resp.json()["total_files"] == 3


def test_empty_request(client):
    resp = client.post("/api/analyze/summary", json={})
    assert resp.status_code == 200
    assert resp.json()["total_files"] == 0


def test_invalid_pattern_is_422(client):
    resp = client.post("/api/analyze", json={
        "files": MUTUAL,
        "config": {"domainPatterns": ["(unclosed"]},
    })
    assert resp.status_code == 422
    assert "(unclosed" in resp.json()["detail"]


def test_invalid_threshold_is_422(client):
    resp = client.post("/api/analyze", json={"files": [], "config": {"maxDepth": -1}})
    assert resp.status_code == 422
