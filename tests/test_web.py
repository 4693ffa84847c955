"""Tests for the FastAPI web adapter."""

import pytest
from fastapi.testclient import TestClient

from web.app import app, MAX_PROGRAM_SIZE


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_run_program(client):
    program = "0010 000 000000010\n1111 0000 0010 0001\n1111 0000 0010 0101\n0000 0000 0100 0001\n"
    response = client.post("/api/run", json={"program": program})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "ok"
    assert body["output_text"] == "A"
    assert body["steps_executed"] == 3
    assert body["error"] is None


def test_run_with_options(client):
    response = client.post(
        "/api/run",
        json={
            "program": "0001 001 001 1 00111\n0011 001 000000010\n1111 0000 0010 0101",
            "options": {"trace_watch": [4], "trace_include_registers": False},
        },
    )
    body = response.json()
    assert body["trace_watch"] == [4]
    assert body["trace"][-1]["mem"] == {"4": 8}
    assert "registers" not in body["trace"][-1]


def test_run_error_reported_in_body(client):
    response = client.post("/api/run", json={"program": "0100 0000 0000 0000"})
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "error"
    assert body["error"]["type"] == "IllegalOpcode"


def test_program_too_large(client):
    response = client.post("/api/run", json={"program": "0" * (MAX_PROGRAM_SIZE + 1)})
    assert response.status_code == 400


def test_invalid_watch_address(client):
    response = client.post(
        "/api/run",
        json={"program": "1111 0000 0010 0101", "options": {"trace_watch": [50]}},
    )
    assert response.status_code == 400


def test_invalid_max_steps(client):
    response = client.post(
        "/api/run",
        json={"program": "1111 0000 0010 0101", "options": {"max_steps": 0}},
    )
    assert response.status_code == 422
