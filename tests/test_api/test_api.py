"""Tests for API endpoints."""

from __future__ import annotations

import base64

import numpy as np
from fastapi.testclient import TestClient

from quadsketch.main import app
from tests.conftest import MIXED_2X2, ZEROS_2X2, png_bytes, random_grid


client = TestClient(app)


def _b64(grid: np.ndarray) -> str:
    return base64.b64encode(png_bytes(grid)).decode("ascii")


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["stages_registered"] == 5


def test_sketch_uniform():
    response = client.post(
        "/api/sketch",
        json={"image_base64": _b64(ZEROS_2X2), "minimum_cell_size": 1},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["sketch"] == "."
    assert data["encoded_size"] == 2
    assert data["leaf_count"] == 1
    assert data["grid_size"] == 2
    assert data["lossless_merges"] == 1
    assert data["lossy_merges"] == 0


def test_sketch_mixed():
    response = client.post(
        "/api/sketch",
        json={"image_base64": _b64(MIXED_2X2), "minimum_cell_size": 1},
    )
    assert response.status_code == 200
    assert response.json()["sketch"] == "(...#)"


def test_sketch_budget_and_seed():
    payload = {
        "image_base64": _b64(random_grid(32, seed=8)),
        "minimum_cell_size": 1,
        "encoded_size_budget": 300,
        "seed": 4,
    }
    first = client.post("/api/sketch", json=payload)
    second = client.post("/api/sketch", json=payload)
    assert first.status_code == 200
    assert first.json()["encoded_size"] <= 300
    assert first.json()["lossy_merges"] > 0
    assert first.json()["sketch"] == second.json()["sketch"]


def test_sketch_invalid_base64():
    response = client.post("/api/sketch", json={"image_base64": "@@not base64@@"})
    assert response.status_code == 400


def test_sketch_not_an_image():
    payload = {"image_base64": base64.b64encode(b"plain text").decode("ascii")}
    response = client.post("/api/sketch", json=payload)
    assert response.status_code == 400
    assert "cannot read image" in response.json()["detail"]


def test_sketch_invalid_cell_size():
    response = client.post(
        "/api/sketch",
        json={"image_base64": _b64(ZEROS_2X2), "minimum_cell_size": 0},
    )
    assert response.status_code == 400
    assert "cell size" in response.json()["detail"]
