from __future__ import annotations

from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from api.files import router
from config.settings import settings


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(tmp_path / "uploads"), raising=False)
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 64, raising=False)
    app = FastAPI()
    app.include_router(router)
    return TestClient(app)


def test_upload_returns_absolute_paths(client, tmp_path):
    res = client.post(
        "/api/files/upload",
        files={
            "resume": ("cv.txt", b"resume body", "text/plain"),
            "jobDescription": ("jd.pdf", b"%PDF-1.4", "application/pdf"),
        },
    )

    assert res.status_code == 200, res.text
    body = res.json()
    assert body["message"] == "Files uploaded successfully"
    resume = Path(body["data"]["resume"])
    assert resume.is_absolute() and resume.read_bytes() == b"resume body"
    assert resume.parent == (tmp_path / "uploads").resolve()


def test_upload_requires_both_files(client):
    res = client.post("/api/files/upload", files={"resume": ("cv.txt", b"resume body", "text/plain")})

    assert res.status_code == 400
    assert res.json()["detail"] == "Please upload both resume and job description files"


def test_upload_enforces_size_and_type(client):
    res = client.post(
        "/api/files/upload",
        files={
            "resume": ("cv.txt", b"x" * 100, "text/plain"),
            "jobDescription": ("jd.txt", b"short", "text/plain"),
        },
    )
    assert res.status_code == 400
    assert "too large" in res.json()["detail"]

    res = client.post(
        "/api/files/upload",
        files={
            "resume": ("cv.png", b"png", "image/png"),
            "jobDescription": ("jd.txt", b"short", "text/plain"),
        },
    )
    assert res.status_code == 400
