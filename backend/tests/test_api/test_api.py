"""Tests for API endpoints (remote fetches are served by httpx.MockTransport)."""

from __future__ import annotations

import json

import httpx
import pytest
from fastapi.testclient import TestClient

from img2brl.acquisition.fetcher import SourceAcquirer
from img2brl.dependencies import get_acquirer, get_conversion_service
from img2brl.engine.conversion import ConversionService
from img2brl.main import app
from img2brl.tactile.converter import TactileConverter
from tests.conftest import SAMPLE_PNG


client = TestClient(app)


def _remote(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/cat.png":
        return httpx.Response(200, content=SAMPLE_PNG, headers={"Content-Type": "image/png"})
    if request.url.path == "/text":
        return httpx.Response(200, content=b"hello", headers={"Content-Type": "text/plain"})
    return httpx.Response(404, content=b"not here")


class BrokenConverter(TactileConverter):
    def convert(self, image):
        return b"Width: 3\nHeight: 2\n"


class CrashingConverter(TactileConverter):
    def convert(self, image):
        raise RuntimeError("segfault in disguise")


@pytest.fixture(autouse=True)
def mock_remote():
    app.dependency_overrides[get_acquirer] = lambda: SourceAcquirer(
        timeout=1.0, max_redirects=3, transport=httpx.MockTransport(_remote)
    )
    yield
    app.dependency_overrides.clear()


def _upload(**fields):
    return client.post(
        "/api/convert",
        files={"img": ("sample.png", SAMPLE_PNG, "image/png")},
        data=fields,
    )


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["transforms_registered"] == 4
    assert data["converter"] == "builtin"


def test_formats_lists_png():
    response = client.get("/api/formats")
    assert response.status_code == 200
    formats = {f["name"]: f for f in response.json()["formats"]}
    assert "PNG" in formats
    assert ".png" in formats["PNG"]["extensions"]


def test_upload_markup_default():
    response = _upload()
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    text = response.text
    assert "Filename: sample.png\n" in text
    assert "Content type: image/png\n" in text
    assert "Format: PNG\n" in text
    assert "Width: 100\n" in text
    assert "Height: 25\n" in text
    assert float(response.headers["x-processing-time"]) >= 0


def test_upload_structured_with_resize():
    response = _upload(mode="structured", resize="on", cols="50")
    assert response.status_code == 200
    doc = response.json()
    assert doc["src"]["filename"] == "sample.png"
    assert (doc["src"]["width"], doc["src"]["height"]) == (200, 100)
    # 200px → 100px wide, 50px tall → 50×13 cells
    assert (doc["width"], doc["height"]) == (50, 13)
    assert len(doc["braille"].split("\n")[0]) == 50
    assert doc["runtime"]["seconds"] >= 0


def test_upload_invalid_columns_skips_resize():
    doc = _upload(mode="structured", resize="on", cols="many").json()
    assert doc["width"] == 100


def test_upload_plain():
    response = _upload(mode="plain", trim="on")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    # Trimmed to the 40×40 square: 20×10 full cells
    assert response.text == ("⣿" * 20 + "\n") * 10


def test_upload_unsupported_format():
    response = client.post(
        "/api/convert",
        files={"img": ("notes.txt", b"just some text", "text/plain")},
        data={"mode": "json"},
    )
    assert response.status_code == 415
    doc = response.json()
    assert doc["exception"] == "UnsupportedFormat"
    assert "runtime" in doc


def test_url_fetch_structured():
    response = client.get("/api/convert", params={"url": "http://images.test/cat.png", "mode": "structured"})
    assert response.status_code == 200
    doc = response.json()
    assert doc["src"]["url"] == "http://images.test/cat.png"
    assert doc["src"]["content-type"] == "image/png"


def test_url_fetch_404_markup():
    response = client.post("/api/convert", data={"url": "http://images.test/missing.png"})
    assert response.status_code == 404
    assert response.headers["x-upstream-status"] == "404 Not Found"
    assert "An error occurred while fetching URL" in response.text


def test_url_fetch_404_structured():
    response = client.get("/api/convert", params={"url": "http://images.test/missing.png", "mode": "json"})
    assert response.status_code == 404
    assert response.json()["exception"] == "HttpFetchFailed"


def test_url_not_an_image():
    response = client.get("/api/convert", params={"url": "http://images.test/text", "mode": "text"})
    assert response.status_code == 415
    assert response.text.startswith("Unsupported image format:")


def test_landing_view():
    response = client.get("/api/convert")
    assert response.status_code == 200
    assert "Convert images to Braille" in response.text
    assert json.loads(client.get("/api/convert", params={"mode": "structured"}).text).keys() == {"runtime"}


def test_invalid_mode_falls_back_to_markup():
    response = client.get("/api/convert", params={"mode": "xml"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")


def test_lang_selection():
    assert 'lang="de"' in client.get("/api/convert", params={"lang": "de"}).text
    assert 'lang="en"' in client.get("/api/convert", params={"lang": "fr"}).text


def test_malformed_converter_output():
    app.dependency_overrides[get_conversion_service] = lambda: ConversionService(converter=BrokenConverter())
    response = _upload(mode="structured")
    assert response.status_code == 500
    assert response.json()["exception"] == "MalformedTactileOutput"


def test_unanticipated_error_is_rendered():
    app.dependency_overrides[get_conversion_service] = lambda: ConversionService(converter=CrashingConverter())
    response = _upload(mode="structured")
    assert response.status_code == 500
    doc = response.json()
    assert doc["exception"] == "InternalError"
    assert "segfault" not in doc["message"]
