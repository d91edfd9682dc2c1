import cv2
import numpy as np
import pytest
from fastapi.testclient import TestClient

from src.api.main import app
from src.application.plate_recognition_service import PlateRecognitionService
from src.domain.Models.rectangle import Rectangle
from src.test.fakes import ReaderFactory, ScriptedColorTracker, ScriptedOCRReader


def png_bytes(width=80, height=40) -> bytes:
    ok, buf = cv2.imencode(".png", np.full((height, width, 3), 128, dtype=np.uint8))
    assert ok
    return buf.tobytes()


@pytest.fixture
def client(enhancer, extractor):
    def install(scans, reader):
        service = PlateRecognitionService(
            color_tracker=ScriptedColorTracker(scans),
            ocr_factory=ReaderFactory(reader),
            enhancer=enhancer,
            extractor=extractor,
            prepare_workers=1,
        )
        app.state.service = service
        return service

    yield TestClient(app), install
    if app.state.service is not None:
        app.state.service.close()
    app.state.service = None


def test_health(client):
    http, _ = client
    response = http.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_recognize_track(client):
    http, install = client
    install([[Rectangle(x=0, y=0, width=20, height=20)]], ScriptedOCRReader(responses=[["AB123CD"]]))

    response = http.post("/recognize", files={"file": ("car.png", png_bytes(), "image/png")})

    assert response.status_code == 200
    body = response.json()
    assert body["mode"] == "track"
    assert body["source"] == "car.png"
    assert body["plates"] == ["AB123CD"]
    assert body["results"][0]["image"].startswith("data:image/png;base64,")
    assert body["results"][0]["show_ocr_data"] is False


def test_recognize_rect(client):
    http, install = client
    reader = ScriptedOCRReader(responses=[["QQ555RR"]])
    install([], reader)

    response = http.post(
        "/recognize",
        params={"mode": "rect", "x": 5, "y": 5, "width": 30, "height": 10, "psm_single_block": False},
        files={"file": ("car.png", png_bytes(), "image/png")},
    )

    assert response.status_code == 200
    assert response.json()["results"][0]["rect"] == {"x": 5, "y": 5, "width": 30, "height": 10, "color": None}
    assert reader.psm.value == "single_line"


def test_rect_mode_needs_full_rectangle(client):
    http, install = client
    install([], ScriptedOCRReader())

    response = http.post(
        "/recognize",
        params={"mode": "rect", "x": 5},
        files={"file": ("car.png", png_bytes(), "image/png")},
    )
    assert response.status_code == 422


def test_undecodable_upload_is_rejected(client):
    http, install = client
    install([], ScriptedOCRReader())

    response = http.post("/recognize", files={"file": ("car.png", b"not an image", "image/png")})
    assert response.status_code == 400


def test_engine_failure_maps_to_bad_gateway(client):
    http, install = client
    install([[Rectangle(x=0, y=0, width=20, height=20)]], ScriptedOCRReader(fail_on="load"))

    response = http.post("/recognize", files={"file": ("car.png", png_bytes(), "image/png")})
    assert response.status_code == 502
