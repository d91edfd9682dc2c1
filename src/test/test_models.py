import io
import json

import numpy as np
import pytest

from src.domain.Models.color_range import ColorRange
from src.domain.Models.filter_config import FilterConfig
from src.domain.Models.frame import Frame
from src.domain.Models.ocr_result import OcrResult
from src.domain.Models.processing_options import ProcessingOptions
from src.domain.Models.recognition_report import RecognitionReport
from src.domain.Models.recognized_line import RecognizedLine
from src.domain.Models.rectangle import Rectangle
from src.domain.errors import ImageDecodeError
from src.infrastructure.Imaging.image_loader import decode_frame, encode_image, load_frame
from src.infrastructure.Messaging.console_publisher import ConsolePublisher


def test_color_range_matches_inclusive_bounds():
    cr = ColorRange(min_r=10, max_r=20, min_g=0, max_g=255, min_b=5, max_b=5)

    assert cr.matches(10, 0, 5)
    assert cr.matches(20, 255, 5)
    assert not cr.matches(21, 0, 5)
    assert not cr.matches(15, 0, 6)
    assert cr.lower.tolist() == [10, 0, 5]
    assert cr.upper.tolist() == [20, 255, 5]


@pytest.mark.parametrize("kwargs", [dict(min_r=-1), dict(max_g=256), dict(min_b=200, max_b=100)])
def test_color_range_rejects_invalid_bounds(kwargs):
    with pytest.raises(ValueError):
        ColorRange(**kwargs)


def test_rectangle_corner_test_is_inclusive():
    rect = Rectangle(x=10, y=10, width=5, height=5)

    assert rect.contains_point(10, 10)
    assert rect.contains_point(15, 15)
    assert not rect.contains_point(16, 10)


def test_rectangle_rejects_negative_size():
    with pytest.raises(ValueError):
        Rectangle(x=0, y=0, width=-1, height=5)


@pytest.mark.parametrize("channels", [3, 4])
def test_frame_from_buffer(channels):
    pixels = np.arange(2 * 3 * channels, dtype=np.uint8)
    frame = Frame.from_buffer(pixels.tobytes(), width=3, height=2)

    assert frame.data.shape == (2, 3, 3)
    assert frame.width == 3 and frame.height == 2
    assert frame.data[0, 1].tolist() == pixels[channels:channels + 3].tolist()


def test_frame_from_buffer_rejects_wrong_size():
    with pytest.raises(ImageDecodeError):
        Frame.from_buffer(b"\x00" * 10, width=3, height=2)


def test_frame_to_dict_summarizes_without_pixels():
    frame = Frame(data=np.zeros((4, 6, 3), dtype=np.uint8), timestamp=12.5, source="a.png")

    assert frame.to_dict() == {"source": "a.png", "timestamp": 12.5, "width": 6, "height": 4}
    assert not hasattr(frame, "image")


def test_decode_roundtrip_and_errors(tmp_path):
    image = np.zeros((4, 6, 3), dtype=np.uint8)
    image[..., 0] = 255
    data = encode_image(image)

    frame = decode_frame(data, source="x")
    assert frame.data[0, 0].tolist() == [255, 0, 0]

    path = tmp_path / "img.png"
    path.write_bytes(data)
    assert load_frame(str(path)).source == str(path)

    with pytest.raises(ImageDecodeError):
        decode_frame(b"garbage")
    with pytest.raises(ImageDecodeError):
        load_frame(str(tmp_path / "missing.png"))


def test_filter_config_enabled():
    assert not FilterConfig().enabled
    assert not FilterConfig(contrast=0, brightness=None).enabled
    assert FilterConfig(brightness=-0.3).enabled


def test_processing_options_from_settings():
    class FakeSettings:
        track_min_r, track_max_r = 1, 2
        track_min_g, track_max_g = 3, 4
        track_min_b, track_max_b = 5, 6
        ocr_psm_single_block = False
        filter_greyscale = True
        filter_contrast = 0.0
        filter_brightness = 0.25
        filter_normalize = False
        filter_pre = True
        detect_on_edges = False

    options = ProcessingOptions.from_settings(FakeSettings)

    assert options.color_range == ColorRange(1, 2, 3, 4, 5, 6)
    assert options.psm_single_block is False
    assert options.filters == FilterConfig(greyscale=True, contrast=False, brightness=0.25, normalize=False)
    assert options.pre_filters is True


def test_ocr_result_and_report_serialize():
    result = OcrResult(
        image=b"\x89PNG",
        lines=[RecognizedLine(text="AB123CD", raw="AB123CD ", confidence=0.8)],
        plate="AB123CD",
        rect=Rectangle(x=1, y=2, width=3, height=4),
    )
    report = RecognitionReport(
        event_id="e1", source="s", mode="track", results=[result], captured_at=1.0, processed_at=2.0,
    )

    data = report.to_dict()

    assert data["plates"] == ["AB123CD"]
    assert data["results"][0]["image"] == "data:image/png;base64,iVBORw=="
    assert data["results"][0]["ocr_data"]["lines"][0]["raw"] == "AB123CD "
    assert data["results"][0]["open"] is True
    json.dumps(data)


def test_console_publisher_drops_images_by_default():
    result = OcrResult(image=b"img", lines=[], plate=None)
    report = RecognitionReport(
        event_id="e1", source="s", mode="inner", results=[result], captured_at=1.0, processed_at=2.0,
    )
    out = io.StringIO()

    ConsolePublisher(stream=out).publish(report)

    printed = json.loads(out.getvalue())
    assert "image" not in printed["results"][0]
    assert printed["results"][0]["open"] is False
