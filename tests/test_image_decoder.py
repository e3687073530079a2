"""Tests for data-URI image decoding."""
import base64

import pytest

from app.services.image_decoder import (
    DecodedImage,
    ImageDecodeError,
    decode_image,
    prepare_for_docx,
)
from tests.conftest import data_uri, image_bytes


def test_decode_returns_exact_bytes():
    raw = image_bytes()
    decoded = decode_image(data_uri(raw))
    assert decoded.data == raw
    assert decoded.subtype == "png"


def test_decode_accepts_subtypes_with_plus_and_dash():
    payload = base64.b64encode(b"<svg/>").decode()
    assert decode_image(f"data:image/svg+xml;base64,{payload}").subtype == "svg+xml"
    assert decode_image(f"data:image/x-icon;base64,{payload}").subtype == "x-icon"


def test_decode_ignores_line_breaks_in_payload():
    raw = image_bytes()
    encoded = base64.b64encode(raw).decode()
    wrapped = "\n".join(encoded[i:i + 16] for i in range(0, len(encoded), 16))
    assert decode_image(f"data:image/png;base64,{wrapped}").data == raw


@pytest.mark.parametrize(
    "value",
    [
        "",
        "not a data uri",
        "iVBORw0KGgo=",
        "data:text/plain;base64,aGVsbG8=",
        "data:image/png,aGVsbG8=",
        "data:image/png;base64,",
        "data:image/;base64,aGVsbG8=",
        "data:image/png;base64,@@@not-base64@@@",
        None,
        {"type": "image"},
    ],
)
def test_decode_rejects_malformed_input(value):
    with pytest.raises(ImageDecodeError):
        decode_image(value)


def test_decode_error_is_a_value_error():
    with pytest.raises(ValueError):
        decode_image("data:image/png;base64,***")


def test_prepare_passes_native_formats_through():
    raw = image_bytes("JPEG")
    stream = prepare_for_docx(DecodedImage(raw, "jpeg"))
    assert stream.getvalue() == raw


def test_prepare_converts_other_formats_to_png():
    raw = image_bytes("PPM")
    stream = prepare_for_docx(DecodedImage(raw, "x-portable-pixmap"))
    assert stream.getvalue().startswith(b"\x89PNG")


def test_prepare_rejects_non_image_bytes():
    with pytest.raises(ImageDecodeError):
        prepare_for_docx(DecodedImage(b"definitely not an image", "png"))
