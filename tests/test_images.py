# tests/test_images.py
import asyncio
import base64
import io
import logging

from PIL import Image

from product_form.utils.images import (
    encode_data_url,
    guess_mime,
    is_oversized,
    read_image_as_data_url,
)


def test_jpeg_file_becomes_data_url(sample_jpeg_file):
    data = asyncio.run(read_image_as_data_url(sample_jpeg_file))
    assert data.startswith("data:image/jpeg;base64,")
    raw = base64.b64decode(data.split(",", 1)[1])
    assert raw == sample_jpeg_file.read_bytes()


def test_no_file_is_noop():
    assert asyncio.run(read_image_as_data_url(None)) is None


def test_non_image_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "notes.txt"
    path.write_text("not a picture")
    with caplog.at_level(logging.WARNING):
        assert asyncio.run(read_image_as_data_url(path)) is None
    assert "not an image" in caplog.text


def test_mime_sniffed_when_extension_missing(tmp_path):
    bio = io.BytesIO()
    Image.new("RGB", (10, 10), (0, 0, 255)).save(bio, format="PNG")
    path = tmp_path / "upload"
    path.write_bytes(bio.getvalue())
    data = asyncio.run(read_image_as_data_url(path))
    assert data.startswith("data:image/png;base64,")


def test_oversized_image_is_still_accepted(sample_jpeg_file, caplog):
    with caplog.at_level(logging.WARNING):
        data = asyncio.run(read_image_as_data_url(sample_jpeg_file, max_bytes=10))
    assert data is not None
    assert "advisory limit" in caplog.text


def test_helpers():
    assert guess_mime(b"<svg/>", "logo.svg") == "image/svg+xml"
    assert guess_mime(b"plain text", "") is None
    assert encode_data_url(b"abc", "image/gif") == "data:image/gif;base64,YWJj"
    assert is_oversized(3 * 1024 * 1024, 2 * 1024 * 1024)
    assert not is_oversized(100, 0)


def test_missing_file_is_ignored(tmp_path, caplog):
    path = tmp_path / "gone.jpg"
    with caplog.at_level(logging.WARNING):
        assert asyncio.run(read_image_as_data_url(path)) is None
    assert "Could not read gone.jpg" in caplog.text
