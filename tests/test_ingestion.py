"""
Tests for image ingestion and upload validation.
"""
import asyncio
import base64
import io
import tempfile
from pathlib import Path

import pytest
from PIL import Image

from cinefilter.exceptions import UnreadableFileError
from cinefilter.ingestion import FileValidator, ImageFile, ImageIngestAdapter


def image_bytes(fmt="PNG", size=(16, 16)):
    buffer = io.BytesIO()
    Image.new("RGB", size, color="red").save(buffer, fmt)
    return buffer.getvalue()


@pytest.fixture
def png():
    return ImageFile(filename="photo.png", media_type="image/png", data=image_bytes())


@pytest.fixture
def adapter():
    return ImageIngestAdapter()


class TestFileValidator:

    def test_valid_png(self):
        is_valid, error = FileValidator.validate_image_bytes(image_bytes(), "image/png")
        assert is_valid
        assert error is None

    def test_valid_jpeg(self):
        is_valid, _ = FileValidator.validate_image_bytes(image_bytes("JPEG"), "image/jpeg")
        assert is_valid

    @pytest.mark.parametrize("media_type", [None, "", "text/plain", "application/pdf"])
    def test_non_image_media_type(self, media_type):
        is_valid, error = FileValidator.validate_image_bytes(image_bytes(), media_type)
        assert not is_valid
        assert "not an image" in error

    def test_empty_file(self):
        is_valid, error = FileValidator.validate_image_bytes(b"", "image/png")
        assert not is_valid
        assert "empty" in error

    def test_too_large(self):
        data = image_bytes()
        is_valid, error = FileValidator.validate_image_bytes(data, "image/png", max_size=len(data) - 1)
        assert not is_valid
        assert "exceeds maximum" in error

    def test_corrupt_content(self):
        is_valid, error = FileValidator.validate_image_bytes(b"definitely not an image", "image/png")
        assert not is_valid
        assert "not a valid image" in error


    def test_decompression_bomb_rejected(self, monkeypatch):
        # Pillow raises once the pixel count exceeds twice the limit
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        is_valid, error = FileValidator.validate_image_bytes(image_bytes(size=(64, 64)), "image/png")
        assert not is_valid
        assert "too large" in error

    def test_decompression_bomb_is_unreadable(self, monkeypatch):
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
        bomb = ImageFile(filename="bomb.png", media_type="image/png", data=image_bytes(size=(64, 64)))
        with pytest.raises(UnreadableFileError, match="too large"):
            ImageIngestAdapter().ingest(bomb)


class TestImageIngestAdapter:

    def test_produces_data_url(self, adapter, png):
        handle = adapter.ingest(png)
        prefix = "data:image/png;base64,"
        assert handle.startswith(prefix)
        assert base64.b64decode(handle[len(prefix):]) == png.data

    def test_rejects_unreadable(self, adapter):
        bad = ImageFile(filename="x.png", media_type="image/png", data=b"garbage")
        with pytest.raises(UnreadableFileError, match="not a valid image"):
            adapter.ingest(bad)

    def test_respects_size_limit(self, png):
        with pytest.raises(UnreadableFileError, match="exceeds maximum"):
            ImageIngestAdapter(max_image_bytes=10).ingest(png)

    def test_picker_uses_first_file(self, adapter, png):
        other = ImageFile(filename="other.jpg", media_type="image/jpeg", data=image_bytes("JPEG"))
        assert adapter.ingest_selection([png, other]).startswith("data:image/png")

    def test_drop_uses_first_file(self, adapter, png):
        other = ImageFile(filename="other.jpg", media_type="image/jpeg", data=image_bytes("JPEG"))
        assert adapter.ingest_drop([other, png]).startswith("data:image/jpeg")

    def test_empty_selection(self, adapter):
        assert adapter.ingest_selection([]) is None
        assert adapter.ingest_drop([]) is None

    def test_picker_and_drop_share_type_check(self, adapter):
        text = ImageFile(filename="notes.txt", media_type="text/plain", data=image_bytes())
        with pytest.raises(UnreadableFileError):
            adapter.ingest_selection([text])
        with pytest.raises(UnreadableFileError):
            adapter.ingest_drop([text])

    def test_async_ingest(self, adapter, png):
        handle = asyncio.run(adapter.aingest(png))
        assert handle == adapter.ingest(png)


class TestImageFileFromPath:

    def test_reads_and_guesses_type(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "photo.jpg"
            path.write_bytes(image_bytes("JPEG"))

            image_file = ImageFile.from_path(str(path))

            assert image_file.filename == "photo.jpg"
            assert image_file.media_type == "image/jpeg"
            assert image_file.data == path.read_bytes()

    def test_missing_file(self):
        with pytest.raises(UnreadableFileError, match="Cannot read file"):
            ImageFile.from_path("/nonexistent/photo.png")
