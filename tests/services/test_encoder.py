import base64
from io import BytesIO
from pathlib import Path

import pytest
from PIL import Image

from imgbb.core.exceptions import ErrorKind, ImgBBError
from imgbb.services import encoder


def _make_test_image(width: int = 1, height: int = 1, fmt: str = "PNG") -> bytes:
    img = Image.new("RGB", (width, height), color="red")
    buffer = BytesIO()
    img.save(buffer, format=fmt)
    return buffer.getvalue()


class TestEncodeImage:
    def test_png_round_trip(self) -> None:
        data = _make_test_image()
        assert base64.b64decode(encoder.encode_image(data)) == data

    def test_all_byte_values(self) -> None:
        data = bytes(range(256))
        assert base64.b64decode(encoder.encode_image(data)) == data

    def test_empty(self) -> None:
        assert encoder.encode_image(b"") == ""

    def test_returns_text(self) -> None:
        assert encoder.encode_image(b"\x89PNG") == "iVBORw=="


class TestNormalizeBase64:
    def test_plain_passthrough(self) -> None:
        assert encoder.normalize_base64("aGVsbG8=") == "aGVsbG8="

    def test_strips_data_url_prefix(self) -> None:
        assert encoder.normalize_base64("data:image/png;base64,aGVsbG8=") == "aGVsbG8="

    def test_strips_whitespace(self) -> None:
        assert encoder.normalize_base64("  aGVsbG8=\n") == "aGVsbG8="


class TestIsBase64:
    def test_valid(self) -> None:
        assert encoder.is_base64("aGVsbG8=")

    def test_data_url(self) -> None:
        assert encoder.is_base64("data:image/png;base64,aGVsbG8=")

    def test_file_name_is_not_base64(self) -> None:
        assert not encoder.is_base64("photo.png")

    def test_non_ascii(self) -> None:
        assert not encoder.is_base64("caf\u00e9")


class TestReadImageFile:
    def test_reads_and_encodes(self, tmp_path: Path) -> None:
        data = _make_test_image(fmt="JPEG")
        image_path = tmp_path / "img.jpg"
        image_path.write_bytes(data)
        assert base64.b64decode(encoder.read_image_file(image_path)) == data

    def test_accepts_str_path(self, tmp_path: Path) -> None:
        image_path = tmp_path / "img.png"
        image_path.write_bytes(b"abc")
        assert encoder.read_image_file(str(image_path)) == "YWJj"

    def test_missing_file(self, tmp_path: Path) -> None:
        missing = tmp_path / "missing.png"
        with pytest.raises(ImgBBError) as exc_info:
            encoder.read_image_file(missing)
        assert exc_info.value.kind is ErrorKind.IO
        assert str(missing) in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, FileNotFoundError)

    def test_directory_is_io_error(self, tmp_path: Path) -> None:
        with pytest.raises(ImgBBError) as exc_info:
            encoder.read_image_file(tmp_path)
        assert exc_info.value.kind is ErrorKind.IO
