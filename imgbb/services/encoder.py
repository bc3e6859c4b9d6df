import base64
import os
from pathlib import Path

import structlog

from imgbb.core.exceptions import ErrorKind, ImgBBError

logger = structlog.get_logger()


def encode_image(image_bytes: bytes) -> str:
    return base64.b64encode(image_bytes).decode()


def normalize_base64(base64_data: str) -> str:
    base64_data = base64_data.strip()
    if ";base64," in base64_data:
        base64_data = base64_data.split(";base64,", 1)[1]
    return base64_data


def is_base64(text: str) -> bool:
    try:
        base64.b64decode(normalize_base64(text), validate=True)
    except ValueError:
        return False
    return True


def read_image_file(path: str | os.PathLike) -> str:
    image_path = Path(path)
    try:
        image_bytes = image_path.read_bytes()
    except OSError as e:
        logger.error("image_read_failed", path=str(image_path), error=str(e))
        raise ImgBBError(ErrorKind.IO, f"Cannot read image file {image_path}: {e.strerror or e}") from e
    return encode_image(image_bytes)
