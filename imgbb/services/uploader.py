import os
from typing import TYPE_CHECKING

from pydantic import ValidationError

from imgbb.core.exceptions import ErrorKind, ImgBBError, invalid_fields
from imgbb.schemas.images import ApiResponse, UploadRequest
from imgbb.services.encoder import encode_image, normalize_base64, read_image_file

if TYPE_CHECKING:
    from imgbb.client import ImgBB


class UploadBuilder:
    """Chained setters for one upload; only the payload is required."""

    def __init__(self, client: "ImgBB | None" = None) -> None:
        self._client = client
        self._payload: str | None = None
        self._expiration: int | None = None
        self._name: str | None = None
        self._title: str | None = None
        self._album: str | None = None

    def base64(self, data: str) -> "UploadBuilder":
        self._payload = normalize_base64(data)
        return self

    def bytes(self, data: bytes) -> "UploadBuilder":
        self._payload = encode_image(data)
        return self

    def file(self, path: str | os.PathLike) -> "UploadBuilder":
        self._payload = read_image_file(path)
        return self

    def expiration(self, seconds: int) -> "UploadBuilder":
        self._expiration = seconds
        return self

    def name(self, name: str) -> "UploadBuilder":
        self._name = name
        return self

    def title(self, title: str) -> "UploadBuilder":
        self._title = title
        return self

    def album(self, album_id: str) -> "UploadBuilder":
        self._album = album_id
        return self

    def build(self) -> UploadRequest:
        if not self._payload:
            raise ImgBBError(ErrorKind.MISSING_FIELD, field="image")
        try:
            return UploadRequest(
                image_payload=self._payload,
                expiration_seconds=self._expiration,
                name=self._name,
                title=self._title,
                album_id=self._album,
            )
        except ValidationError as e:
            raise ImgBBError(ErrorKind.VALIDATION, f"Invalid upload parameters: {invalid_fields(e)}") from None

    async def upload(self) -> ApiResponse:
        request = self.build()
        if self._client is None:
            raise ImgBBError(ErrorKind.VALIDATION, "UploadBuilder is not bound to a client")
        return await self._client.send(request)

    def __repr__(self) -> str:
        return (
            f"UploadBuilder(has_payload={self._payload is not None}, expiration={self._expiration!r}, "
            f"name={self._name!r}, title={self._title!r}, album={self._album!r})"
        )
