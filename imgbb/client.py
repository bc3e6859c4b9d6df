import os

import httpx
import structlog
from pydantic import ValidationError

from imgbb.config import Settings
from imgbb.config import settings as default_settings
from imgbb.core.exceptions import ErrorKind, ImgBBError, invalid_fields
from imgbb.schemas.images import ApiResponse, ClientConfig, UploadOptions, UploadRequest
from imgbb.services.classifier import classify_response
from imgbb.services.encoder import is_base64
from imgbb.services.uploader import UploadBuilder

logger = structlog.get_logger()

ImageSource = str | bytes | os.PathLike


class ImgBB:
    """Async ImgBB client; every failure is raised as ``ImgBBError``."""

    def __init__(
        self,
        api_key: str,
        *,
        timeout: float | None = None,
        user_agent: str | None = None,
        client: httpx.AsyncClient | None = None,
        upload_url: str | None = None,
    ) -> None:
        if not api_key:
            raise ImgBBError(ErrorKind.MISSING_FIELD, field="api_key")
        config = {"api_key": api_key, "timeout": timeout}
        if user_agent is not None:
            config["user_agent"] = user_agent
        if upload_url is not None:
            config["upload_url"] = upload_url
        try:
            self._config = ClientConfig(**config)
        except ValidationError as e:
            raise ImgBBError(ErrorKind.VALIDATION, f"Invalid client configuration: {invalid_fields(e)}") from None
        self._owns_client = client is None
        self._client = client if client is not None else self._create_client(self._config)

    @staticmethod
    def _create_client(config: ClientConfig) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=config.timeout, headers={"User-Agent": config.user_agent})

    @classmethod
    def builder(cls, api_key: str) -> "ImgBBBuilder":
        return ImgBBBuilder(api_key)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "ImgBB":
        settings = settings or default_settings
        if settings.api_key is None:
            raise ImgBBError(ErrorKind.MISSING_FIELD, field="api_key")
        return cls(
            settings.api_key.get_secret_value(),
            timeout=settings.timeout,
            user_agent=settings.user_agent,
            upload_url=settings.upload_url,
        )

    @property
    def config(self) -> ClientConfig:
        return self._config

    def upload_builder(self) -> UploadBuilder:
        return UploadBuilder(self)

    def read_base64(self, data: str) -> UploadBuilder:
        return self.upload_builder().base64(data)

    def read_bytes(self, data: bytes) -> UploadBuilder:
        return self.upload_builder().bytes(data)

    def read_file(self, path: str | os.PathLike) -> UploadBuilder:
        return self.upload_builder().file(path)

    async def upload(self, source: ImageSource, options: UploadOptions | None = None) -> ApiResponse:
        """``str`` is base64 text, not a path; pass a ``Path`` or use ``upload_file`` for files."""
        if isinstance(source, os.PathLike):
            builder = self.read_file(source)
        elif isinstance(source, (bytes, bytearray)):
            builder = self.read_bytes(bytes(source))
        elif isinstance(source, str):
            if not is_base64(source):
                raise ImgBBError(ErrorKind.VALIDATION, "String source is not base64; use a Path or upload_file for files")
            builder = self.read_base64(source)
        else:
            raise ImgBBError(ErrorKind.VALIDATION, f"Unsupported image source type: {type(source).__name__}")

        if options is not None:
            if options.expiration_seconds is not None:
                builder.expiration(options.expiration_seconds)
            if options.name is not None:
                builder.name(options.name)
            if options.title is not None:
                builder.title(options.title)
            if options.album_id is not None:
                builder.album(options.album_id)
        return await builder.upload()

    async def upload_base64(self, data: str) -> ApiResponse:
        return await self.read_base64(data).upload()

    async def upload_bytes(self, data: bytes) -> ApiResponse:
        return await self.read_bytes(data).upload()

    async def upload_file(self, path: str | os.PathLike) -> ApiResponse:
        return await self.read_file(path).upload()

    async def upload_base64_with_expiration(self, data: str, expiration: int) -> ApiResponse:
        return await self.read_base64(data).expiration(expiration).upload()

    async def upload_bytes_with_expiration(self, data: bytes, expiration: int) -> ApiResponse:
        return await self.read_bytes(data).expiration(expiration).upload()

    async def upload_file_with_expiration(self, path: str | os.PathLike, expiration: int) -> ApiResponse:
        return await self.read_file(path).expiration(expiration).upload()

    async def send(self, request: UploadRequest) -> ApiResponse:
        api_key = self._config.api_key.get_secret_value()
        try:
            response = await self._client.post(
                self._config.upload_url,
                params=request.query_params(api_key),
                data=request.form_fields(),
            )
        except httpx.InvalidURL as e:
            logger.error("image_upload_failed", error=type(e).__name__)
            raise ImgBBError(ErrorKind.VALIDATION, "Invalid upload URL") from e
        except httpx.HTTPError as e:
            logger.error("image_upload_failed", error=type(e).__name__)
            raise ImgBBError(ErrorKind.TRANSPORT, f"Upload request failed: {type(e).__name__}") from e

        try:
            result = classify_response(response.status_code, response.text)
        except ImgBBError as e:
            logger.error("image_upload_rejected", status=e.status, code=e.code, kind=e.kind.value)
            raise

        image_id = result.data.id if result.data else None
        logger.info("image_uploaded", image_id=image_id, status=response.status_code)
        return result

    async def delete(self, delete_url: str) -> None:
        api_key = self._config.api_key.get_secret_value()
        try:
            response = await self._client.delete(delete_url, params={"key": api_key})
        except httpx.InvalidURL as e:
            logger.error("image_delete_failed", error=type(e).__name__)
            raise ImgBBError(ErrorKind.VALIDATION, "Invalid delete URL") from e
        except httpx.HTTPError as e:
            logger.error("image_delete_failed", error=type(e).__name__)
            raise ImgBBError(ErrorKind.TRANSPORT, f"Delete request failed: {type(e).__name__}") from e

        try:
            classify_response(response.status_code, response.text)
        except ImgBBError as e:
            logger.error("image_delete_rejected", status=e.status, code=e.code, kind=e.kind.value)
            raise
        logger.info("image_deleted", status=response.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ImgBB":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"ImgBB(upload_url={self._config.upload_url!r}, timeout={self._config.timeout!r})"


class ImgBBBuilder:
    """A client passed to ``client()`` overrides timeout and user agent."""

    def __init__(self, api_key: str) -> None:
        self._api_key = api_key
        self._timeout: float | None = None
        self._user_agent: str | None = None
        self._client: httpx.AsyncClient | None = None

    def timeout(self, seconds: float) -> "ImgBBBuilder":
        self._timeout = seconds
        return self

    def user_agent(self, user_agent: str) -> "ImgBBBuilder":
        self._user_agent = user_agent
        return self

    def client(self, client: httpx.AsyncClient) -> "ImgBBBuilder":
        self._client = client
        return self

    def build(self) -> ImgBB:
        return ImgBB(self._api_key, timeout=self._timeout, user_agent=self._user_agent, client=self._client)
