from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from imgbb.config import DEFAULT_UPLOAD_URL, DEFAULT_USER_AGENT


class ImageVariant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    filename: str | None = None
    name: str | None = None
    mime_type: str | None = Field(default=None, alias="mime")
    extension: str | None = None
    url: str | None = None


class UploadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str | None = None
    title: str | None = None
    direct_url: str | None = Field(default=None, alias="url")
    viewer_url: str | None = Field(default=None, alias="url_viewer")
    display_url: str | None = None
    delete_url: str | None = None
    width: int | None = None
    height: int | None = None
    size_bytes: int | None = Field(default=None, alias="size")
    created_at: datetime | None = Field(default=None, alias="time")
    expires_in_seconds: int | None = Field(default=None, alias="expiration")
    image: ImageVariant | None = None
    thumbnail: ImageVariant | None = Field(default=None, alias="thumb")
    medium: ImageVariant | None = None

    @field_validator("created_at", mode="before")
    @classmethod
    def _unix_time(cls, value: object) -> object:
        if isinstance(value, str) and value.isdigit():
            return int(value)
        return value


class ApiErrorBody(BaseModel):
    message: str | None = None
    code: int | None = None
    context: str | None = None


class ApiResponse(BaseModel):
    data: UploadResult | None = None
    success: bool | None = None
    status: int | None = None
    error: ApiErrorBody | None = None
    status_code: int | None = None
    status_txt: str | None = None


class UploadOptions(BaseModel):
    expiration_seconds: int | None = Field(default=None, ge=0)
    name: str | None = None
    title: str | None = None
    album_id: str | None = None


class UploadRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    image_payload: str = Field(min_length=1, repr=False)
    expiration_seconds: int | None = Field(default=None, ge=0)
    name: str | None = None
    title: str | None = None
    album_id: str | None = None

    def query_params(self, api_key: str) -> dict[str, str]:
        params = {"key": api_key}
        if self.expiration_seconds is not None:
            params["expiration"] = str(self.expiration_seconds)
        return params

    def form_fields(self) -> dict[str, str]:
        fields = {"image": self.image_payload}
        if self.name is not None:
            fields["name"] = self.name
        if self.title is not None:
            fields["title"] = self.title
        if self.album_id is not None:
            fields["album"] = self.album_id
        return fields


class ClientConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    api_key: SecretStr
    timeout: float | None = Field(default=None, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
    upload_url: str = DEFAULT_UPLOAD_URL
