from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UPLOAD_URL = "https://api.imgbb.com/1/upload"
DEFAULT_USER_AGENT = "imgbb/1.4.0"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", env_prefix="IMGBB_")

    api_key: SecretStr | None = None
    timeout: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    upload_url: str = DEFAULT_UPLOAD_URL
    log_level: str = "info"


settings = Settings()
