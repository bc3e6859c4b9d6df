from pathlib import Path

import pytest
from pydantic import SecretStr

from imgbb.config import DEFAULT_UPLOAD_URL, Settings


class TestConfigDefaults:
    def test_api_key_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("IMGBB_API_KEY", raising=False)
        s = Settings(_env_file=None)
        assert s.api_key is None

    def test_timeout_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.timeout is None

    def test_user_agent_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.user_agent.startswith("imgbb/")

    def test_upload_url_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.upload_url == DEFAULT_UPLOAD_URL == "https://api.imgbb.com/1/upload"

    def test_log_level_default(self) -> None:
        s = Settings(_env_file=None)
        assert s.log_level == "info"


class TestConfigFromEnvironment:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMGBB_API_KEY", "env-key")
        monkeypatch.setenv("IMGBB_TIMEOUT", "12.5")
        s = Settings(_env_file=None)
        assert isinstance(s.api_key, SecretStr)
        assert s.api_key.get_secret_value() == "env-key"
        assert s.timeout == 12.5

    def test_api_key_hidden_in_repr(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IMGBB_API_KEY", "env-key")
        s = Settings(_env_file=None)
        assert "env-key" not in repr(s)

    def test_reads_env_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("IMGBB_API_KEY", raising=False)
        env_file = tmp_path / ".env"
        env_file.write_text("IMGBB_API_KEY=file-key\nIMGBB_LOG_LEVEL=debug\n")
        s = Settings(_env_file=env_file)
        assert s.api_key.get_secret_value() == "file-key"
        assert s.log_level == "debug"
