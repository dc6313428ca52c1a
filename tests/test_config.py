"""Tests for resumectl.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from resumectl.core.config import (
    DEFAULT_BATCH_SIZE,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_FILES,
    DEFAULT_SECONDS_PER_FILE,
    DEFAULT_TIMEOUT,
    Config,
    Profile,
    get_token,
)
from resumectl.core.exceptions import ConfigurationError, ProfileNotFoundError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "RESUMECTL_URL",
        "RESUMECTL_TOKEN",
        "RESUMECTL_PROFILE",
        "RESUMECTL_VERIFY_SSL",
        "RESUMECTL_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Profile Tests
# =============================================================================


class TestProfile:
    """Tests for Profile dataclass."""

    def test_default_values(self):
        profile = Profile(url="https://api.example.org")
        assert profile.verify_ssl is True
        assert profile.timeout == DEFAULT_TIMEOUT
        assert profile.batch_size == DEFAULT_BATCH_SIZE
        assert profile.max_files == DEFAULT_MAX_FILES
        assert profile.max_file_size == DEFAULT_MAX_FILE_SIZE
        assert profile.seconds_per_file == DEFAULT_SECONDS_PER_FILE
        assert profile.token is None

    def test_to_dict_excludes_token(self):
        data = Profile(url="https://api.example.org", token="secret").to_dict()
        assert "token" not in data
        assert data["batch_size"] == 5

    def test_from_dict(self):
        profile = Profile.from_dict(
            {"url": "https://api.example.org", "batch_size": 2, "token": "t"}
        )
        assert profile.batch_size == 2
        assert profile.token == "t"
        assert profile.max_files == DEFAULT_MAX_FILES


# =============================================================================
# Config Tests
# =============================================================================


class TestConfig:
    """Tests for Config loading and saving."""

    def test_load_missing_file(self, temp_dir: Path):
        config = Config.load(temp_dir / "missing.yaml")
        assert config.profiles == {}
        assert config.default_profile == "default"

    def test_load_yaml(self, temp_dir: Path, sample_config_yaml: str):
        path = temp_dir / "config.yaml"
        path.write_text(sample_config_yaml)

        config = Config.load(path)

        assert config.default_profile == "test"
        test = config.get_profile()
        assert test.url == "https://api-test.example.org/api/v1"
        assert test.verify_ssl is False
        assert test.timeout == 30
        assert test.batch_size == 3
        assert config.get_profile("production").timeout == 600

    def test_load_invalid_yaml(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("profiles: [unclosed")

        with pytest.raises(ConfigurationError):
            Config.load(path)

    def test_env_url_overrides_default_profile(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ):
        path = temp_dir / "config.yaml"
        path.write_text(
            "profiles:\n  default:\n    url: https://old.example.org\n    batch_size: 2\n"
        )
        monkeypatch.setenv("RESUMECTL_URL", "https://env.example.org")
        monkeypatch.setenv("RESUMECTL_VERIFY_SSL", "false")
        monkeypatch.setenv("RESUMECTL_TIMEOUT", "45")

        profile = Config.load(path).get_profile("default")

        assert profile.url == "https://env.example.org"
        assert profile.verify_ssl is False
        assert profile.timeout == 45
        assert profile.batch_size == 2

    def test_env_bad_timeout(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESUMECTL_URL", "https://env.example.org")
        monkeypatch.setenv("RESUMECTL_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError, match="Timeout"):
            Config.load(temp_dir / "missing.yaml")

    def test_env_profile(self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESUMECTL_PROFILE", "production")

        assert Config.load(temp_dir / "missing.yaml").default_profile == "production"

    def test_save_round_trip_without_token(self, temp_dir: Path):
        path = temp_dir / "nested" / "config.yaml"
        config = Config()
        config.add_profile("local", "http://localhost:8000/api/v1", batch_size=4)
        config.profiles["local"].token = "secret"
        config.set_default_profile("local")

        config.save(path)
        loaded = Config.load(path)

        assert loaded.default_profile == "local"
        assert loaded.get_profile().batch_size == 4
        assert loaded.get_profile().token is None
        assert "secret" not in path.read_text()

    def test_get_missing_profile(self):
        with pytest.raises(ProfileNotFoundError):
            Config().get_profile("nope")

    def test_set_default_requires_existing_profile(self):
        with pytest.raises(ProfileNotFoundError):
            Config().set_default_profile("nope")

    def test_remove_profile(self):
        config = Config()
        config.add_profile("a", "https://api.example.org")

        assert config.remove_profile("a") is True
        assert config.remove_profile("a") is False
        assert not config.has_profile("a")


class TestGetToken:
    """Tests for get_token."""

    def test_env_wins(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("RESUMECTL_TOKEN", "from-env")
        assert get_token(Profile(url="https://x.org", token="from-file")) == "from-env"

    def test_profile_fallback(self):
        assert get_token(Profile(url="https://x.org", token="from-file")) == "from-file"

    def test_none(self):
        assert get_token() is None
