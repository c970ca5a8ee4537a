"""Tests for photoctl.core.config module."""

from __future__ import annotations

from pathlib import Path

import pytest

from photoctl.core.config import Config, Profile
from photoctl.core.exceptions import ConfigurationError, ProfileNotFoundError
from photoctl.core.timeouts import DEFAULT_UPLOAD_TIMEOUT_SECONDS
from photoctl.uploaders.constants import DEFAULT_UPLOAD_WORKERS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "PHOTOCTL_URL",
        "PHOTOCTL_PROFILE",
        "PHOTOCTL_VERIFY_SSL",
        "PHOTOCTL_TIMEOUT",
        "PHOTOCTL_WORKERS",
    ):
        monkeypatch.delenv(name, raising=False)


# =============================================================================
# Profile Tests
# =============================================================================


class TestProfile:
    """Tests for Profile dataclass."""

    def test_default_values(self):
        profile = Profile(url="http://photos.example.org")
        assert profile.verify_ssl is True
        assert profile.timeout == DEFAULT_UPLOAD_TIMEOUT_SECONDS
        assert profile.workers == 4

    def test_workers_default_matches_scheduler_default(self):
        assert Profile(url="http://photos.example.org").workers == DEFAULT_UPLOAD_WORKERS

    def test_round_trip_through_dict(self):
        profile = Profile(url="http://photos.example.org", verify_ssl=False, timeout=60, workers=8)
        assert Profile.from_dict(profile.to_dict()) == profile


# =============================================================================
# Config Tests
# =============================================================================


class TestConfig:
    """Tests for Config loading and saving."""

    def test_load_missing_file_gives_empty_config(self, temp_dir: Path):
        config = Config.load(temp_dir / "missing.yaml")
        assert config.profiles == {}
        assert config.default_profile == "default"

    def test_load_from_yaml(self, temp_dir: Path, sample_config_yaml: str):
        path = temp_dir / "config.yaml"
        path.write_text(sample_config_yaml)

        config = Config.load(path)

        assert config.default_profile == "test"
        test = config.get_profile()
        assert test.url == "http://photos-test.example.org"
        assert test.verify_ssl is False
        assert test.workers == 2
        assert config.get_profile("production").workers == 4

    def test_save_and_reload(self, temp_dir: Path):
        path = temp_dir / "nested" / "config.yaml"
        config = Config()
        config.add_profile("dev", url="http://localhost:8080", workers=6)
        config.set_default_profile("dev")

        config.save(path)
        loaded = Config.load(path)

        assert loaded.default_profile == "dev"
        assert loaded.get_profile().workers == 6

    def test_malformed_yaml_raises(self, temp_dir: Path):
        path = temp_dir / "config.yaml"
        path.write_text("profiles: [unclosed")

        with pytest.raises(ConfigurationError):
            Config.load(path)

    def test_unknown_profile_raises(self):
        config = Config()
        with pytest.raises(ProfileNotFoundError):
            config.get_profile("nope")
        with pytest.raises(ProfileNotFoundError):
            config.set_default_profile("nope")

    def test_env_url_overrides(self, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("PHOTOCTL_URL", "http://env.example.org")
        monkeypatch.setenv("PHOTOCTL_VERIFY_SSL", "false")
        monkeypatch.setenv("PHOTOCTL_WORKERS", "7")

        config = Config.load(temp_dir / "missing.yaml")

        profile = config.get_profile("default")
        assert profile.url == "http://env.example.org"
        assert profile.verify_ssl is False
        assert profile.workers == 7

    def test_env_profile_selects_default(self, temp_dir: Path, sample_config_yaml: str, monkeypatch):
        path = temp_dir / "config.yaml"
        path.write_text(sample_config_yaml)
        monkeypatch.setenv("PHOTOCTL_PROFILE", "production")

        assert Config.load(path).get_profile().url == "https://photos.example.org"

    def test_bad_env_integer_raises(self, temp_dir: Path, monkeypatch):
        monkeypatch.setenv("PHOTOCTL_URL", "http://env.example.org")
        monkeypatch.setenv("PHOTOCTL_TIMEOUT", "soon")

        with pytest.raises(ConfigurationError):
            Config.load(temp_dir / "missing.yaml")
