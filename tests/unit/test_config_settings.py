"""Tests for token_cache/config/settings.py.

Tests cover:
- Defaults and environment variable overrides
- Loading from YAML with ${VAR} interpolation
- Validation errors
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from token_cache.config import CacheSettings, default_cache_dir
from token_cache.enums import BackendKind
from token_cache.exceptions import ConfigurationError


class TestCacheSettingsDefaults:
    """Test default values."""

    def test_defaults(self):
        """Test default settings."""
        settings = CacheSettings()

        assert settings.backend == BackendKind.AUTO
        assert settings.cache_dir == default_cache_dir()
        assert settings.file_name == "credential_cache_v1.json"
        assert settings.keyring_service == "token_cache"
        assert settings.driver_id == "SF_NODE_JS_DRIVER"
        assert settings.legacy_key_format is False

    def test_credential_file(self, tmp_path):
        """Test credential file path combines directory and name."""
        settings = CacheSettings(cache_dir=tmp_path, file_name="tokens.json")

        assert settings.credential_file == tmp_path / "tokens.json"

    def test_default_cache_dir_honours_xdg(self, monkeypatch, tmp_path):
        """Test XDG_CACHE_HOME is used on Linux."""
        monkeypatch.setattr("token_cache.config.settings.sys.platform", "linux")
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path))

        assert default_cache_dir() == tmp_path / "token_cache"


class TestCacheSettingsEnvironment:
    """Test environment variable overrides."""

    def test_backend_from_env(self, monkeypatch):
        """Test TOKEN_CACHE_BACKEND selects the backend."""
        monkeypatch.setenv("TOKEN_CACHE_BACKEND", "local")

        assert CacheSettings().backend == BackendKind.LOCAL

    def test_cache_dir_from_env(self, monkeypatch, tmp_path):
        """Test TOKEN_CACHE_CACHE_DIR sets the directory."""
        monkeypatch.setenv("TOKEN_CACHE_CACHE_DIR", str(tmp_path))

        assert CacheSettings().cache_dir == tmp_path

    def test_cache_dir_from_driver_env(self, monkeypatch, tmp_path):
        """Test SF_TEMPORARY_CREDENTIAL_CACHE_DIR sets the directory."""
        monkeypatch.setenv("SF_TEMPORARY_CREDENTIAL_CACHE_DIR", str(tmp_path))

        assert CacheSettings().cache_dir == tmp_path

    def test_legacy_key_format_from_env(self, monkeypatch):
        """Test boolean settings parse from env."""
        monkeypatch.setenv("TOKEN_CACHE_LEGACY_KEY_FORMAT", "true")

        assert CacheSettings().legacy_key_format is True

    def test_from_env(self, monkeypatch):
        """Test from_env reads the environment."""
        monkeypatch.setenv("TOKEN_CACHE_BACKEND", "local")

        assert CacheSettings.from_env().backend == BackendKind.LOCAL

    def test_from_env_invalid_value(self, monkeypatch):
        """Test invalid environment values raise ConfigurationError."""
        monkeypatch.setenv("TOKEN_CACHE_BACKEND", "vault")

        with pytest.raises(ConfigurationError, match="Invalid environment configuration"):
            CacheSettings.from_env()


class TestCacheSettingsValidation:
    """Test field validation."""

    def test_invalid_backend(self):
        """Test unknown backend mode is rejected."""
        with pytest.raises(ValidationError):
            CacheSettings(backend="vault")

    @pytest.mark.parametrize("file_name", ["", "../escape.json", "nested/file.json"])
    def test_invalid_file_name(self, file_name):
        """Test file names must not contain directories."""
        with pytest.raises(ValidationError):
            CacheSettings(file_name=file_name)

    def test_empty_driver_id(self):
        """Test driver id must not be empty."""
        with pytest.raises(ValidationError):
            CacheSettings(driver_id="")


class TestCacheSettingsFromYaml:
    """Test YAML loading."""

    def test_load_yaml(self, tmp_path):
        """Test settings load from YAML."""
        config = tmp_path / "token_cache.yaml"
        config.write_text(f"backend: local\ncache_dir: {tmp_path}\nkeyring_service: my_driver\n")

        settings = CacheSettings.from_yaml(str(config))

        assert settings.backend == BackendKind.LOCAL
        assert settings.cache_dir == tmp_path
        assert settings.keyring_service == "my_driver"

    def test_env_interpolation(self, tmp_path, monkeypatch):
        """Test ${VAR} placeholders are substituted."""
        monkeypatch.setenv("TEST_TOKEN_DIR", str(tmp_path))
        config = tmp_path / "token_cache.yaml"
        config.write_text("cache_dir: ${TEST_TOKEN_DIR}\nbackend: ${TEST_BACKEND:-local}\n")

        settings = CacheSettings.from_yaml(str(config))

        assert settings.cache_dir == tmp_path
        assert settings.backend == BackendKind.LOCAL

    def test_comment_lines_not_interpolated(self, tmp_path):
        """Test placeholders in comments are left alone."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("# cache_dir: ${UNSET_TOKEN_CACHE_VAR}\nbackend: local\n")

        assert CacheSettings.from_yaml(str(config)).backend == BackendKind.LOCAL

    def test_empty_file_uses_defaults(self, tmp_path):
        """Test an empty YAML file yields defaults."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("")

        assert CacheSettings.from_yaml(str(config)).backend == BackendKind.AUTO

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            CacheSettings.from_yaml(str(tmp_path / "missing.yaml"))

    def test_missing_env_var(self, tmp_path):
        """Test an unset required variable raises ConfigurationError."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("cache_dir: ${UNSET_TOKEN_CACHE_VAR}\n")

        with pytest.raises(ConfigurationError, match="UNSET_TOKEN_CACHE_VAR"):
            CacheSettings.from_yaml(str(config))

    def test_invalid_yaml(self, tmp_path):
        """Test invalid YAML raises ConfigurationError."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("backend: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            CacheSettings.from_yaml(str(config))

    def test_non_mapping_yaml(self, tmp_path):
        """Test a YAML list raises ConfigurationError."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("- local\n")

        with pytest.raises(ConfigurationError, match="YAML object"):
            CacheSettings.from_yaml(str(config))

    def test_invalid_value(self, tmp_path):
        """Test validation failures raise ConfigurationError."""
        config = tmp_path / "token_cache.yaml"
        config.write_text("backend: vault\n")

        with pytest.raises(ConfigurationError, match="Failed to validate"):
            CacheSettings.from_yaml(str(config))

    def test_yaml_path_type(self, tmp_path):
        """Test from_yaml accepts a Path converted to str."""
        config = Path(tmp_path) / "token_cache.yaml"
        config.write_text("backend: native\n")

        assert CacheSettings.from_yaml(str(config)).backend == BackendKind.NATIVE
