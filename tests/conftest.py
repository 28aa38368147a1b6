"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from token_cache.config import CacheSettings
from token_cache.local_storage import CredentialDocumentFile, LocalFileBackend
from token_cache.manager import CredentialManager, get_credential_manager


@pytest.fixture(autouse=True)
def clean_cache_env(monkeypatch):
    """Keep developer environment settings out of the tests."""
    monkeypatch.delenv("SF_TEMPORARY_CREDENTIAL_CACHE_DIR", raising=False)
    for var in ("BACKEND", "CACHE_DIR", "FILE_NAME", "KEYRING_SERVICE", "DRIVER_ID", "LEGACY_KEY_FORMAT"):
        monkeypatch.delenv(f"TOKEN_CACHE_{var}", raising=False)
    get_credential_manager.cache_clear()
    yield
    get_credential_manager.cache_clear()


@pytest.fixture
def cache_dir(tmp_path: Path) -> Path:
    """Temporary credential cache directory."""
    return tmp_path / "cache"


@pytest.fixture
def local_settings(cache_dir: Path) -> CacheSettings:
    """Settings forcing the local file backend in a temp directory."""
    return CacheSettings(backend="local", cache_dir=cache_dir)


@pytest.fixture
def document_file(local_settings: CacheSettings) -> CredentialDocumentFile:
    """Credential document handle in the temp cache directory."""
    return CredentialDocumentFile(local_settings.credential_file)


@pytest.fixture
def local_manager(local_settings: CacheSettings) -> CredentialManager:
    """CredentialManager using the local file backend."""
    manager = CredentialManager(settings=local_settings)
    assert isinstance(manager.backend, LocalFileBackend)
    return manager
