"""Cache for short-lived driver authentication tokens.

Tokens are addressed by (host, user, cred_type) and stored in the OS keyring
when one is usable, in a local JSON file otherwise, or in a store supplied by
the application.

Example usage:

    from token_cache import CredentialManager, CredentialType

    manager = CredentialManager()
    manager.write("acct.example.com", "alice", CredentialType.ID_TOKEN, token)
    cached = manager.read("acct.example.com", "alice", CredentialType.ID_TOKEN)
"""

from .backend import CredentialBackend, KeyValueBackend
from .config import CacheSettings
from .custom_manager import CustomCredentialManager, CustomCredentialStore
from .enums import BackendKind, CredentialType
from .exceptions import (
    BackendNotAvailableError,
    ConfigurationError,
    CredentialError,
    CredentialStoreError,
    TokenCacheError,
)
from .keyring_backend import KeyringBackend
from .keys import DRIVER_ID, build_key
from .local_storage import (
    CredentialDocumentFile,
    InMemoryDocument,
    LocalFileBackend,
    find_credential,
    remove_token,
    renew_token,
)
from .manager import CredentialManager, check_for_null, get_credential_manager, select_backend

__version__ = "0.1.0"

__all__ = [
    # Facade
    "CredentialManager",
    "CustomCredentialManager",
    "CustomCredentialStore",
    "check_for_null",
    "get_credential_manager",
    "select_backend",
    # Backends
    "CredentialBackend",
    "KeyValueBackend",
    "KeyringBackend",
    "LocalFileBackend",
    "CredentialDocumentFile",
    "InMemoryDocument",
    # Local document
    "renew_token",
    "find_credential",
    "remove_token",
    # Keys
    "DRIVER_ID",
    "build_key",
    # Config
    "CacheSettings",
    "BackendKind",
    "CredentialType",
    # Exceptions
    "TokenCacheError",
    "ConfigurationError",
    "CredentialError",
    "BackendNotAvailableError",
    "CredentialStoreError",
]
