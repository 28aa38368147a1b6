"""OS-level keyring backend using system credential stores.

Platform Support:
- Linux: Secret Service API (GNOME Keyring, KWallet)
- macOS: Keychain
- Windows: Windows Credential Locker
"""

import structlog

try:
    import keyring
    from keyring.backends.fail import Keyring as FailKeyring
    from keyring.errors import KeyringError, KeyringLocked, NoKeyringError, PasswordDeleteError

    KEYRING_AVAILABLE = True
except ImportError:
    KEYRING_AVAILABLE = False

from .exceptions import BackendNotAvailableError, CredentialStoreError
from .keys import DRIVER_ID, build_key

log = structlog.get_logger(__name__)

DEFAULT_SERVICE_NAME = "token_cache"


class KeyringBackend:
    """Token storage in the OS keyring.

    Every token lives under one keyring service; the composite key built by
    :func:`token_cache.keys.build_key` is used as the keyring user name.
    Encryption at rest is whatever the platform keyring provides.

    Construction probes the keyring and raises BackendNotAvailableError when
    no usable keyring exists, which lets the credential manager fall back to
    the local file store at startup.

    Example:
        >>> backend = KeyringBackend()
        >>> backend.write('acct.example.com', 'alice', 'ID_TOKEN', 'tok')
        >>> backend.read('acct.example.com', 'alice', 'ID_TOKEN')
        'tok'
    """

    def __init__(
        self,
        service_name: str = DEFAULT_SERVICE_NAME,
        driver_id: str = DRIVER_ID,
        legacy_key_format: bool = False,
    ) -> None:
        """Initialize and probe the keyring.

        Args:
            service_name: Keyring service all tokens are stored under
            driver_id: Product identifier embedded in composite keys
            legacy_key_format: Build keys in the older doubled-brace format

        Raises:
            BackendNotAvailableError: If no usable keyring is configured
        """
        self.service_name = service_name
        self.driver_id = driver_id
        self.legacy_key_format = legacy_key_format

        if not KEYRING_AVAILABLE:
            raise BackendNotAvailableError(
                "Keyring backend is not available",
                suggestion="Install keyring: pip install keyring",
            )

        try:
            active = keyring.get_keyring()
        except Exception as e:
            raise BackendNotAvailableError(f"Keyring failed to initialize: {e}") from e

        if isinstance(active, FailKeyring):
            raise BackendNotAvailableError(
                "No OS keyring is configured on this system",
                suggestion="Set TOKEN_CACHE_BACKEND=local to use the file store",
            )

        log.debug("keyring_backend_ready", keyring=type(active).__name__)

    @property
    def name(self) -> str:
        """Get backend identifier.

        Returns:
            Backend name constant "keyring"
        """
        return "keyring"

    @property
    def available(self) -> bool:
        """Check if the keyring can still be reached."""
        if not KEYRING_AVAILABLE:
            return False
        try:
            return not isinstance(keyring.get_keyring(), FailKeyring)
        except Exception as e:
            log.debug("keyring_not_available", error=str(e))
            return False

    def build_key(self, host: str, user: str, cred_type: str) -> str:
        return build_key(host, user, cred_type, self.driver_id, self.legacy_key_format)

    def get(self, key: str) -> str | None:
        """Retrieve a value by composite key.

        Raises:
            BackendNotAvailableError: If the keyring is locked or gone
            CredentialStoreError: If the keyring operation fails
        """
        try:
            return keyring.get_password(self.service_name, key)
        except (KeyringLocked, NoKeyringError) as e:
            raise BackendNotAvailableError(f"Keyring is not accessible: {e}", reference=key) from e
        except KeyringError as e:
            raise CredentialStoreError(f"Keyring operation failed: {e}", reference=key) from e

    def set(self, key: str, value: str) -> None:
        """Store a value by composite key.

        Raises:
            CredentialStoreError: If the keyring operation fails
        """
        try:
            keyring.set_password(self.service_name, key, value)
        except KeyringError as e:
            raise CredentialStoreError(f"Failed to store credential: {e}", reference=key) from e

    def delete(self, key: str) -> None:
        """Delete a value by composite key. A missing entry is ignored.

        Raises:
            CredentialStoreError: If the keyring operation fails
        """
        try:
            keyring.delete_password(self.service_name, key)
        except PasswordDeleteError:
            log.debug("keyring_delete_missing", key=key)
        except KeyringError as e:
            raise CredentialStoreError(f"Failed to delete credential: {e}", reference=key) from e

    def read(self, host: str, user: str, cred_type: str) -> str | None:
        token = self.get(self.build_key(host, user, cred_type))
        if token is not None:
            log.debug("credential_read", backend=self.name, host=host, user=user, cred_type=str(cred_type))
        return token

    def write(self, host: str, user: str, cred_type: str, token: str) -> None:
        self.set(self.build_key(host, user, cred_type), token)
        log.info("credential_stored", backend=self.name, host=host, user=user, cred_type=str(cred_type))

    def remove(self, host: str, user: str, cred_type: str) -> None:
        self.delete(self.build_key(host, user, cred_type))
        log.info("credential_removed", backend=self.name, host=host, user=user, cred_type=str(cred_type))
