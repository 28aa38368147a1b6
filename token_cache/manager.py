"""Credential manager facade with one-time backend selection."""

import functools
from typing import Any

import structlog

from .backend import CredentialBackend
from .config import CacheSettings
from .enums import BackendKind
from .exceptions import BackendNotAvailableError
from .keyring_backend import KeyringBackend
from .local_storage import CredentialDocumentFile, LocalFileBackend

log = structlog.get_logger(__name__)


def check_for_null(*args: Any) -> bool:
    """Return True if any argument is None.

    Falsy values such as ``0``, ``""`` and ``False`` count as present.

    Example:
        >>> check_for_null("host", None, "ID_TOKEN")
        True
        >>> check_for_null("host", "", 0, False)
        False
    """
    return any(arg is None for arg in args)


def select_backend(settings: CacheSettings) -> CredentialBackend:
    """Pick the storage backend for this process.

    In ``auto`` mode the OS keyring is tried first and the local file store
    is used when the keyring cannot initialize. ``native`` mode raises
    instead of falling back.

    Args:
        settings: Cache settings

    Returns:
        Initialized backend

    Raises:
        BackendNotAvailableError: If ``native`` mode is requested and no
            keyring is usable
    """
    local = LocalFileBackend(CredentialDocumentFile(settings.credential_file))
    if settings.backend == BackendKind.LOCAL:
        return local

    try:
        return KeyringBackend(
            service_name=settings.keyring_service,
            driver_id=settings.driver_id,
            legacy_key_format=settings.legacy_key_format,
        )
    except BackendNotAvailableError as e:
        if settings.backend == BackendKind.NATIVE:
            raise
        log.info(
            "keyring_unavailable_using_local_file",
            reason=e.message,
            path=str(settings.credential_file),
        )
        return local


class CredentialManager:
    """Read, write and remove cached tokens by (host, user, cred_type).

    The backend is chosen once when the manager is created and every call
    goes to that backend. Any argument given as None turns the call into a
    no-op: ``read`` returns None and ``write``/``remove`` do nothing.

    Errors raised by the backend during a write or remove propagate to the
    caller. They are never retried on another backend.

    Example:
        >>> manager = CredentialManager(settings=CacheSettings(backend="local"))
        >>> manager.write("acct.example.com", "alice", "ID_TOKEN", "tok")
        >>> manager.read("acct.example.com", "alice", "ID_TOKEN")
        'tok'
        >>> manager.remove("acct.example.com", "alice", "ID_TOKEN")
        >>> manager.read("acct.example.com", "alice", "ID_TOKEN") is None
        True
    """

    check_for_null = staticmethod(check_for_null)

    def __init__(
        self,
        backend: CredentialBackend | None = None,
        settings: CacheSettings | None = None,
    ) -> None:
        """Initialize the manager.

        Args:
            backend: Backend to use as-is; skips selection when given
            settings: Settings for backend selection (defaults loaded from
                the environment)
        """
        self.settings = settings or CacheSettings()
        self.backend: CredentialBackend = backend if backend is not None else select_backend(self.settings)
        log.debug("credential_manager_ready", backend=self.backend.name)

    @property
    def backend_name(self) -> str:
        return self.backend.name

    def read(self, host: str | None, user: str | None, cred_type: str | None) -> str | None:
        """Retrieve a token.

        Returns:
            Token, or None if not stored, if any argument is None, or if the
            keyring became unreachable after selection
        """
        if check_for_null(host, user, cred_type):
            return None

        try:
            return self.backend.read(host, user, str(cred_type))
        except BackendNotAvailableError as e:
            log.warning("credential_read_unavailable", backend=self.backend.name, error=e.message)
            return None

    def write(
        self,
        host: str | None,
        user: str | None,
        cred_type: str | None,
        token: str | None,
    ) -> None:
        """Store a token, overwriting any previous value.

        Raises:
            CredentialError: If the backend fails to store the token
        """
        if check_for_null(host, user, cred_type, token):
            return

        self.backend.write(host, user, str(cred_type), token)

    def remove(self, host: str | None, user: str | None, cred_type: str | None) -> None:
        """Delete a token so that a following read returns None.

        Raises:
            CredentialError: If the backend fails to delete the token
        """
        if check_for_null(host, user, cred_type):
            return

        self.backend.remove(host, user, str(cred_type))


@functools.lru_cache(maxsize=1)
def get_credential_manager() -> CredentialManager:
    """Return the process-wide credential manager.

    Settings are read from the environment and the backend is selected on the
    first call. Use ``get_credential_manager.cache_clear()`` to reselect.
    """
    return CredentialManager()
