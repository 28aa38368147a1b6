"""Backend protocols for credential storage."""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """Store addressed by a single opaque key string.

    Implemented by the OS keyring adapter. The credential manager builds the
    key with :func:`token_cache.keys.build_key` before calling it.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring')."""
        ...

    def get(self, key: str) -> str | None:
        """Retrieve a value, or None if not stored."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""
        ...

    def delete(self, key: str) -> None:
        """Delete a value. Deleting a missing key is not an error."""
        ...


class CredentialBackend(Protocol):
    """Interface the credential manager dispatches to.

    Each implementation decides how a (host, user, cred_type) triple maps onto
    its own storage: the keyring path flattens it into a composite key while
    the local file path uses the nested document directly.
    """

    @property
    def name(self) -> str:
        """Backend identifier (e.g., 'keyring', 'local_file')."""
        ...

    def read(self, host: str, user: str, cred_type: str) -> str | None:
        """Retrieve a token.

        Args:
            host: Account host
            user: User name
            cred_type: Credential type

        Returns:
            Token or None if not found

        Raises:
            CredentialStoreError: If the underlying store fails
        """
        ...

    def write(self, host: str, user: str, cred_type: str, token: str) -> None:
        """Store a token, overwriting any previous value.

        Raises:
            CredentialStoreError: If the underlying store fails
        """
        ...

    def remove(self, host: str, user: str, cred_type: str) -> None:
        """Delete a token so that a following read returns None.

        Raises:
            CredentialStoreError: If the underlying store fails
        """
        ...
