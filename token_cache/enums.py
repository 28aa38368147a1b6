"""Enumerations for cached credential types."""

from enum import Enum


class CredentialType(str, Enum):
    """Kinds of short-lived tokens the driver caches.

    Any string is accepted as a credential type by the cache; these are the
    values the driver itself writes.
    """

    ID_TOKEN = "ID_TOKEN"
    MFA_TOKEN = "MFA_TOKEN"
    OAUTH_ACCESS_TOKEN = "OAUTH_ACCESS_TOKEN"
    OAUTH_REFRESH_TOKEN = "OAUTH_REFRESH_TOKEN"

    def __str__(self) -> str:
        return self.value


class BackendKind(str, Enum):
    """Backend selection modes for the credential manager.

    - auto: OS keyring when it initializes, local JSON file otherwise
    - native: OS keyring only
    - local: local JSON file only
    """

    AUTO = "auto"
    NATIVE = "native"
    LOCAL = "local"

    def __str__(self) -> str:
        return self.value
