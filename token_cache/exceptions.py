"""Exception hierarchy for the token cache.

Exception Hierarchy:
    TokenCacheError (base)
    ├── ConfigurationError
    └── CredentialError
        ├── BackendNotAvailableError
        └── CredentialStoreError

Invalid arguments (a ``None`` host, user or credential type) are not errors:
the cache treats them as "nothing to do" and returns ``None``.

Example Usage:
    >>> from token_cache.exceptions import CredentialStoreError
    >>> try:
    ...     manager.write(host, user, "ID_TOKEN", token)
    ... except CredentialStoreError as e:
    ...     log.warning("token_not_cached", error=e.message)
"""


class TokenCacheError(Exception):
    """Base exception for all token cache errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(TokenCacheError):
    """Cache settings are invalid or could not be loaded."""

    pass


class CredentialError(TokenCacheError):
    """Credential storage errors.

    Attributes:
        message: Human-readable error description
        reference: The credential that failed, as ``host/user/cred_type``
            or a composite key
        suggestion: Optional suggestion for resolution
    """

    def __init__(
        self,
        message: str,
        reference: str | None = None,
        suggestion: str | None = None,
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            reference: The credential that failed
            suggestion: Optional suggestion for resolution
        """
        self.reference = reference
        self.suggestion = suggestion

        full_message = message
        if reference:
            full_message = f"{message} (reference: {reference})"
        if suggestion:
            full_message = f"{full_message}\nSuggestion: {suggestion}"

        super().__init__(full_message)
        # super() set self.message to the decorated text
        self.message = message


class BackendNotAvailableError(CredentialError):
    """Storage backend cannot be initialized on this system."""

    pass


class CredentialStoreError(CredentialError):
    """A read, write or delete against an initialized backend failed."""

    pass
