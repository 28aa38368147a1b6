"""Adapter for caller-supplied secret stores."""

from typing import Any, Protocol

import structlog

from .keys import DRIVER_ID, build_key
from .manager import check_for_null

log = structlog.get_logger(__name__)


class CustomCredentialStore(Protocol):
    """Secret store supplied by the application.

    ``remove`` is expected to leave an absent marker (None) behind rather than
    necessarily deleting the entry, so that a following ``read`` returns it.
    """

    def read(self, key: str) -> Any: ...

    def write(self, key: str, value: str) -> Any: ...

    def remove(self, key: str) -> Any: ...


class CustomCredentialManager:
    """Route credential triples to an application-provided store.

    Triples are flattened with :func:`token_cache.keys.build_key`, so a custom
    store sees keys such as ``{ACCT.EXAMPLE.COM}:{ALICE}:{SF_NODE_JS_DRIVER}:{ID_TOKEN}``.
    ``read`` returns whatever the wrapped store returns, unchanged.

    The adapter exposes the same ``read``/``write``/``remove`` signature as
    :class:`token_cache.manager.CredentialManager` and can also be handed to
    it as a backend.

    Example:
        >>> class DictStore:
        ...     def __init__(self): self.cred = {}
        ...     def read(self, key): return self.cred.get(key)
        ...     def write(self, key, value): self.cred[key] = value
        ...     def remove(self, key): self.cred[key] = None
        >>> manager = CustomCredentialManager(DictStore())
        >>> manager.write("h", "u", "ID_TOKEN", "tok")
        >>> manager.read("h", "u", "ID_TOKEN")
        'tok'
    """

    def __init__(
        self,
        store: CustomCredentialStore,
        driver_id: str = DRIVER_ID,
        legacy_key_format: bool = False,
    ) -> None:
        """Wrap a custom store.

        Args:
            store: Object implementing read(key), write(key, value), remove(key)
            driver_id: Product identifier embedded in composite keys
            legacy_key_format: Build keys in the older doubled-brace format
        """
        for method in ("read", "write", "remove"):
            if not callable(getattr(store, method, None)):
                raise TypeError(f"Custom credential store must implement {method}()")

        self.store = store
        self.driver_id = driver_id
        self.legacy_key_format = legacy_key_format

    @property
    def name(self) -> str:
        return "custom"

    def build_key(self, host: str, user: str, cred_type: str) -> str:
        """Build the composite key the wrapped store is addressed with."""
        return build_key(host, user, cred_type, self.driver_id, self.legacy_key_format)

    def read(self, host: str | None, user: str | None, cred_type: str | None) -> Any:
        if check_for_null(host, user, cred_type):
            return None
        return self.store.read(self.build_key(host, user, cred_type))

    def write(self, host: str | None, user: str | None, cred_type: str | None, token: str | None) -> None:
        if check_for_null(host, user, cred_type, token):
            return
        self.store.write(self.build_key(host, user, cred_type), token)
        log.info("credential_stored", backend=self.name, host=host, user=user, cred_type=str(cred_type))

    def remove(self, host: str | None, user: str | None, cred_type: str | None) -> None:
        if check_for_null(host, user, cred_type):
            return
        self.store.remove(self.build_key(host, user, cred_type))
        log.info("credential_removed", backend=self.name, host=host, user=user, cred_type=str(cred_type))
