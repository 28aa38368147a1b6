"""Local JSON-file credential store.

The file holds one document nested exactly three levels deep::

    {
      "acct.example.com": {
        "alice": {
          "ID_TOKEN": "...",
          "MFA_TOKEN": "..."
        }
      }
    }

The module is split into pure functions over that document
(:func:`renew_token`, :func:`find_credential`, :func:`remove_token`) and a
resource handle (:class:`CredentialDocumentFile`) that loads and saves it.
:class:`LocalFileBackend` combines the two into a read-modify-write cycle.

Known limitation: the cycle is not locked across processes. Two writers that
load the document before either saves will lose one update. Token caching is
best-effort, so the last writer wins.
"""

import json
import os
from pathlib import Path
from typing import Any, Protocol

import structlog
from pydantic import TypeAdapter, ValidationError

from .exceptions import CredentialStoreError

log = structlog.get_logger(__name__)

CredentialDocument = dict[str, dict[str, dict[str, str]]]

_DOCUMENT_ADAPTER: TypeAdapter[CredentialDocument] = TypeAdapter(CredentialDocument)


def renew_token(
    document: CredentialDocument,
    host: str,
    user: str,
    cred_type: str,
    token: str,
) -> CredentialDocument:
    """Return a copy of the document with one token set.

    Intermediate host and user levels are created as needed. Sibling
    credential types and unrelated hosts are left untouched. The input
    document is not modified.

    Args:
        document: Current credential document
        host: Account host
        user: User name
        cred_type: Credential type
        token: Token to store

    Returns:
        New credential document

    Example:
        >>> renew_token({}, "h", "u", "t", "tok")
        {'h': {'u': {'t': 'tok'}}}
    """
    renewed = {h: {u: dict(creds) for u, creds in users.items()} for h, users in document.items()}
    renewed.setdefault(host, {}).setdefault(user, {})[cred_type] = token
    return renewed


def find_credential(
    document: CredentialDocument,
    host: str | None,
    user: str | None,
    cred_type: str | None,
) -> str | None:
    """Look up a token, returning None when any level of the path is missing."""
    if host is None:
        return None

    users = document.get(host)
    if not isinstance(users, dict):
        return None

    creds = users.get(user)
    if not isinstance(creds, dict):
        return None

    return creds.get(cred_type)


def remove_token(
    document: CredentialDocument,
    host: str,
    user: str,
    cred_type: str,
) -> CredentialDocument:
    """Return a copy of the document without one token.

    Empty user and host levels left behind are pruned so the document never
    holds anything but string leaves.
    """
    if find_credential(document, host, user, cred_type) is None:
        return document

    pruned = {h: {u: dict(creds) for u, creds in users.items()} for h, users in document.items()}
    del pruned[host][user][cred_type]
    if not pruned[host][user]:
        del pruned[host][user]
    if not pruned[host]:
        del pruned[host]
    return pruned


def parse_document(raw: str | bytes) -> CredentialDocument:
    """Parse file content into a credential document.

    Content that is not JSON, or not a three-level mapping of strings, is
    treated as an empty document.
    """
    try:
        data: Any = json.loads(raw)
        return _DOCUMENT_ADAPTER.validate_python(data, strict=True)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError, ValidationError) as e:
        log.warning("credential_document_malformed", error=type(e).__name__)
        return {}


class DocumentHandle(Protocol):
    """Load/save access to a credential document."""

    def load(self) -> CredentialDocument: ...

    def save(self, document: CredentialDocument) -> None: ...


class InMemoryDocument:
    """Document handle that never touches disk.

    Example:
        >>> handle = InMemoryDocument()
        >>> LocalFileBackend(handle).write("h", "u", "ID_TOKEN", "tok")
        >>> handle.document
        {'h': {'u': {'ID_TOKEN': 'tok'}}}
    """

    def __init__(self, document: CredentialDocument | None = None) -> None:
        self.document: CredentialDocument = document if document is not None else {}

    def load(self) -> CredentialDocument:
        return self.document

    def save(self, document: CredentialDocument) -> None:
        self.document = document


class CredentialDocumentFile:
    """Credential document persisted as a JSON file.

    Attributes:
        path: Location of the JSON file
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> CredentialDocument:
        """Read the document from disk.

        Returns:
            Parsed document, or an empty one if the file is missing or malformed

        Raises:
            CredentialStoreError: If the file exists but cannot be read
        """
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as e:
            raise CredentialStoreError(
                f"Cannot read credential file: {e}",
                reference=str(self.path),
                suggestion="Check the file permissions of the credential cache directory",
            ) from e

        return parse_document(raw)

    def save(self, document: CredentialDocument) -> None:
        """Write the full document to disk.

        The document is written to a temporary sibling restricted to the
        current user and renamed over the target.

        Raises:
            CredentialStoreError: If the file cannot be written
        """
        temp_file = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)

            fd = os.open(temp_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2)

            # Restrict permissions (Unix only)
            try:
                temp_file.chmod(0o600)
            except OSError as e:
                log.warning("credential_file_chmod_failed", error=str(e))

            temp_file.replace(self.path)
        except OSError as e:
            raise CredentialStoreError(
                f"Failed to save credential file: {e}",
                reference=str(self.path),
            ) from e

        log.debug("credential_file_saved", path=str(self.path))


class LocalFileBackend:
    """Token storage in a local JSON document.

    Each operation loads the document fresh, applies one pure function and,
    for writes, saves the full document back. No state is kept between calls.

    Example:
        >>> backend = LocalFileBackend(CredentialDocumentFile(Path("creds.json")))
        >>> backend.write("acct.example.com", "alice", "ID_TOKEN", "tok")
        >>> backend.read("acct.example.com", "alice", "ID_TOKEN")
        'tok'
    """

    def __init__(self, handle: DocumentHandle) -> None:
        self.handle = handle

    @property
    def name(self) -> str:
        """Get backend identifier.

        Returns:
            Backend name constant "local_file"
        """
        return "local_file"

    def read(self, host: str, user: str, cred_type: str) -> str | None:
        token = find_credential(self.handle.load(), host, user, cred_type)
        if token is not None:
            log.debug("credential_read", backend=self.name, host=host, user=user, cred_type=str(cred_type))
        return token

    def write(self, host: str, user: str, cred_type: str, token: str) -> None:
        document = self.handle.load()
        self.handle.save(renew_token(document, host, user, cred_type, token))
        log.info("credential_stored", backend=self.name, host=host, user=user, cred_type=str(cred_type))

    def remove(self, host: str, user: str, cred_type: str) -> None:
        document = self.handle.load()
        pruned = remove_token(document, host, user, cred_type)
        if pruned is document:
            return
        self.handle.save(pruned)
        log.info("credential_removed", backend=self.name, host=host, user=user, cred_type=str(cred_type))
