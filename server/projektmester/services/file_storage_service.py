"""On-disk storage for uploaded files.

Stored names are unique (``<stem>-<millis>-<random><ext>``) and the
returned locator is ``/files/<stored name>``. The rest of the system
treats the locator as an opaque string.
"""

import logging
import re
import secrets
import time
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

LOCATOR_PREFIX = "/files/"

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class FileStorageError(Exception):
    """Base exception for file storage errors."""
    pass


class InvalidStoredNameError(FileStorageError):
    """Raised when a stored name would resolve outside the storage root."""

    def __init__(self, stored_name: str):
        self.stored_name = stored_name
        super().__init__(f"Invalid stored file name: {stored_name!r}")


@dataclass
class StoredFile:
    """Result of storing one uploaded payload."""
    filename: str  # original name as uploaded
    stored_name: str
    file_path: str  # locator
    file_type: str
    size: int


def stored_name_from_locator(locator: str) -> str | None:
    """Return the stored name for a '/files/...' locator, else None (e.g. data URIs)."""
    if locator and locator.startswith(LOCATOR_PREFIX):
        return locator[len(LOCATOR_PREFIX):]
    return None


class FileStorage:
    """Uploaded files kept flat under a single root directory."""

    def __init__(self, root: Path | str):
        self.root = Path(root)

    def _make_stored_name(self, original: str) -> str:
        path = Path(original or "file")
        stem = _UNSAFE_CHARS.sub("_", path.stem)[:60] or "file"
        suffix = _UNSAFE_CHARS.sub("", path.suffix)[:16]
        unique = f"{int(time.time() * 1000)}-{secrets.token_hex(4)}"
        return f"{stem}-{unique}{suffix}"

    def open_path(self, stored_name: str) -> Path:
        """Resolve a stored name to its path, rejecting traversal."""
        if not stored_name or "/" in stored_name or "\\" in stored_name or stored_name in (".", ".."):
            raise InvalidStoredNameError(stored_name)
        return self.root / stored_name

    def save(self, filename: str, content: bytes, content_type: str | None = None) -> StoredFile:
        """Write one payload and return its locator and metadata."""
        self.root.mkdir(parents=True, exist_ok=True)
        stored_name = self._make_stored_name(filename)
        self.open_path(stored_name).write_bytes(content)
        logger.info(f"Stored upload '{filename}' as {stored_name} ({len(content)} bytes)")
        return StoredFile(
            filename=filename,
            stored_name=stored_name,
            file_path=f"{LOCATOR_PREFIX}{stored_name}",
            file_type=content_type or "application/octet-stream",
            size=len(content),
        )

    def delete(self, stored_name: str) -> bool:
        """Remove a stored file. A missing file returns False."""
        path = self.open_path(stored_name)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Deleted stored file {stored_name}")
        return True
