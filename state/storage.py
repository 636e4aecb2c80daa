"""Origin-scoped persistent key-value stores.

Values are opaque strings (the snapshot layer stores JSON text). Failures are
raised as :class:`core.errors.StorageError` subclasses; only the snapshot
boundary decides how to tolerate them.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Protocol, runtime_checkable

from core.errors import StorageError, StorageQuotaExceededError, StorageUnavailableError

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


@runtime_checkable
class KeyValueStore(Protocol):
    """Minimal string store keyed by stable names."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...


def _encoded_size(value: str) -> int:
    return len(value.encode("utf-8"))


class MemoryStore:
    """In-process store, used for tests and as a fallback when no disk is usable."""

    def __init__(self, *, quota_bytes: int | None = None, available: bool = True) -> None:
        self._items: dict[str, str] = {}
        self.quota_bytes = quota_bytes
        self.available = available

    def get_item(self, key: str) -> str | None:
        if not self.available:
            raise StorageUnavailableError(key)
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if not self.available:
            raise StorageUnavailableError(key)
        if self.quota_bytes is not None:
            used = sum(_encoded_size(item) for name, item in self._items.items() if name != key)
            required = used + _encoded_size(value)
            if required > self.quota_bytes:
                raise StorageQuotaExceededError(key, required=required, quota=self.quota_bytes)
        self._items[key] = value


class JsonFileStore:
    """One UTF-8 file per key below ``root / origin / client``.

    Each browser client gets its own directory, the way browser storage is
    private to one browser. The quota covers every file of that directory.
    """

    def __init__(
        self,
        root: Path | str,
        *,
        origin: str = "local",
        client: str | None = None,
        quota_bytes: int | None = None,
    ) -> None:
        for label, part in (("origin", origin), ("client", client)):
            if part is not None and (not _SAFE_KEY.match(part) or part.strip(".") == ""):
                raise ValueError(f"Invalid storage {label} '{part}'")
        directory = Path(root) / origin
        self.directory = directory / client if client else directory
        self.quota_bytes = quota_bytes

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key '{key}'")
        return self.directory / f"{key}.json"

    def _used_bytes(self, excluding: Path) -> int:
        if not self.directory.is_dir():
            return 0
        total = 0
        for entry in self.directory.glob("*.json"):
            if entry != excluding:
                total += entry.stat().st_size
        return total

    def get_item(self, key: str) -> str | None:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as error:
            raise StorageUnavailableError(key, f"Could not read '{key}': {error}") from error

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            if self.quota_bytes is not None:
                required = self._used_bytes(path) + _encoded_size(value)
                if required > self.quota_bytes:
                    raise StorageQuotaExceededError(key, required=required, quota=self.quota_bytes)
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".tmp")
            tmp_path.write_text(value, encoding="utf-8")
            tmp_path.replace(path)
        except StorageError:
            raise
        except OSError as error:
            raise StorageUnavailableError(key, f"Could not write '{key}': {error}") from error
        logger.debug("Stored %s (%d bytes)", key, _encoded_size(value))


__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageUnavailableError",
]
