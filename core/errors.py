"""Custom exception types for persistence failures."""

from __future__ import annotations


class StorageError(Exception):
    """Base exception for key-value store failures."""

    def __init__(self, key: str, message: str | None = None) -> None:
        self.key = key
        super().__init__(message or f"Storage operation failed for '{key}'")


class StorageUnavailableError(StorageError):
    """Raised when the backing store cannot be read or written at all."""


class StorageQuotaExceededError(StorageError):
    """Raised when a write would push the origin over its quota."""

    def __init__(self, key: str, *, required: int, quota: int) -> None:
        self.required = required
        self.quota = quota
        super().__init__(key, f"Writing '{key}' needs {required} bytes, quota is {quota}")
