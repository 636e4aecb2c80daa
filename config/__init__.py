"""Central configuration for the enrollment wizard.

Settings come from the environment (optionally seeded from a ``.env`` file):

``ENROLLMENT_STORAGE_DIR``
    Root directory of the file-backed key-value store.
``ENROLLMENT_ORIGIN``
    Origin scope; each origin gets its own sub-directory.
``ENROLLMENT_STORAGE_QUOTA_BYTES``
    Per-origin quota. Writes that would exceed it fail.
``ENROLLMENT_LOG_LEVEL``
    Root log level name.
``ENROLLMENT_MIN_AGE``
    Minimum age accepted for the policyholder.
``ENROLLMENT_DEBUG``
    When truthy, error banners include technical details.
"""

from __future__ import annotations

import logging
import os
import warnings
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_DIR = ".enrollment_storage"
DEFAULT_ORIGIN = "local"
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MIN_AGE = 18

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def _parse_positive_int_env(value: object | None, *, env_var: str) -> int | None:
    """Return a positive integer parsed from ``value`` or ``None``."""

    if value is None:
        return None
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            parsed = int(float(candidate))
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return None
    elif isinstance(value, (int, float)):
        parsed = int(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using the default." % (env_var, value),
            RuntimeWarning,
        )
        return None
    if parsed <= 0:
        return None
    return parsed


def _resolve_log_level(value: str | None) -> int:
    if not value:
        return logging.INFO
    level = logging.getLevelName(value.strip().upper())
    if isinstance(level, int):
        return level
    warnings.warn("Unknown log level '%s'; using INFO" % value, RuntimeWarning)
    return logging.INFO


@dataclass(frozen=True)
class EnrollmentSettings:
    """Resolved runtime settings."""

    storage_dir: Path
    origin: str
    quota_bytes: int
    log_level: int
    minimum_age: int
    debug: bool = False


def load_settings() -> EnrollmentSettings:
    """Read the current environment into an :class:`EnrollmentSettings`."""

    storage_dir = os.getenv("ENROLLMENT_STORAGE_DIR", "").strip() or DEFAULT_STORAGE_DIR
    origin = os.getenv("ENROLLMENT_ORIGIN", "").strip() or DEFAULT_ORIGIN
    quota = _parse_positive_int_env(
        os.getenv("ENROLLMENT_STORAGE_QUOTA_BYTES"), env_var="ENROLLMENT_STORAGE_QUOTA_BYTES"
    )
    minimum_age = _parse_positive_int_env(os.getenv("ENROLLMENT_MIN_AGE"), env_var="ENROLLMENT_MIN_AGE")
    return EnrollmentSettings(
        storage_dir=Path(storage_dir),
        origin=origin,
        quota_bytes=quota or DEFAULT_QUOTA_BYTES,
        log_level=_resolve_log_level(os.getenv("ENROLLMENT_LOG_LEVEL", DEFAULT_LOG_LEVEL)),
        minimum_age=minimum_age or DEFAULT_MIN_AGE,
        debug=os.getenv("ENROLLMENT_DEBUG", "").strip().lower() in _TRUTHY,
    )


__all__ = ["EnrollmentSettings", "load_settings"]
