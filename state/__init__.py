"""Session and persistent state for the enrollment wizard."""

from .client import resolve_client_id
from .selection import SelectionShadowStore, TickScheduler
from .snapshots import SnapshotStore
from .storage import JsonFileStore, KeyValueStore, MemoryStore
from .touched import TouchedTracker

__all__ = [
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SelectionShadowStore",
    "SnapshotStore",
    "TickScheduler",
    "TouchedTracker",
    "resolve_client_id",
]
