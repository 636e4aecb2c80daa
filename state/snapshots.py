"""Per-step snapshot persistence with shallow-merge updates.

Each step keeps one JSON object in the persistent store. The last snapshot
known to this session is cached in ``st.session_state`` and every
:meth:`SnapshotStore.persist` call merges the partial update over that cached
copy before writing it back. A write made by another tab between our load and
our persist is overwritten (last write wins).
"""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, MutableMapping, cast

import streamlit as st

from constants.keys import StateKeys
from core.errors import StorageError
from state.storage import KeyValueStore

logger = logging.getLogger(__name__)

Snapshot = dict[str, Any]


def serialize_snapshot(snapshot: Mapping[str, Any]) -> str:
    """Return the JSON text written to the store."""

    return json.dumps(snapshot, ensure_ascii=False)


def parse_snapshot(raw: str | None) -> Snapshot:
    """Decode stored JSON text; anything but an object raises ``ValueError``."""

    if raw is None or not raw.strip():
        return {}
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        raise ValueError(f"Snapshot is a {type(payload).__name__}, expected an object")
    return payload


class SnapshotStore:
    """Load and merge-persist step snapshots over a :class:`KeyValueStore`."""

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        session_state: MutableMapping[str, object] | None = None,
    ) -> None:
        self._backend = backend
        self._session_state = session_state

    @property
    def backend(self) -> KeyValueStore:
        return self._backend

    def _state(self) -> MutableMapping[str, object]:
        if self._session_state is not None:
            return self._session_state
        return cast(MutableMapping[str, object], st.session_state)

    def _cache(self) -> dict[str, Snapshot]:
        state = self._state()
        cache = state.get(StateKeys.SNAPSHOTS)
        if not isinstance(cache, dict):
            cache = {}
            state[StateKeys.SNAPSHOTS] = cache
        return cast(dict[str, Snapshot], cache)

    def read(self, key: str) -> Snapshot:
        """Return the stored snapshot for ``key`` without touching the cache.

        Absent keys, unreadable storage and corrupt payloads all yield ``{}``.
        """

        try:
            return parse_snapshot(self._backend.get_item(key))
        except (StorageError, ValueError) as error:
            # json.JSONDecodeError is a ValueError
            logger.warning("%s:load failed: %s", key, error)
            return {}

    def load(self, key: str) -> Snapshot:
        """Read ``key`` from storage and make it the session's current snapshot."""

        snapshot = self.read(key)
        self._cache()[key] = snapshot
        return dict(snapshot)

    def current(self, key: str) -> Snapshot:
        """Return the in-memory snapshot, loading it on first access."""

        cache = self._cache()
        if key not in cache:
            return self.load(key)
        return dict(cache[key])

    def persist(self, key: str, partial: Mapping[str, Any]) -> Snapshot:
        """Merge ``partial`` over the current snapshot and write the result.

        Keys absent from ``partial`` keep their current values. The merged
        snapshot becomes current even when the write fails; failures are
        logged and never raised.
        """

        merged: Snapshot = {**self.current(key), **dict(partial)}
        self._cache()[key] = merged
        try:
            self._backend.set_item(key, serialize_snapshot(merged))
        except StorageError as error:
            logger.error("%s:persist failed: %s", key, error)
        except (TypeError, ValueError) as error:
            logger.error("%s:persist could not serialise snapshot: %s", key, error)
        return dict(merged)

    def forget(self, key: str | None = None) -> None:
        """Drop cached snapshots so the next access re-reads storage."""

        cache = self._cache()
        if key is None:
            cache.clear()
        else:
            cache.pop(key, None)


__all__ = ["Snapshot", "SnapshotStore", "parse_snapshot", "serialize_snapshot"]
