"""Per-step form state: records in the snapshot, error map, touched set.

``StepForm`` wires the pure validator to the session. Every field update
persists the snapshot, then revalidates the field and everything depending on
it. Error visibility is decided by the :class:`~state.touched.TouchedTracker`.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, MutableMapping, Sequence, cast

import streamlit as st

from constants.keys import StateKeys
from core.fields import RecordSchema
from core.validation import ErrorMap, revalidate
from state.snapshots import SnapshotStore
from state.touched import TouchedTracker

logger = logging.getLogger(__name__)


class StepForm:
    """Form facade for one step.

    Args:
        snapshot_key: Storage key of the step snapshot.
        schemas: Record schemas edited on the step.
        store: Snapshot store used for loading and merge-persisting.
        tracker: Touched tracker; a session-backed one is created when omitted.
        nested: When ``True`` each record lives under ``snapshot[schema.name]``;
            otherwise the snapshot itself is the record.
        today: Reference date for age rules.
    """

    def __init__(
        self,
        *,
        snapshot_key: str,
        schemas: Sequence[RecordSchema],
        store: SnapshotStore,
        tracker: TouchedTracker | None = None,
        nested: bool = False,
        today: date | None = None,
        session_state: MutableMapping[str, object] | None = None,
    ) -> None:
        self.snapshot_key = snapshot_key
        self.schemas = tuple(schemas)
        self.store = store
        self.nested = nested
        self.today = today
        self._session_state = session_state
        self.tracker = tracker or TouchedTracker(session_state=session_state)

    def _state(self) -> MutableMapping[str, object]:
        if self._session_state is not None:
            return self._session_state
        return cast(MutableMapping[str, object], st.session_state)

    @property
    def snapshot(self) -> dict[str, object]:
        return self.store.current(self.snapshot_key)

    @property
    def errors(self) -> ErrorMap:
        raw = self._state().get(StateKeys.ERRORS)
        if not isinstance(raw, dict):
            raw = {}
            self._state()[StateKeys.ERRORS] = raw
        return cast(ErrorMap, raw)

    def _set_errors(self, errors: Mapping[str, str]) -> None:
        self._state()[StateKeys.ERRORS] = dict(errors)

    def record(self, schema: RecordSchema) -> dict[str, str]:
        """Return the string record for ``schema`` from the current snapshot."""

        snapshot = self.snapshot
        source = snapshot.get(schema.name) if self.nested else snapshot
        if not isinstance(source, Mapping):
            return {}
        record: dict[str, str] = {}
        for key, value in source.items():
            if isinstance(value, (dict, list, bool)):
                continue
            record[str(key)] = "" if value is None else str(value)
        return record

    def value(self, schema: RecordSchema, path: str) -> str:
        return self.record(schema).get(path, "")

    def update_field(self, schema: RecordSchema, path: str, value: str) -> ErrorMap:
        """Store ``value`` at ``path`` and refresh the affected error entries."""

        record = self.record(schema)
        record[path] = value
        if self.nested:
            self.store.persist(self.snapshot_key, {schema.name: record})
        else:
            self.store.persist(self.snapshot_key, {path: value})
        updated = revalidate(schema, path, record, self.errors, today=self.today)
        self._set_errors(updated)
        return updated

    def touch(self, schema: RecordSchema, path: str) -> None:
        """Mark the descriptor owning ``path`` as touched."""

        for owner in schema.affected_paths(path):
            descriptor = schema.descriptor(owner)
            if descriptor is None:
                continue
            if owner == path or path in descriptor.segments:
                self.tracker.mark_touched(schema.error_key(owner))

    def visible_error(self, schema: RecordSchema, path: str) -> str | None:
        key = schema.error_key(path)
        message = self.errors.get(key)
        if message and self.tracker.should_show(key):
            return message
        return None

    def clear_section(self, schema: RecordSchema) -> None:
        """Drop errors and touched entries of a record that is no longer shown."""

        prefix = schema.error_key("")
        self._set_errors({key: message for key, message in self.errors.items() if not key.startswith(prefix)})
        self.tracker.clear_prefix(prefix)


__all__ = ["StepForm"]
