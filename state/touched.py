"""Touched-field tracking that decides when an error becomes visible."""

from __future__ import annotations

from typing import MutableMapping, cast

import streamlit as st

from constants.keys import StateKeys


class TouchedTracker:
    """Session-backed touched set plus the step-wide ``show_all_errors`` flag.

    ``show_all_errors`` is raised by a failed forward attempt and stays set
    until the step changes (see :meth:`reset`).
    """

    def __init__(self, *, session_state: MutableMapping[str, object] | None = None) -> None:
        self._session_state = session_state

    def _state(self) -> MutableMapping[str, object]:
        if self._session_state is not None:
            return self._session_state
        return cast(MutableMapping[str, object], st.session_state)

    def _touched(self) -> set[str]:
        state = self._state()
        touched = state.get(StateKeys.TOUCHED)
        if not isinstance(touched, set):
            touched = set(touched) if isinstance(touched, (list, tuple)) else set()
            state[StateKeys.TOUCHED] = touched
        return cast(set[str], touched)

    @property
    def touched(self) -> frozenset[str]:
        return frozenset(self._touched())

    @property
    def show_all_errors(self) -> bool:
        return bool(self._state().get(StateKeys.SHOW_ALL_ERRORS, False))

    def mark_touched(self, path: str) -> None:
        self._touched().add(path)

    def should_show(self, path: str) -> bool:
        return path in self._touched() or self.show_all_errors

    def reveal_all(self) -> None:
        self._state()[StateKeys.SHOW_ALL_ERRORS] = True

    def clear_prefix(self, prefix: str) -> None:
        """Forget touched entries of a hidden sub-record."""

        touched = self._touched()
        for path in [entry for entry in touched if entry.startswith(prefix)]:
            touched.discard(path)

    def reset(self) -> None:
        state = self._state()
        state.pop(StateKeys.TOUCHED, None)
        state.pop(StateKeys.SHOW_ALL_ERRORS, None)


__all__ = ["TouchedTracker"]
