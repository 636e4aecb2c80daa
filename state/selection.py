"""Dual-store option selection for the plan advisor questionnaire.

The *shadow* map is authoritative and updated synchronously on every toggle.
The *rendered* mirror is refreshed on the next scheduler tick so a burst of
toggles inside one interaction produces a single render update. Anything that
decides behaviour (``is_selected``, the next-question gate) reads the shadow;
only display code reads the mirror, through :meth:`SelectionShadowStore.subscribe`.
"""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Mapping

logger = logging.getLogger(__name__)

SelectionMap = Mapping[str, frozenset[str]]
SelectionListener = Callable[[SelectionMap], None]


class TickScheduler:
    """Deferred callback queue drained once per interaction tick.

    Callbacks scheduled while :meth:`run_pending` is draining wait for the
    following tick.
    """

    def __init__(self) -> None:
        self._queue: deque[Callable[[], None]] = deque()

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._queue.append(callback)

    def run_pending(self) -> int:
        """Run the callbacks queued before this call and return how many ran."""

        batch = len(self._queue)
        for _ in range(batch):
            callback = self._queue.popleft()
            callback()
        return batch


class SelectionShadowStore:
    """Question id to selected option ids, with a lagging render mirror."""

    def __init__(
        self,
        scheduler: TickScheduler | None = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._scheduler = scheduler or TickScheduler()
        self._clock = clock
        self._shadow: dict[str, tuple[str, ...]] = {}
        self._rendered: dict[str, frozenset[str]] = {}
        self._listeners: list[SelectionListener] = []
        self._mirror_scheduled = False

    @property
    def scheduler(self) -> TickScheduler:
        return self._scheduler

    def toggle(self, question_id: str, option_id: str, *, multi: bool) -> frozenset[str]:
        """Apply a selection to the shadow map immediately.

        Multi-select questions flip membership of ``option_id``; single-choice
        questions replace the whole set with ``{option_id}``, so choosing the
        same option again leaves the selection unchanged.
        """

        started = self._clock()
        current = self._shadow.get(question_id, ())
        if multi:
            if option_id in current:
                updated = tuple(entry for entry in current if entry != option_id)
            else:
                updated = current + (option_id,)
        else:
            updated = (option_id,)
        self._shadow[question_id] = updated
        self._schedule_mirror()
        logger.debug(
            "selection:toggle %s/%s applied in %.2f ms",
            question_id,
            option_id,
            (self._clock() - started) * 1000,
        )
        return frozenset(updated)

    def is_selected(self, question_id: str, option_id: str) -> bool:
        return option_id in self._shadow.get(question_id, ())

    def selected(self, question_id: str) -> frozenset[str]:
        return frozenset(self._shadow.get(question_id, ()))

    def selection_order(self, question_id: str) -> tuple[str, ...]:
        """Return selected option ids in the order they were picked."""

        return self._shadow.get(question_id, ())

    def subscribe(self, listener: SelectionListener) -> Callable[[], None]:
        """Register ``listener`` for mirror refreshes; returns an unsubscribe hook."""

        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def reset(self) -> None:
        self._shadow.clear()
        self._schedule_mirror()

    def _schedule_mirror(self) -> None:
        if self._mirror_scheduled:
            return
        self._mirror_scheduled = True
        self._scheduler.call_soon(self._refresh_mirror)

    def _refresh_mirror(self) -> None:
        self._mirror_scheduled = False
        self._rendered = {key: frozenset(value) for key, value in self._shadow.items()}
        snapshot: SelectionMap = dict(self._rendered)
        for listener in list(self._listeners):
            listener(snapshot)


__all__ = ["SelectionShadowStore", "TickScheduler"]
