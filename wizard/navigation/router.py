from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from enum import StrEnum
from typing import Callable, MutableMapping, Sequence, cast

import streamlit as st

from constants.keys import StateKeys
from core.validation import ErrorMap
from state.snapshots import SnapshotStore
from state.touched import TouchedTracker
from utils.errors import display_error
from wizard.navigation.keys import StepScopedKeys
from wizard.navigation_types import WizardContext
from wizard.step_registry import WIZARD_STEPS, StepDefinition, step_for_address

logger = logging.getLogger(__name__)

PAGE_QUERY_PARAM = "page"


class StepPhase(StrEnum):
    """Forward-gate state of the current step."""

    EDITING = "editing"
    GATED = "gated"
    READY = "ready"


class ForwardOutcome(StrEnum):
    BLOCKED = "blocked"
    NAVIGATED = "navigated"


class WizardNavigator:
    """Resolve the current step and gate navigation away from it.

    The phase of a step is derived, never stored: ``READY`` when its gate
    passes, ``GATED`` after a blocked forward attempt raised
    ``show_all_errors``, ``EDITING`` otherwise. Leaving a step is a full
    navigation: step-scoped session state is discarded before the new
    address is applied.
    """

    def __init__(
        self,
        *,
        store: SnapshotStore,
        tracker: TouchedTracker,
        steps: Sequence[StepDefinition] = WIZARD_STEPS,
        navigate: Callable[[str], None] | None = None,
        wizard_id: str = "medical",
        query_params: MutableMapping[str, object] | None = None,
        session_state: MutableMapping[str, object] | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._tracker = tracker
        self._steps = tuple(steps)
        self._navigate = navigate or self._apply_address
        self._query_params = query_params
        self._session_state = session_state
        self._step_keys = StepScopedKeys(wizard_id=wizard_id)
        self._today = today

    def _params(self) -> MutableMapping[str, object]:
        if self._query_params is not None:
            return self._query_params
        return cast(MutableMapping[str, object], st.query_params)

    def _state(self) -> MutableMapping[str, object]:
        if self._session_state is not None:
            return self._session_state
        return cast(MutableMapping[str, object], st.session_state)

    @property
    def steps(self) -> tuple[StepDefinition, ...]:
        return self._steps

    def current_address(self) -> str | None:
        value = self._params().get(PAGE_QUERY_PARAM)
        if isinstance(value, list):
            value = value[0] if value else None
        return value if isinstance(value, str) else None

    def current_step(self) -> StepDefinition:
        """Return the step for the current address and track step changes."""

        step = step_for_address(self.current_address())
        if step not in self._steps:
            step = self._steps[0]
        state = self._state()
        previous = state.get(StateKeys.CURRENT_ADDRESS)
        if previous is not None and previous != step.address:
            # Address changed outside of navigate() (browser history, typed URL).
            self.reset_step_scope()
        state[StateKeys.CURRENT_ADDRESS] = step.address
        return step

    def gate_errors(self, step: StepDefinition) -> ErrorMap:
        snapshot = self._store.current(step.snapshot_key) if step.snapshot_key else {}
        return step.gate(snapshot, self._today())

    def phase(self, step: StepDefinition) -> StepPhase:
        if not self.gate_errors(step):
            return StepPhase.READY
        if self._tracker.show_all_errors:
            return StepPhase.GATED
        return StepPhase.EDITING

    def attempt_forward(self, step: StepDefinition) -> ForwardOutcome:
        """Leave ``step`` forward when its gate passes.

        A blocked attempt stores the full error map and reveals every error at
        once; the user stays on the step.
        """

        errors = self.gate_errors(step)
        if errors or step.next_address is None:
            self._state()[StateKeys.ERRORS] = dict(errors)
            self._tracker.reveal_all()
            logger.info("%s:blocked with %d error(s)", step.key, len(errors))
            return ForwardOutcome.BLOCKED
        if step.snapshot_key:
            submitted_at = datetime.now(timezone.utc).isoformat()
            self._store.persist(step.snapshot_key, {"submittedAt": submitted_at})
        logger.info("%s:submit -> %s", step.key, step.next_address)
        self.go_to(step.next_address)
        return ForwardOutcome.NAVIGATED

    def go_back(self, step: StepDefinition) -> bool:
        """Navigate to the previous address; backward moves are never gated."""

        if step.previous_address is None:
            return False
        logger.info("%s:back -> %s", step.key, step.previous_address)
        self.go_to(step.previous_address)
        return True

    def go_to(self, address: str) -> None:
        self.reset_step_scope()
        self._state()[StateKeys.CURRENT_ADDRESS] = address
        self._navigate(address)

    def reset_step_scope(self) -> None:
        """Forget everything a full page load would lose."""

        state = self._state()
        self._tracker.reset()
        state.pop(StateKeys.ERRORS, None)
        self._store.forget()
        for key in self._step_keys.owned(list(state.keys())):
            del state[key]

    def step_key(self, name: str) -> str:
        """Return a session key that is discarded when the step changes."""

        return self._step_keys.key(name)

    def _apply_address(self, address: str) -> None:
        # Called from widget callbacks; the rerun that follows renders the new page.
        self._params()[PAGE_QUERY_PARAM] = address

    def handle_step_exception(self, step: StepDefinition, error: Exception) -> None:
        logger.warning("Failed to render wizard step '%s'", step.key, exc_info=error)
        display_error(
            f"「{step.label}」画面の表示中にエラーが発生しました。再読み込みしてください。",
            detail=repr(error),
        )

    def render_step(self, step: StepDefinition, context: WizardContext) -> None:
        try:
            step.renderer(context)
        except Exception as error:  # pragma: no cover - guarded at router level
            self.handle_step_exception(step, error)


__all__ = ["ForwardOutcome", "PAGE_QUERY_PARAM", "StepPhase", "WizardNavigator"]
