from pathlib import Path
import sys
from dataclasses import dataclass
from datetime import date

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from config import load_settings  # noqa: E402
from state.snapshots import SnapshotStore  # noqa: E402
from state.storage import MemoryStore  # noqa: E402
from state.touched import TouchedTracker  # noqa: E402
from wizard.navigation.router import WizardNavigator  # noqa: E402
from wizard.navigation_types import WizardContext  # noqa: E402

TODAY = date(2024, 5, 11)


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer ``.env`` values out of the tests."""

    for name in (
        "ENROLLMENT_STORAGE_DIR",
        "ENROLLMENT_ORIGIN",
        "ENROLLMENT_STORAGE_QUOTA_BYTES",
        "ENROLLMENT_LOG_LEVEL",
        "ENROLLMENT_MIN_AGE",
        "ENROLLMENT_DEBUG",
    ):
        monkeypatch.delenv(name, raising=False)
    yield


@pytest.fixture
def backend() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def store(backend: MemoryStore) -> SnapshotStore:
    return SnapshotStore(backend)


@pytest.fixture
def tracker() -> TouchedTracker:
    return TouchedTracker()


@pytest.fixture
def query_params() -> dict[str, object]:
    return {}


@pytest.fixture
def navigator(store: SnapshotStore, tracker: TouchedTracker, query_params: dict[str, object]) -> WizardNavigator:
    return WizardNavigator(store=store, tracker=tracker, query_params=query_params, today=lambda: TODAY)


class RecordingSink:
    def __init__(self) -> None:
        self.submitted: list[dict[str, object]] = []

    def submit(self, application) -> None:  # type: ignore[no-untyped-def]
        self.submitted.append(dict(application))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def context(
    store: SnapshotStore,
    tracker: TouchedTracker,
    navigator: WizardNavigator,
    sink: RecordingSink,
) -> WizardContext:
    return WizardContext(
        store=store,
        tracker=tracker,
        navigator=navigator,
        settings=load_settings(),
        sink=sink,
        today=TODAY,
    )
