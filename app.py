# app.py: medical insurance enrollment wizard (Streamlit entrypoint)
from __future__ import annotations

import sys
import uuid
from datetime import date
from pathlib import Path

import streamlit as st

APP_ROOT = Path(__file__).resolve().parent
for candidate in (APP_ROOT, APP_ROOT.parent):
    candidate_str = str(candidate)
    if candidate_str not in sys.path:
        sys.path.insert(0, candidate_str)

from config import load_settings  # noqa: E402
from constants.keys import StateKeys  # noqa: E402
from state.client import resolve_client_id  # noqa: E402
from state.snapshots import SnapshotStore  # noqa: E402
from state.storage import JsonFileStore  # noqa: E402
from state.touched import TouchedTracker  # noqa: E402
from utils.logging_context import configure_logging, log_context, set_client_id, set_session_id  # noqa: E402
from wizard.navigation.router import WizardNavigator  # noqa: E402
from wizard.navigation_types import WizardContext  # noqa: E402
from wizard.submission import LoggingSubmissionSink  # noqa: E402

APP_VERSION = "1.0.0"

st.set_page_config(
    page_title="医療保険 お申込み",
    page_icon="🏥",
    layout="centered",
    initial_sidebar_state="collapsed",
)

settings = load_settings()
configure_logging(level=settings.log_level)

session_id = st.session_state.setdefault(StateKeys.SESSION_ID, uuid.uuid4().hex[:12])
set_session_id(session_id)
st.session_state.setdefault("app_version", APP_VERSION)

client_id = resolve_client_id()
set_client_id(client_id)
store = SnapshotStore(
    JsonFileStore(
        settings.storage_dir,
        origin=settings.origin,
        client=client_id,
        quota_bytes=settings.quota_bytes,
    )
)
tracker = TouchedTracker()
navigator = WizardNavigator(store=store, tracker=tracker)

step = navigator.current_step()
context = WizardContext(
    store=store,
    tracker=tracker,
    navigator=navigator,
    settings=settings,
    sink=LoggingSubmissionSink(),
    today=date.today(),
)

with log_context(wizard_step=step.key):
    navigator.render_step(step, context)
