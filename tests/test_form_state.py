from __future__ import annotations

import json
from datetime import date

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from core.schemas import AGENT_SCHEMA, BENEFICIARY_SCHEMA, CUSTOMER_SCHEMA
from state.snapshots import SnapshotStore
from state.storage import MemoryStore
from state.touched import TouchedTracker
from wizard.form import StepForm

TODAY = date(2024, 5, 11)


def _customer_form(store: SnapshotStore, tracker: TouchedTracker) -> StepForm:
    return StepForm(
        snapshot_key=StorageKeys.CUSTOMER_INFO,
        schemas=(CUSTOMER_SCHEMA,),
        store=store,
        tracker=tracker,
        today=TODAY,
    )


def _beneficiary_form(store: SnapshotStore, tracker: TouchedTracker) -> StepForm:
    return StepForm(
        snapshot_key=StorageKeys.BENEFICIARY,
        schemas=(BENEFICIARY_SCHEMA, AGENT_SCHEMA),
        store=store,
        tracker=tracker,
        nested=True,
        today=TODAY,
    )


def test_touched_tracker_reveal_all_persists_until_reset(tracker: TouchedTracker) -> None:
    assert not tracker.should_show("lastName")

    tracker.mark_touched("lastName")
    assert tracker.should_show("lastName")
    assert not tracker.should_show("firstName")

    tracker.reveal_all()
    tracker.mark_touched("email")
    assert tracker.should_show("firstName")
    assert tracker.show_all_errors

    tracker.reset()
    assert not tracker.show_all_errors
    assert tracker.touched == frozenset()


def test_tracker_clear_prefix(tracker: TouchedTracker) -> None:
    tracker.mark_touched("agent.lastName")
    tracker.mark_touched("beneficiary.lastName")

    tracker.clear_prefix("agent.")

    assert tracker.touched == frozenset({"beneficiary.lastName"})


def test_update_field_persists_and_validates(backend: MemoryStore, store: SnapshotStore, tracker: TouchedTracker) -> None:
    form = _customer_form(store, tracker)

    errors = form.update_field(CUSTOMER_SCHEMA, "lastName", "Yamada")

    assert errors == {"lastName": "姓は漢字で入力してください"}
    assert json.loads(backend.get_item(StorageKeys.CUSTOMER_INFO) or "{}") == {"lastName": "Yamada"}
    assert st.session_state[StateKeys.ERRORS] == errors


def test_errors_are_hidden_until_touched(store: SnapshotStore, tracker: TouchedTracker) -> None:
    form = _customer_form(store, tracker)
    form.update_field(CUSTOMER_SCHEMA, "lastName", "Yamada")

    assert form.visible_error(CUSTOMER_SCHEMA, "lastName") is None

    form.touch(CUSTOMER_SCHEMA, "lastName")
    assert form.visible_error(CUSTOMER_SCHEMA, "lastName") == "姓は漢字で入力してください"


def test_touching_a_segment_marks_the_composite(store: SnapshotStore, tracker: TouchedTracker) -> None:
    form = _customer_form(store, tracker)
    form.update_field(CUSTOMER_SCHEMA, "mobilePhone1", "090")
    form.touch(CUSTOMER_SCHEMA, "mobilePhone1")

    assert "mobilePhone" in tracker.touched
    assert form.visible_error(CUSTOMER_SCHEMA, "mobilePhone") == "携帯電話番号を入力してください"


def test_nested_records_persist_under_schema_name(backend: MemoryStore, store: SnapshotStore, tracker: TouchedTracker) -> None:
    form = _beneficiary_form(store, tracker)
    store.persist(StorageKeys.BENEFICIARY, {"sameAsBeneficiary": False})

    form.update_field(BENEFICIARY_SCHEMA, "lastName", "山田")
    form.update_field(AGENT_SCHEMA, "lastName", "Jiro")

    stored = json.loads(backend.get_item(StorageKeys.BENEFICIARY) or "{}")
    assert stored == {
        "sameAsBeneficiary": False,
        "beneficiary": {"lastName": "山田"},
        "agent": {"lastName": "Jiro"},
    }
    assert form.errors == {"agent.lastName": "指定代理請求人の姓は漢字で入力してください"}


def test_clear_section_drops_hidden_errors(store: SnapshotStore, tracker: TouchedTracker) -> None:
    form = _beneficiary_form(store, tracker)
    form.update_field(BENEFICIARY_SCHEMA, "lastName", "Taro")
    form.update_field(AGENT_SCHEMA, "lastName", "Jiro")
    tracker.mark_touched("agent.lastName")
    tracker.mark_touched("beneficiary.lastName")

    form.clear_section(AGENT_SCHEMA)

    assert not [key for key in form.errors if key.startswith("agent.")]
    assert "beneficiary.lastName" in form.errors
    assert tracker.touched == frozenset({"beneficiary.lastName"})
