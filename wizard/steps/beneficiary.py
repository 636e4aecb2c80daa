from __future__ import annotations

import logging

import streamlit as st

from constants.keys import StorageKeys
from core.fields import RecordSchema
from core.schemas import AGENT_SCHEMA, BENEFICIARY_SCHEMA, GENDER_LABELS, RELATION_LABELS
from models.snapshots import BeneficiarySnapshot, coerce_snapshot
from wizard.form import StepForm
from wizard.layout import field_input, render_navigation_controls, render_progress, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = ["beneficiary_form", "set_same_as_beneficiary", "step_beneficiary"]

logger = logging.getLogger(__name__)


def beneficiary_form(context: WizardContext) -> StepForm:
    return StepForm(
        snapshot_key=StorageKeys.BENEFICIARY,
        schemas=(BENEFICIARY_SCHEMA, AGENT_SCHEMA),
        store=context.store,
        tracker=context.tracker,
        nested=True,
        today=context.today,
    )


def set_same_as_beneficiary(form: StepForm, same: bool) -> None:
    """Store the flag; a hidden agent section loses its errors and touched state."""

    form.store.persist(form.snapshot_key, {"sameAsBeneficiary": same})
    if same:
        form.clear_section(AGENT_SCHEMA)
    logger.info("beneficiary:persist sameAsBeneficiary=%s", same)


def _on_same_changed(form: StepForm, key: str) -> None:
    set_same_as_beneficiary(form, bool(st.session_state.get(key)))


def _person_fields(context: WizardContext, form: StepForm, schema: RecordSchema) -> None:
    name_cols = st.columns(2)
    field_input(context, form, schema, "lastName", "姓（漢字）", container=name_cols[0])
    field_input(context, form, schema, "firstName", "名（漢字）", container=name_cols[1])
    kana_cols = st.columns(2)
    field_input(context, form, schema, "lastNameKana", "セイ（カナ）", container=kana_cols[0])
    field_input(context, form, schema, "firstNameKana", "メイ（カナ）", container=kana_cols[1])
    field_input(context, form, schema, "dateOfBirth", "生年月日", kind="date")
    field_input(context, form, schema, "gender", "性別", kind="radio", options=GENDER_LABELS)
    field_input(context, form, schema, "relation", "被保険者との続柄", kind="select", options=RELATION_LABELS)


def step_beneficiary(context: WizardContext) -> None:
    """Render the beneficiary and designated-agent records."""

    step = get_step("beneficiary")
    form = beneficiary_form(context)
    snapshot = coerce_snapshot(BeneficiarySnapshot, form.snapshot, key=StorageKeys.BENEFICIARY)

    render_progress(step)
    render_step_heading("受取人・指定代理請求人の登録")

    st.subheader("死亡保険金受取人")
    with st.container(border=True):
        _person_fields(context, form, BENEFICIARY_SCHEMA)

    st.subheader("指定代理請求人")
    st.caption("被保険者ご本人が請求できない場合に、代わりに給付金を請求できる方です。")
    same_key = context.navigator.step_key("beneficiary.sameAsBeneficiary")
    if same_key not in st.session_state:
        st.session_state[same_key] = snapshot.sameAsBeneficiary
    same = st.checkbox(
        "受取人と同じ方を指定する",
        key=same_key,
        on_change=_on_same_changed,
        args=(form, same_key),
    )
    if not same:
        with st.container(border=True):
            _person_fields(context, form, AGENT_SCHEMA)

    render_navigation_controls(context, step)
