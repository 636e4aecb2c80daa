from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from models.snapshots import DOCUMENTS_REQUIRING_BACK, KycSnapshot, coerce_snapshot
from wizard.content import DOCUMENT_TYPES
from wizard.gates import IDENTITY_GATE_KEY
from wizard.layout import render_error, render_navigation_controls, render_progress, render_step_heading
from wizard.navigation.router import ForwardOutcome
from wizard.navigation_types import WizardContext
from wizard.step_registry import StepDefinition, get_step

__all__ = ["KYC_METHOD_LABELS", "kyc_update", "step_identity", "submit_identity"]

logger = logging.getLogger(__name__)

KYC_METHOD_LABELS: dict[str, str] = {
    "upload-now": "今すぐ書類画像を提出する",
    "upload-later": "あとで提出する",
}


def kyc_update(
    previous: KycSnapshot,
    *,
    method: str | None,
    doc_type: str | None,
    front_name: str | None,
    back_name: str | None,
) -> dict[str, Any]:
    """Build the identity snapshot from the current widget values.

    A newly uploaded file replaces the stored name; otherwise the previous
    name is kept as long as the document type did not change.
    """

    doc = doc_type or ""
    same_doc = doc == previous.docType
    update = KycSnapshot(
        method=method if method in KYC_METHOD_LABELS else previous.method,  # type: ignore[arg-type]
        docType=doc,
        frontName=front_name or (previous.frontName if same_doc else None),
        backName=back_name or (previous.backName if same_doc else None),
    )
    if not update.requires_back:
        update.backName = None
    return update.model_dump()


def submit_identity(context: WizardContext, step: StepDefinition) -> ForwardOutcome:
    """Persist the identity snapshot, then try to leave the step."""

    key = context.navigator.step_key
    previous = coerce_snapshot(KycSnapshot, context.store.current(StorageKeys.KYC_STATE), key=StorageKeys.KYC_STATE)
    front = st.session_state.get(key("identity.front"))
    back = st.session_state.get(key("identity.back"))
    update = kyc_update(
        previous,
        method=st.session_state.get(key("identity.method")),
        doc_type=st.session_state.get(key("identity.docType")),
        front_name=getattr(front, "name", None),
        back_name=getattr(back, "name", None),
    )
    context.store.persist(StorageKeys.KYC_STATE, update)
    logger.info("identity:persist method=%s docType=%s", update["method"], update["docType"])
    return context.navigator.attempt_forward(step)


def step_identity(context: WizardContext) -> None:
    """Render the identity document submission."""

    step = get_step("identity")
    snapshot = coerce_snapshot(KycSnapshot, context.store.current(StorageKeys.KYC_STATE), key=StorageKeys.KYC_STATE)
    key = context.navigator.step_key

    render_progress(step)
    render_step_heading("本人確認書類の提出", "ご本人確認のため、書類の画像を提出してください。")

    if key("identity.method") not in st.session_state:
        st.session_state[key("identity.method")] = snapshot.method
    method = st.radio(
        "提出方法",
        list(KYC_METHOD_LABELS),
        format_func=lambda value: KYC_METHOD_LABELS[value],
        key=key("identity.method"),
    )

    if method == "upload-now":
        if key("identity.docType") not in st.session_state:
            st.session_state[key("identity.docType")] = snapshot.docType or None
        doc_type = st.selectbox(
            "本人確認書類の種類",
            list(DOCUMENT_TYPES),
            format_func=lambda value: DOCUMENT_TYPES[value],
            index=None,
            placeholder="選択してください",
            key=key("identity.docType"),
        )
        if doc_type:
            same_doc = doc_type == snapshot.docType
            st.file_uploader("表面の画像", type=["png", "jpg", "jpeg", "pdf"], key=key("identity.front"))
            if same_doc and snapshot.frontName:
                st.caption(f"提出済み: {snapshot.frontName}")
            if doc_type in DOCUMENTS_REQUIRING_BACK:
                st.file_uploader("裏面の画像", type=["png", "jpg", "jpeg", "pdf"], key=key("identity.back"))
                if same_doc and snapshot.backName:
                    st.caption(f"提出済み: {snapshot.backName}")
    else:
        st.info("お申込み完了後、マイページから本人確認書類を提出してください。")

    if context.tracker.show_all_errors:
        render_error((st.session_state.get(StateKeys.ERRORS) or {}).get(IDENTITY_GATE_KEY))
    render_navigation_controls(
        context,
        step,
        next_label="確認画面へ進む",
        on_next=lambda: submit_identity(context, step),
    )
