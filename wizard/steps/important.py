from __future__ import annotations

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from wizard.content import IMPORTANT_SECTIONS, InfoSection
from wizard.gates import IMPORTANT_GATE_KEY
from wizard.layout import render_error, render_navigation_controls, render_progress, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = ["render_info_section", "step_important"]


def render_info_section(section: InfoSection) -> None:
    st.markdown(f"#### {section.title}")
    st.markdown("\n".join(f"- {bullet}" for bullet in section.bullets))
    with st.expander("詳しく見る"):
        st.write(section.detail)


def _on_acknowledge(context: WizardContext, section_id: str, key: str) -> None:
    context.store.persist(StorageKeys.IMPORTANT_ACK, {section_id: bool(st.session_state.get(key))})


def step_important(context: WizardContext) -> None:
    """Render the important-matters sections with one acknowledgement each."""

    step = get_step("important")
    snapshot = context.store.current(StorageKeys.IMPORTANT_ACK)

    render_progress(step)
    render_step_heading("重要事項の確認", "以下の内容をご確認のうえ、各項目にチェックを入れてください。")

    for section in IMPORTANT_SECTIONS:
        with st.container(border=True):
            render_info_section(section)
            key = context.navigator.step_key(f"important.{section.id}")
            if key not in st.session_state:
                st.session_state[key] = snapshot.get(section.id) is True
            st.checkbox(
                "確認しました",
                key=key,
                on_change=_on_acknowledge,
                args=(context, section.id, key),
            )

    if context.tracker.show_all_errors:
        errors = st.session_state.get(StateKeys.ERRORS) or {}
        render_error(errors.get(IMPORTANT_GATE_KEY))
    render_navigation_controls(context, step)
