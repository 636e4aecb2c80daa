from __future__ import annotations

import streamlit as st

from wizard.content import PRE_NOTICE_SECTIONS
from wizard.layout import render_navigation_controls, render_progress, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step
from wizard.steps.important import render_info_section

__all__ = ["step_pre_notice_check"]


def step_pre_notice_check(context: WizardContext) -> None:
    step = get_step("pre_notice_check")

    render_progress(step)
    render_step_heading("告知の前にご確認ください")
    for section in PRE_NOTICE_SECTIONS:
        with st.container(border=True):
            render_info_section(section)
    render_navigation_controls(context, step, next_label="告知へ進む")
