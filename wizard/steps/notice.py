from __future__ import annotations

import streamlit as st

from constants.keys import StorageKeys
from core.schemas import NOTICE_SCHEMA, YES_NO_LABELS
from wizard.form import StepForm
from wizard.layout import (
    field_input,
    render_field_error,
    render_navigation_controls,
    render_progress,
    render_step_heading,
)
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = ["notice_form", "visible_questions", "step_notice"]

QUESTION_ORDER: tuple[str, ...] = ("recentHospitalization", "pastCancer", "bloodPressure")


def notice_form(context: WizardContext) -> StepForm:
    return StepForm(
        snapshot_key=StorageKeys.NOTICE_ANSWERS,
        schemas=(NOTICE_SCHEMA,),
        store=context.store,
        tracker=context.tracker,
        today=context.today,
    )


def visible_questions(record: dict[str, str], *, reveal_all: bool = False) -> tuple[str, ...]:
    """Return the questions shown so far.

    Each question appears once the previous one has an answer. A blocked
    forward attempt reveals every question so all errors are visible.
    """

    if reveal_all:
        return QUESTION_ORDER
    shown = [QUESTION_ORDER[0]]
    if record.get("recentHospitalization"):
        shown.append(QUESTION_ORDER[1])
        if record.get("pastCancer"):
            shown.append(QUESTION_ORDER[2])
    return tuple(shown)


def step_notice(context: WizardContext) -> None:
    """Render the health notice questions one after another."""

    step = get_step("notice")
    form = notice_form(context)

    render_progress(step)
    render_step_heading("告知", "被保険者ご本人の健康状態について、ありのままお答えください。")

    shown = visible_questions(form.record(NOTICE_SCHEMA), reveal_all=context.tracker.show_all_errors)
    with st.container(border=True):
        field_input(
            context,
            form,
            NOTICE_SCHEMA,
            "recentHospitalization",
            "Q1. 最近3か月以内に、医師の診察・検査・治療・投薬を受けたことがありますか？",
            kind="radio",
            options=YES_NO_LABELS,
        )
    if "pastCancer" in shown:
        with st.container(border=True):
            field_input(
                context,
                form,
                NOTICE_SCHEMA,
                "pastCancer",
                "Q2. 過去5年以内に、がん（悪性新生物）と診断されたことがありますか？",
                kind="radio",
                options=YES_NO_LABELS,
            )
    if "bloodPressure" in shown:
        with st.container(border=True):
            st.markdown("**Q3. 直近の血圧測定値を入力してください（mmHg）**")
            cols = st.columns(2)
            field_input(
                context,
                form,
                NOTICE_SCHEMA,
                "bloodPressureSystolic",
                "最高血圧",
                placeholder="120",
                container=cols[0],
                show_error=False,
            )
            field_input(
                context,
                form,
                NOTICE_SCHEMA,
                "bloodPressureDiastolic",
                "最低血圧",
                placeholder="80",
                container=cols[1],
                show_error=False,
            )
            render_field_error(form, NOTICE_SCHEMA, "bloodPressureSystolic")
            render_field_error(form, NOTICE_SCHEMA, "bloodPressureDiastolic")

    render_navigation_controls(context, step)
