"""Shared Streamlit building blocks for the wizard steps."""

from __future__ import annotations

from datetime import date
from typing import Callable, Literal, Mapping, Sequence

import streamlit as st

from core.dates import parse_iso_date
from core.fields import RecordSchema
from wizard.form import StepForm
from wizard.navigation.router import StepPhase
from wizard.navigation_types import WizardContext
from wizard.step_registry import PROGRESS_LABELS, StepDefinition

FieldKind = Literal["text", "password", "date", "select", "radio"]

GATED_WARNING = "入力内容に誤りがあります。赤字のメッセージをご確認ください。"


def render_step_heading(title: str, intro: str | None = None) -> None:
    st.header(title)
    if intro:
        st.caption(intro)


def render_progress(step: StepDefinition) -> None:
    """Show the progress bar for steps that sit on it."""

    if step.progress_index is None:
        return
    total = len(PROGRESS_LABELS)
    current = step.progress_index + 1
    st.progress(current / total, text=f"STEP {current}/{total}  {PROGRESS_LABELS[step.progress_index]}")


def render_error(message: str | None) -> None:
    if message:
        st.markdown(f":red[{message}]")


def widget_key(context: WizardContext, schema: RecordSchema, path: str) -> str:
    return context.navigator.step_key(f"{schema.name}.{path}")


def _to_widget_value(kind: FieldKind, value: str) -> object:
    if kind == "date":
        return parse_iso_date(value)
    if kind in ("select", "radio"):
        return value or None
    return value


def _from_widget_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def _on_field_change(form: StepForm, schema: RecordSchema, path: str, key: str) -> None:
    value = _from_widget_value(st.session_state.get(key))
    form.update_field(schema, path, value)
    form.touch(schema, path)


def field_input(
    context: WizardContext,
    form: StepForm,
    schema: RecordSchema,
    path: str,
    label: str,
    *,
    kind: FieldKind = "text",
    options: Mapping[str, str] | Sequence[str] | None = None,
    placeholder: str | None = None,
    help: str | None = None,
    max_chars: int | None = None,
    container: object | None = None,
    show_error: bool = True,
) -> str:
    """Render one bound widget and its visible error; return the current value.

    The widget writes through :meth:`StepForm.update_field` on change, which
    persists the snapshot and revalidates the field and its dependents.
    """

    target = container if container is not None else st
    key = widget_key(context, schema, path)
    if key not in st.session_state:
        st.session_state[key] = _to_widget_value(kind, form.value(schema, path))
    callback_args = (form, schema, path, key)
    if kind in ("text", "password"):
        target.text_input(  # type: ignore[attr-defined]
            label,
            key=key,
            type="password" if kind == "password" else "default",
            placeholder=placeholder,
            help=help,
            max_chars=max_chars,
            on_change=_on_field_change,
            args=callback_args,
        )
    elif kind == "date":
        target.date_input(  # type: ignore[attr-defined]
            label,
            key=key,
            min_value=date(1900, 1, 1),
            max_value=context.today,
            format="YYYY-MM-DD",
            help=help,
            on_change=_on_field_change,
            args=callback_args,
        )
    else:
        choices = dict(options) if isinstance(options, Mapping) else {item: item for item in options or ()}
        choice_kwargs: dict[str, object] = {
            "options": list(choices),
            "format_func": lambda value: choices.get(value, value),
            "index": None,
            "key": key,
            "help": help,
            "on_change": _on_field_change,
            "args": callback_args,
        }
        if kind == "select":
            target.selectbox(label, placeholder=placeholder or "選択してください", **choice_kwargs)  # type: ignore[attr-defined]
        else:
            target.radio(label, horizontal=True, **choice_kwargs)  # type: ignore[attr-defined]
    if show_error:
        render_field_error(form, schema, path, container=target)
    return form.value(schema, path)


def render_field_error(form: StepForm, schema: RecordSchema, path: str, *, container: object | None = None) -> None:
    message = form.visible_error(schema, path)
    if message:
        (container if container is not None else st).markdown(f":red[{message}]")  # type: ignore[attr-defined]


def render_navigation_controls(
    context: WizardContext,
    step: StepDefinition,
    *,
    next_label: str = "次へ進む",
    back_label: str = "戻る",
    on_next: Callable[[], object] | None = None,
) -> None:
    """Render back/next buttons for ``step``.

    Both buttons act through ``on_click`` callbacks, so the rerun that follows
    already shows the new page (or the revealed errors of a blocked attempt).
    """

    navigator = context.navigator
    if navigator.phase(step) is StepPhase.GATED:
        st.warning(GATED_WARNING)
    cols = st.columns((1, 1), gap="small")
    if step.previous_address is not None:
        cols[0].button(
            back_label,
            key=navigator.step_key("nav.back"),
            on_click=navigator.go_back,
            args=(step,),
            use_container_width=True,
        )
    else:
        cols[0].write("")
    if step.next_address is not None:
        cols[1].button(
            next_label,
            key=navigator.step_key("nav.next"),
            type="primary",
            on_click=on_next or navigator.attempt_forward,
            args=() if on_next else (step,),
            use_container_width=True,
        )
    else:
        cols[1].write("")
