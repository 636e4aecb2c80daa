"""Plan selection step: main contract, riders and the plan advisor."""

from __future__ import annotations

import logging
from typing import Any, Callable, Sequence

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from models.snapshots import RIDER_KEYS, PlanSelection, coerce_snapshot
from state.snapshots import SnapshotStore
from wizard.advisor import PlanAdvisor
from wizard.content import (
    DAILY_AMOUNT_OPTIONS,
    PAYMENT_LIMIT_DAY_OPTIONS,
    PAYMENT_PERIOD_OPTIONS,
    RIDER_LABELS,
    SURGERY_MULTIPLIER_OPTIONS,
    SURGERY_TYPE_LABELS,
    UNLIMITED_TYPE_LABELS,
    payment_period_label,
)
from wizard.layout import render_navigation_controls, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = [
    "get_advisor",
    "record_advisor_answers",
    "set_rider",
    "step_plan_selection",
    "update_main_contract",
]

logger = logging.getLogger(__name__)


def _plan(store: SnapshotStore) -> PlanSelection:
    return coerce_snapshot(PlanSelection, store.current(StorageKeys.PLAN_SELECTION), key=StorageKeys.PLAN_SELECTION)


def update_main_contract(store: SnapshotStore, field: str, value: Any) -> PlanSelection:
    """Replace one main-contract option and persist the whole contract."""

    plan = _plan(store)
    contract = plan.mainContract.model_dump()
    contract[field] = value
    store.persist(StorageKeys.PLAN_SELECTION, {"mainContract": contract})
    logger.info("plan:persist mainContract.%s=%s", field, value)
    return _plan(store)


def set_rider(store: SnapshotStore, rider: str, selected: bool) -> PlanSelection:
    plan = _plan(store)
    riders = {key: choice.model_dump() for key, choice in plan.riders.items()}
    riders[rider] = {**riders.get(rider, {}), "selected": selected}
    store.persist(StorageKeys.PLAN_SELECTION, {"riders": riders})
    logger.info("plan:persist rider %s=%s", rider, selected)
    return _plan(store)


def record_advisor_answers(store: SnapshotStore, advisor: PlanAdvisor) -> None:
    store.persist(StorageKeys.PLAN_SELECTION, {"advisorAnswers": dict(advisor.answers)})


def get_advisor() -> PlanAdvisor:
    """Return the session's advisor, creating it on first use."""

    advisor = st.session_state.get(StateKeys.ADVISOR)
    if not isinstance(advisor, PlanAdvisor):
        advisor = PlanAdvisor()
        st.session_state[StateKeys.ADVISOR] = advisor
    return advisor


def _contract_widget_changed(context: WizardContext, field: str, key: str) -> None:
    update_main_contract(context.store, field, st.session_state.get(key))


def _rider_changed(context: WizardContext, rider: str, key: str) -> None:
    set_rider(context.store, rider, bool(st.session_state.get(key)))


def _contract_select(
    context: WizardContext,
    field: str,
    label: str,
    options: Sequence[Any],
    current: Any,
    format_func: Callable[[Any], str] = str,
    *,
    radio: bool = False,
) -> None:
    key = context.navigator.step_key(f"plan.{field}")
    if key not in st.session_state:
        st.session_state[key] = current if current in options else options[0]
    widget = st.radio if radio else st.selectbox
    kwargs: dict[str, Any] = {"horizontal": True} if radio else {}
    widget(
        label,
        list(options),
        format_func=format_func,
        key=key,
        on_change=_contract_widget_changed,
        args=(context, field, key),
        **kwargs,
    )


def _contract_toggle(context: WizardContext, field: str, label: str, current: bool) -> None:
    key = context.navigator.step_key(f"plan.{field}")
    if key not in st.session_state:
        st.session_state[key] = current
    st.toggle(label, key=key, on_change=_contract_widget_changed, args=(context, field, key))


def _advance(context: WizardContext, advisor: PlanAdvisor) -> None:
    if advisor.advance() and advisor.in_result_mode:
        record_advisor_answers(context.store, advisor)


def _render_advisor(context: WizardContext) -> None:
    advisor = get_advisor()
    # One tick per rerun: apply the mirror refresh queued by the last toggles.
    advisor.store.scheduler.run_pending()

    with st.expander("かんたんプラン診断", expanded=advisor.active):
        if not advisor.active:
            st.write("6つの質問に答えて、ご自身に合った保障の考え方を確認できます。")
            st.button("診断をはじめる", on_click=advisor.start)
            return
        question = advisor.current_question
        if question is None:
            st.markdown("**診断結果**")
            for answered in advisor.questions:
                answer = advisor.answers.get(answered.id)
                if answer is None:
                    continue
                text = "、".join(answer) if isinstance(answer, list) else answer
                st.write(f"{answered.prompt.replace(chr(10), '')}: {text}")
            cols = st.columns(2)
            cols[0].button("もう一度診断する", on_click=advisor.start)
            cols[1].button("閉じる", on_click=advisor.close)
            return

        st.markdown(f"**Q{advisor.current_index + 1}. {question.prompt}**")
        st.caption(question.info)
        shown = advisor.displayed_selection(question.id)
        for option in question.options:
            st.button(
                f"{'✓ ' if option.id in shown else ''}{option.label}",
                key=f"advisor.{question.id}.{option.id}",
                type="primary" if option.id in shown else "secondary",
                on_click=advisor.toggle,
                args=(option.id,),
                use_container_width=True,
            )
        is_last = advisor.current_index == len(advisor.questions) - 1
        st.button(
            "結果を見る" if is_last else "次の質問へ",
            disabled=not advisor.can_advance(),
            on_click=_advance,
            args=(context, advisor),
        )


def step_plan_selection(context: WizardContext) -> None:
    """Render the main contract options, riders and advisor."""

    step = get_step("plan")
    plan = _plan(context.store)
    contract = plan.mainContract

    render_step_heading("医療保険 プラン選択", "保障内容を選んで、お申込み手続きへお進みください。")
    _render_advisor(context)

    st.subheader("主契約")
    with st.container(border=True):
        _contract_select(
            context,
            "hospitalizationDailyAmount",
            "入院給付金日額",
            DAILY_AMOUNT_OPTIONS,
            contract.hospitalizationDailyAmount,
            lambda amount: f"{amount:,}円",
        )
        _contract_select(
            context,
            "paymentLimitDays",
            "1入院の支払限度日数",
            PAYMENT_LIMIT_DAY_OPTIONS,
            contract.paymentLimitDays,
            lambda days: f"{days}日",
            radio=True,
        )
        _contract_select(
            context,
            "unlimitedType",
            "入院無制限",
            tuple(UNLIMITED_TYPE_LABELS),
            contract.unlimitedType,
            UNLIMITED_TYPE_LABELS.__getitem__,
        )
        _contract_select(
            context,
            "surgeryType",
            "手術給付金の型",
            tuple(SURGERY_TYPE_LABELS),
            contract.surgeryType,
            SURGERY_TYPE_LABELS.__getitem__,
            radio=True,
        )
        _contract_select(
            context,
            "surgeryMultiplier",
            "手術給付倍率",
            SURGERY_MULTIPLIER_OPTIONS,
            contract.surgeryMultiplier,
            lambda multiplier: f"{multiplier}倍",
            radio=True,
        )
        _contract_toggle(context, "radiationTherapy", "放射線治療給付金", contract.radiationTherapy)
        _contract_toggle(context, "deathBenefit", "死亡保険金", contract.deathBenefit)
        _contract_select(
            context,
            "paymentPeriod",
            "保険料払込期間",
            PAYMENT_PERIOD_OPTIONS,
            contract.paymentPeriod,
            payment_period_label,
        )

    st.subheader("特約")
    with st.container(border=True):
        for rider in RIDER_KEYS:
            key = context.navigator.step_key(f"plan.rider.{rider}")
            if key not in st.session_state:
                choice = plan.riders.get(rider)
                st.session_state[key] = bool(choice and choice.selected)
            st.checkbox(RIDER_LABELS[rider], key=key, on_change=_rider_changed, args=(context, rider, key))
        chosen = [RIDER_LABELS[rider] for rider in _plan(context.store).selected_riders()]
        st.caption("選択中の特約: " + ("、".join(chosen) if chosen else "なし"))

    render_navigation_controls(context, step, next_label="お申込み手続きへ")
