"""Registry for wizard steps, their addresses, and canonical order."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Final

from constants.keys import StepAddress, StorageKeys
from wizard import gates
from wizard.gates import Gate
from wizard.navigation_types import WizardContext

StepRenderer = Callable[[WizardContext], None]


@dataclass(frozen=True)
class StepDefinition:
    """Metadata + rendering contract for an individual wizard step.

    ``previous_address``/``next_address`` are opaque navigation targets;
    ``None`` means the direction is not offered. ``progress_index`` places the
    step on the progress bar (``None`` hides the bar).
    """

    key: str
    order: int
    label: str
    address: str
    previous_address: str | None
    next_address: str | None
    snapshot_key: str | None
    gate: Gate
    renderer: StepRenderer
    progress_index: int | None = None


def _render_plan_step(context: WizardContext) -> None:
    from wizard.steps import plan_selection

    plan_selection.step_plan_selection(context)


def _render_customer_step(context: WizardContext) -> None:
    from wizard.steps import customer_info

    customer_info.step_customer_info(context)


def _render_important_step(context: WizardContext) -> None:
    from wizard.steps import important

    important.step_important(context)


def _render_pre_notice_step(context: WizardContext) -> None:
    from wizard.steps import pre_notice_check

    pre_notice_check.step_pre_notice_check(context)


def _render_notice_step(context: WizardContext) -> None:
    from wizard.steps import notice

    notice.step_notice(context)


def _render_beneficiary_step(context: WizardContext) -> None:
    from wizard.steps import beneficiary

    beneficiary.step_beneficiary(context)


def _render_payment_step(context: WizardContext) -> None:
    from wizard.steps import payment

    payment.step_payment(context)


def _render_identity_step(context: WizardContext) -> None:
    from wizard.steps import identity

    identity.step_identity(context)


def _render_confirm_step(context: WizardContext) -> None:
    from wizard.steps import confirm

    confirm.step_confirm(context)


def _render_complete_step(context: WizardContext) -> None:
    from wizard.steps import complete

    complete.step_complete(context)


PROGRESS_LABELS: Final[tuple[str, ...]] = (
    "お客様情報登録",
    "重要事項確認",
    "告知",
    "受取人登録",
    "支払方法登録",
    "本人確認",
)

WIZARD_STEPS: Final[tuple[StepDefinition, ...]] = (
    StepDefinition(
        key="plan",
        order=0,
        label="プラン選択",
        address=StepAddress.PLAN,
        previous_address=None,
        next_address=StepAddress.CUSTOMER_INFO,
        snapshot_key=StorageKeys.PLAN_SELECTION,
        gate=gates.no_gate,
        renderer=_render_plan_step,
    ),
    StepDefinition(
        key="customer_info",
        order=1,
        label="お客様情報の入力",
        address=StepAddress.CUSTOMER_INFO,
        previous_address=StepAddress.PLAN,
        next_address=StepAddress.IMPORTANT,
        snapshot_key=StorageKeys.CUSTOMER_INFO,
        gate=gates.customer_gate,
        renderer=_render_customer_step,
        progress_index=0,
    ),
    StepDefinition(
        key="important",
        order=2,
        label="重要事項の確認",
        address=StepAddress.IMPORTANT,
        previous_address=StepAddress.CUSTOMER_INFO,
        next_address=StepAddress.PRE_NOTICE_CHECK,
        snapshot_key=StorageKeys.IMPORTANT_ACK,
        gate=gates.important_gate,
        renderer=_render_important_step,
        progress_index=1,
    ),
    StepDefinition(
        key="pre_notice_check",
        order=3,
        label="告知前の確認",
        address=StepAddress.PRE_NOTICE_CHECK,
        previous_address=StepAddress.IMPORTANT,
        next_address=StepAddress.NOTICE,
        snapshot_key=None,
        gate=gates.no_gate,
        renderer=_render_pre_notice_step,
        progress_index=2,
    ),
    StepDefinition(
        key="notice",
        order=4,
        label="告知",
        address=StepAddress.NOTICE,
        previous_address=StepAddress.PRE_NOTICE_CHECK,
        next_address=StepAddress.BENEFICIARY,
        snapshot_key=StorageKeys.NOTICE_ANSWERS,
        gate=gates.notice_gate,
        renderer=_render_notice_step,
        progress_index=2,
    ),
    StepDefinition(
        key="beneficiary",
        order=5,
        label="受取人・指定代理請求人の登録",
        address=StepAddress.BENEFICIARY,
        previous_address=StepAddress.NOTICE,
        next_address=StepAddress.PAYMENT,
        snapshot_key=StorageKeys.BENEFICIARY,
        gate=gates.beneficiary_gate,
        renderer=_render_beneficiary_step,
        progress_index=3,
    ),
    StepDefinition(
        key="payment",
        order=6,
        label="お支払方法の登録",
        address=StepAddress.PAYMENT,
        previous_address=StepAddress.BENEFICIARY,
        next_address=StepAddress.IDENTITY,
        snapshot_key=StorageKeys.PAYMENT_METHOD,
        gate=gates.payment_gate,
        renderer=_render_payment_step,
        progress_index=4,
    ),
    StepDefinition(
        key="identity",
        order=7,
        label="本人確認書類の提出",
        address=StepAddress.IDENTITY,
        previous_address=StepAddress.PAYMENT,
        next_address=StepAddress.CONFIRM,
        snapshot_key=StorageKeys.KYC_STATE,
        gate=gates.identity_gate,
        renderer=_render_identity_step,
        progress_index=5,
    ),
    StepDefinition(
        key="confirm",
        order=8,
        label="申込内容の最終確認",
        address=StepAddress.CONFIRM,
        previous_address=StepAddress.IDENTITY,
        next_address=StepAddress.COMPLETE,
        snapshot_key=None,
        gate=gates.no_gate,
        renderer=_render_confirm_step,
    ),
    StepDefinition(
        key="complete",
        order=9,
        label="お申込み完了",
        address=StepAddress.COMPLETE,
        previous_address=None,
        next_address=None,
        snapshot_key=None,
        gate=gates.no_gate,
        renderer=_render_complete_step,
    ),
)


def get_step(key: str) -> StepDefinition:
    for step in WIZARD_STEPS:
        if step.key == key:
            return step
    raise KeyError(f"Unknown wizard step: {key}")


def step_for_address(address: str | None) -> StepDefinition:
    """Return the step registered for ``address``; unknown addresses map to the first step."""

    if address:
        normalized = address.rstrip("/") or address
        for step in WIZARD_STEPS:
            if step.address == normalized:
                return step
    return WIZARD_STEPS[0]


__all__ = [
    "PROGRESS_LABELS",
    "StepDefinition",
    "WIZARD_STEPS",
    "get_step",
    "step_for_address",
]
