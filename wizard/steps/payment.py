"""Payment method step with card and bank registration dialogs.

Card and account numbers never reach storage: the dialogs validate the typed
values in session state and only persist the registration flag and the last
four digits.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from core.fields import RecordSchema
from core.schemas import ACCOUNT_TYPE_LABELS, BANK_SCHEMA, CARD_SCHEMA, strip_card_separators, strip_non_digits
from core.validation import ErrorMap, validate_record
from models.snapshots import PaymentSnapshot, coerce_snapshot
from wizard.gates import PAYMENT_GATE_KEY
from wizard.layout import render_error, render_navigation_controls, render_progress, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = ["PAYMENT_METHOD_LABELS", "register_bank", "register_card", "step_payment"]

logger = logging.getLogger(__name__)

PAYMENT_METHOD_LABELS: dict[str, str] = {"card": "クレジットカード", "bank": "口座振替"}
EXPIRY_MONTHS: tuple[str, ...] = tuple(f"{month:02d}" for month in range(1, 13))


def expiry_years(today: date, span: int = 11) -> tuple[str, ...]:
    """Two-digit expiry years starting with the current one."""

    return tuple(f"{(today.year + offset) % 100:02d}" for offset in range(span))


def register_card(record: Mapping[str, str], today: date) -> tuple[ErrorMap, dict[str, Any]]:
    """Validate a card record; on success return the snapshot update."""

    errors = validate_record(CARD_SCHEMA, record, today=today)
    if errors:
        return errors, {}
    digits = strip_card_separators(record.get("cardNumber", ""))
    return {}, {"cardRegistered": True, "cardLast4": digits[-4:]}


def register_bank(record: Mapping[str, str], today: date) -> tuple[ErrorMap, dict[str, Any]]:
    """Validate a bank account record; on success return the snapshot update."""

    errors = validate_record(BANK_SCHEMA, record, today=today)
    if errors:
        return errors, {}
    digits = strip_non_digits(record.get("accountNumber", ""))
    return {}, {"bankRegistered": True, "bankLast4": digits[-4:]}


def _dialog_record(context: WizardContext, schema: RecordSchema, paths: tuple[str, ...]) -> dict[str, str]:
    record: dict[str, str] = {}
    for path in paths:
        value = st.session_state.get(context.navigator.step_key(f"{schema.name}.{path}"))
        record[path] = "" if value is None else str(value)
    return record


def _dialog_errors_key(context: WizardContext, schema: RecordSchema) -> str:
    return context.navigator.step_key(f"{schema.name}.errors")


def _dialog_error(context: WizardContext, schema: RecordSchema, path: str) -> None:
    errors = st.session_state.get(_dialog_errors_key(context, schema)) or {}
    render_error(errors.get(path))


@st.dialog("クレジットカードの登録")
def _card_dialog(context: WizardContext) -> None:
    key = context.navigator.step_key
    st.text_input("カード番号", key=key("card.cardNumber"), placeholder="1234 5678 9012 3456")
    _dialog_error(context, CARD_SCHEMA, "cardNumber")
    cols = st.columns(2)
    cols[0].selectbox("有効期限（月）", EXPIRY_MONTHS, index=None, key=key("card.expiryMonth"), placeholder="月")
    cols[1].selectbox("有効期限（年）", expiry_years(context.today), index=None, key=key("card.expiryYear"), placeholder="年")
    _dialog_error(context, CARD_SCHEMA, "expiry")
    st.text_input("セキュリティコード", key=key("card.cvc"), type="password", max_chars=4)
    _dialog_error(context, CARD_SCHEMA, "cvc")
    st.text_input("カード名義人", key=key("card.cardHolder"), placeholder="TARO YAMADA")
    _dialog_error(context, CARD_SCHEMA, "cardHolder")

    if st.button("登録する", type="primary", use_container_width=True):
        record = _dialog_record(context, CARD_SCHEMA, ("cardNumber", "expiryMonth", "expiryYear", "cvc", "cardHolder"))
        errors, update = register_card(record, context.today)
        st.session_state[_dialog_errors_key(context, CARD_SCHEMA)] = errors
        if errors:
            logger.info("payment:card rejected with %d error(s)", len(errors))
            st.rerun(scope="fragment")
        context.store.persist(StorageKeys.PAYMENT_METHOD, update)
        logger.info("payment:persist card registered")
        st.rerun()


@st.dialog("口座の登録")
def _bank_dialog(context: WizardContext) -> None:
    key = context.navigator.step_key
    st.text_input("金融機関名", key=key("bank.bankName"), placeholder="〇〇銀行")
    _dialog_error(context, BANK_SCHEMA, "bankName")
    st.text_input("支店名", key=key("bank.branchName"))
    _dialog_error(context, BANK_SCHEMA, "branchName")
    st.radio(
        "口座種別",
        list(ACCOUNT_TYPE_LABELS),
        format_func=lambda value: ACCOUNT_TYPE_LABELS[value],
        index=None,
        horizontal=True,
        key=key("bank.accountType"),
    )
    _dialog_error(context, BANK_SCHEMA, "accountType")
    st.text_input("口座番号（7桁）", key=key("bank.accountNumber"), max_chars=7)
    _dialog_error(context, BANK_SCHEMA, "accountNumber")
    st.text_input("口座名義（カナ）", key=key("bank.accountHolder"))
    _dialog_error(context, BANK_SCHEMA, "accountHolder")

    if st.button("登録する", type="primary", use_container_width=True):
        record = _dialog_record(
            context, BANK_SCHEMA, ("bankName", "branchName", "accountType", "accountNumber", "accountHolder")
        )
        errors, update = register_bank(record, context.today)
        st.session_state[_dialog_errors_key(context, BANK_SCHEMA)] = errors
        if errors:
            logger.info("payment:bank rejected with %d error(s)", len(errors))
            st.rerun(scope="fragment")
        context.store.persist(StorageKeys.PAYMENT_METHOD, update)
        logger.info("payment:persist bank registered")
        st.rerun()


def _on_payment_field(context: WizardContext, field: str, key: str) -> None:
    value = st.session_state.get(key)
    context.store.persist(StorageKeys.PAYMENT_METHOD, {field: (value or "") if field == "method" else bool(value)})


def _bound(context: WizardContext, field: str, value: object) -> str:
    key = context.navigator.step_key(f"payment.{field}")
    if key not in st.session_state:
        st.session_state[key] = value
    return key


def step_payment(context: WizardContext) -> None:
    """Render the payment method choice and the registration state."""

    step = get_step("payment")
    snapshot = coerce_snapshot(
        PaymentSnapshot, context.store.current(StorageKeys.PAYMENT_METHOD), key=StorageKeys.PAYMENT_METHOD
    )

    render_progress(step)
    render_step_heading("お支払方法の登録", "保険料のお支払方法を選択し、登録してください。")

    method_key = _bound(context, "method", snapshot.method or None)
    method = st.radio(
        "お支払方法",
        list(PAYMENT_METHOD_LABELS),
        format_func=lambda value: PAYMENT_METHOD_LABELS[value],
        index=None,
        horizontal=True,
        key=method_key,
        on_change=_on_payment_field,
        args=(context, "method", method_key),
    )

    if method == "card":
        with st.container(border=True):
            agree_key = _bound(context, "agreeCard", snapshot.agreeCard)
            st.checkbox(
                "クレジットカード払いに関する規定に同意する",
                key=agree_key,
                on_change=_on_payment_field,
                args=(context, "agreeCard", agree_key),
            )
            if snapshot.cardRegistered and snapshot.cardLast4:
                st.success(f"登録済みカード: ****-****-****-{snapshot.cardLast4}")
            if st.button("カード情報を登録する" if not snapshot.cardRegistered else "カード情報を変更する"):
                _card_dialog(context)
    elif method == "bank":
        with st.container(border=True):
            agree_key = _bound(context, "agreeBank", snapshot.agreeBank)
            st.checkbox(
                "口座振替に関する規定に同意する",
                key=agree_key,
                on_change=_on_payment_field,
                args=(context, "agreeBank", agree_key),
            )
            if snapshot.bankRegistered and snapshot.bankLast4:
                st.success(f"登録済み口座: 口座番号末尾 {snapshot.bankLast4}")
            if st.button("口座情報を登録する" if not snapshot.bankRegistered else "口座情報を変更する"):
                _bank_dialog(context)

    if context.tracker.show_all_errors:
        render_error((st.session_state.get(StateKeys.ERRORS) or {}).get(PAYMENT_GATE_KEY))
    render_navigation_controls(context, step)
