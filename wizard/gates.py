"""Forward gates per step.

A gate receives the step snapshot and the reference date and returns an error
map; an empty map means the step may be left forward. Gates are pure so the
navigator can recompute them on every render.
"""

from __future__ import annotations

from datetime import date
from functools import lru_cache
from typing import Any, Callable, Final, Mapping

from config import load_settings
from core.fields import RecordSchema
from core.schemas import AGENT_SCHEMA, BENEFICIARY_SCHEMA, NOTICE_SCHEMA, build_customer_schema
from core.validation import ErrorMap, validate_record
from models.snapshots import BeneficiarySnapshot, KycSnapshot, PaymentSnapshot, coerce_snapshot
from constants.keys import StorageKeys
from wizard.content import IMPORTANT_SECTIONS

Gate = Callable[[Mapping[str, Any], date], ErrorMap]

IMPORTANT_GATE_KEY: Final[str] = "important"
PAYMENT_GATE_KEY: Final[str] = "payment"
IDENTITY_GATE_KEY: Final[str] = "identity"


@lru_cache(maxsize=4)
def _customer_schema_for(minimum_age: int) -> RecordSchema:
    return build_customer_schema(minimum_age=minimum_age)


def customer_schema() -> RecordSchema:
    """Return the customer schema for the configured minimum age."""

    return _customer_schema_for(load_settings().minimum_age)


def _string_record(source: object) -> dict[str, str]:
    if not isinstance(source, Mapping):
        return {}
    return {str(key): str(value) for key, value in source.items() if isinstance(value, str)}


def no_gate(_snapshot: Mapping[str, Any], _today: date) -> ErrorMap:
    return {}


def customer_gate(snapshot: Mapping[str, Any], today: date) -> ErrorMap:
    return validate_record(customer_schema(), _string_record(snapshot), today=today)


def important_gate(snapshot: Mapping[str, Any], _today: date) -> ErrorMap:
    if all(snapshot.get(section.id) is True for section in IMPORTANT_SECTIONS):
        return {}
    return {IMPORTANT_GATE_KEY: "すべての項目をご確認のうえ、チェックを入れてください"}


def notice_gate(snapshot: Mapping[str, Any], today: date) -> ErrorMap:
    return validate_record(NOTICE_SCHEMA, _string_record(snapshot), today=today)


def beneficiary_gate(snapshot: Mapping[str, Any], today: date) -> ErrorMap:
    """Validate the beneficiary and, unless it is the same person, the agent."""

    data = coerce_snapshot(BeneficiarySnapshot, snapshot, key=StorageKeys.BENEFICIARY)
    errors = validate_record(BENEFICIARY_SCHEMA, _string_record(data.beneficiary.model_dump()), today=today)
    if not data.sameAsBeneficiary:
        errors.update(validate_record(AGENT_SCHEMA, _string_record(data.agent.model_dump()), today=today))
    return errors


def payment_gate(snapshot: Mapping[str, Any], _today: date) -> ErrorMap:
    data = coerce_snapshot(PaymentSnapshot, snapshot, key=StorageKeys.PAYMENT_METHOD)
    if data.can_proceed():
        return {}
    return {PAYMENT_GATE_KEY: "お支払方法を選択し、同意のうえ登録を完了してください"}


def identity_gate(snapshot: Mapping[str, Any], _today: date) -> ErrorMap:
    data = coerce_snapshot(KycSnapshot, snapshot, key=StorageKeys.KYC_STATE)
    if data.can_proceed():
        return {}
    return {IDENTITY_GATE_KEY: "本人確認書類の種類を選択し、必要な画像を提出してください"}


__all__ = [
    "Gate",
    "beneficiary_gate",
    "customer_gate",
    "customer_schema",
    "identity_gate",
    "important_gate",
    "no_gate",
    "notice_gate",
    "payment_gate",
]
