"""Final application aggregation and the submission sink."""

from __future__ import annotations

import logging
from typing import Any, Final, Mapping, Protocol

from constants.keys import StorageKeys
from models.snapshots import (
    BeneficiarySnapshot,
    KycSnapshot,
    NoticeAnswers,
    PaymentSnapshot,
    PlanSelection,
    coerce_snapshot,
)
from state.snapshots import SnapshotStore

logger = logging.getLogger(__name__)

ACKNOWLEDGEMENT_MESSAGE: Final[str] = "申込を受け付けました。ありがとうございました。"

_UNLOGGED_CUSTOMER_FIELDS: Final[frozenset[str]] = frozenset({"password", "passwordConfirm"})


class SubmissionSink(Protocol):
    """Receives the aggregated application on final confirmation."""

    def submit(self, application: Mapping[str, Any]) -> None: ...


class LoggingSubmissionSink:
    """Log the intended payload instead of sending it anywhere."""

    def __init__(self, logger_: logging.Logger | None = None) -> None:
        self._logger = logger_ or logger

    def submit(self, application: Mapping[str, Any]) -> None:
        self._logger.info("confirm:submit %s", dict(application))


def collect_application(store: SnapshotStore) -> dict[str, Any]:
    """Read every step snapshot and return the aggregated application.

    Missing or unreadable snapshots fall back to model defaults. The agent is
    left out while it is the same person as the beneficiary, and passwords
    never leave the customer snapshot.
    """

    beneficiary = coerce_snapshot(
        BeneficiarySnapshot, store.read(StorageKeys.BENEFICIARY), key=StorageKeys.BENEFICIARY
    )
    beneficiary_record = beneficiary.model_dump()
    if beneficiary.sameAsBeneficiary:
        beneficiary_record.pop("agent", None)
    return {
        "plan": coerce_snapshot(
            PlanSelection, store.read(StorageKeys.PLAN_SELECTION), key=StorageKeys.PLAN_SELECTION
        ).model_dump(),
        "customer": {
            key: value
            for key, value in store.read(StorageKeys.CUSTOMER_INFO).items()
            if key not in _UNLOGGED_CUSTOMER_FIELDS
        },
        "notice": coerce_snapshot(
            NoticeAnswers, store.read(StorageKeys.NOTICE_ANSWERS), key=StorageKeys.NOTICE_ANSWERS
        ).model_dump(),
        "beneficiary": beneficiary_record,
        "payment": coerce_snapshot(
            PaymentSnapshot, store.read(StorageKeys.PAYMENT_METHOD), key=StorageKeys.PAYMENT_METHOD
        ).model_dump(),
        "kyc": coerce_snapshot(KycSnapshot, store.read(StorageKeys.KYC_STATE), key=StorageKeys.KYC_STATE).model_dump(),
    }


__all__ = [
    "ACKNOWLEDGEMENT_MESSAGE",
    "LoggingSubmissionSink",
    "SubmissionSink",
    "collect_application",
]
