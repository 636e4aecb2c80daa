"""Pydantic models for persisted enrollment snapshots."""

from .snapshots import (
    BeneficiarySnapshot,
    KycSnapshot,
    NoticeAnswers,
    PaymentSnapshot,
    PersonRecord,
    PlanSelection,
    coerce_snapshot,
)

__all__ = [
    "BeneficiarySnapshot",
    "KycSnapshot",
    "NoticeAnswers",
    "PaymentSnapshot",
    "PersonRecord",
    "PlanSelection",
    "coerce_snapshot",
]
