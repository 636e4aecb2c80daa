"""Pydantic models describing the persisted step snapshots.

Stored snapshots come from an earlier session (or a hand-edited file), so
every reader goes through :func:`coerce_snapshot`, which falls back to the
model defaults instead of failing the step.
"""

from __future__ import annotations

import logging
from typing import Any, Literal, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

PaymentMethod = Literal["card", "bank", ""]
KycMethod = Literal["upload-now", "upload-later"]

DOCUMENTS_REQUIRING_BACK: frozenset[str] = frozenset({"運転免許証"})


class _Snapshot(BaseModel):
    model_config = ConfigDict(extra="allow")


class PersonRecord(_Snapshot):
    """Beneficiary or designated agent entered on the beneficiary step."""

    lastName: str = ""
    firstName: str = ""
    lastNameKana: str = ""
    firstNameKana: str = ""
    dateOfBirth: str = ""
    gender: str = ""
    relation: str = ""

    def is_blank(self) -> bool:
        return not any(
            (self.lastName, self.firstName, self.lastNameKana, self.firstNameKana, self.dateOfBirth)
        )


class BeneficiarySnapshot(_Snapshot):
    beneficiary: PersonRecord = Field(default_factory=PersonRecord)
    agent: PersonRecord = Field(default_factory=PersonRecord)
    sameAsBeneficiary: bool = True


class NoticeAnswers(_Snapshot):
    """Health notice answers; every value is kept as typed."""

    recentHospitalization: str = ""
    pastCancer: str = ""
    bloodPressureSystolic: str = ""
    bloodPressureDiastolic: str = ""


class PaymentSnapshot(_Snapshot):
    """Chosen payment method and the registration state of each method.

    Attributes:
        method: ``card``, ``bank`` or empty when nothing was chosen yet.
        agreeCard: Card terms accepted.
        agreeBank: Direct-debit terms accepted.
        cardRegistered: A card passed the registration dialog.
        cardLast4: Last four digits of the registered card.
        bankRegistered: An account passed the registration dialog.
        bankLast4: Last four digits of the registered account.
    """

    method: PaymentMethod = ""
    agreeCard: bool = False
    agreeBank: bool = False
    cardRegistered: bool = False
    cardLast4: str | None = None
    bankRegistered: bool = False
    bankLast4: str | None = None

    def can_proceed(self) -> bool:
        if self.method == "card":
            return self.agreeCard and self.cardRegistered
        if self.method == "bank":
            return self.agreeBank and self.bankRegistered
        return False


class KycSnapshot(_Snapshot):
    """Identity document submission state (file names only)."""

    method: KycMethod = "upload-now"
    docType: str = ""
    frontName: str | None = None
    backName: str | None = None

    @property
    def requires_back(self) -> bool:
        return self.docType in DOCUMENTS_REQUIRING_BACK

    def can_proceed(self) -> bool:
        if self.method == "upload-later":
            return True
        has_back = bool(self.backName) if self.requires_back else True
        return self.docType != "" and bool(self.frontName) and has_back


class MainContract(_Snapshot):
    hospitalizationDailyAmount: int = 5000
    paymentLimitDays: int = 60
    unlimitedType: str = "none"
    surgeryType: str = "surgery2"
    surgeryMultiplier: int = 10
    radiationTherapy: bool = True
    deathBenefit: bool = False
    paymentPeriod: int = 65


class RiderChoice(_Snapshot):
    selected: bool = False


RIDER_KEYS: tuple[str, ...] = (
    "hospitalizationRider",
    "womenDiseaseRider",
    "womenMedicalRider",
    "womenCancerSupport",
    "outpatientRider",
    "advancedMedicalRider",
    "specificDiseaseRider",
    "cancerRider",
    "anticancerRider",
    "disabilityRider",
    "specificInjuryRider",
    "premiumExemptionRider",
)


def _default_riders() -> dict[str, RiderChoice]:
    return {key: RiderChoice() for key in RIDER_KEYS}


class PlanSelection(_Snapshot):
    """Main contract options and rider flags chosen on the plan screen."""

    mainContract: MainContract = Field(default_factory=MainContract)
    riders: dict[str, RiderChoice] = Field(default_factory=_default_riders)
    advisorAnswers: dict[str, str | list[str]] = Field(default_factory=dict)

    def selected_riders(self) -> list[str]:
        return [key for key in RIDER_KEYS if self.riders.get(key, RiderChoice()).selected]


SnapshotModel = TypeVar("SnapshotModel", bound=BaseModel)


def coerce_snapshot(model: type[SnapshotModel], raw: Mapping[str, Any] | None, *, key: str) -> SnapshotModel:
    """Validate ``raw`` into ``model`` or return the defaults with a warning."""

    try:
        return model.model_validate(dict(raw or {}))
    except ValidationError as error:
        logger.warning("%s:load ignored invalid snapshot: %s", key, error)
        return model()


__all__ = [
    "BeneficiarySnapshot",
    "DOCUMENTS_REQUIRING_BACK",
    "KycSnapshot",
    "MainContract",
    "NoticeAnswers",
    "PaymentSnapshot",
    "PersonRecord",
    "PlanSelection",
    "RIDER_KEYS",
    "RiderChoice",
    "coerce_snapshot",
]
