"""Final confirmation screen."""

from __future__ import annotations

from typing import Any, Mapping

import streamlit as st

from constants.keys import StateKeys, StepAddress
from core.schemas import GENDER_LABELS, RELATION_LABELS, YES_NO_LABELS
from models.snapshots import PersonRecord, coerce_snapshot
from wizard.content import (
    DOCUMENT_TYPES,
    RIDER_LABELS,
    SURGERY_TYPE_LABELS,
    UNLIMITED_TYPE_LABELS,
    payment_period_label,
)
from wizard.layout import render_navigation_controls, render_step_heading
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step
from wizard.steps.identity import KYC_METHOD_LABELS
from wizard.steps.payment import PAYMENT_METHOD_LABELS
from wizard.submission import collect_application

__all__ = [
    "MISSING",
    "PLACEHOLDER_AGENT",
    "PLACEHOLDER_BENEFICIARY",
    "confirmation_sections",
    "display",
    "mask_card",
    "step_confirm",
    "submit_application",
]

MISSING = "—"

# Shown in place of a beneficiary or agent that was never entered.
PLACEHOLDER_BENEFICIARY = PersonRecord(
    lastName="山田",
    firstName="花子",
    lastNameKana="ヤマダ",
    firstNameKana="ハナコ",
    dateOfBirth="1990-05-12",
    gender="female",
    relation="spouse",
)

PLACEHOLDER_AGENT = PersonRecord(
    lastName="山田",
    firstName="次郎",
    lastNameKana="ヤマダ",
    firstNameKana="ジロウ",
    dateOfBirth="2010-08-02",
    gender="male",
    relation="child",
)

Rows = list[tuple[str, str]]


def display(value: object, labels: Mapping[str, str] | None = None) -> str:
    """Render a scalar for the confirmation table; blanks become ``MISSING``."""

    if value is None or value == "":
        return MISSING
    if isinstance(value, bool):
        return "あり" if value else "なし"
    text = str(value)
    if labels is not None:
        return labels.get(text, text)
    return text


def mask_card(last4: str | None) -> str:
    if not last4:
        return MISSING
    return f"xxxx-xxxx-xxxx-{last4}"


def _phone(record: Mapping[str, Any], prefix: str) -> str:
    parts = [str(record.get(f"{prefix}{index}") or "") for index in (1, 2, 3)]
    if not any(parts):
        return MISSING
    return "-".join(parts)


def _person_or_placeholder(person: object, placeholder: PersonRecord, *, key: str) -> dict[str, Any]:
    record = coerce_snapshot(PersonRecord, person if isinstance(person, Mapping) else None, key=key)
    return (placeholder if record.is_blank() else record).model_dump()


def _person_rows(person: Mapping[str, Any]) -> Rows:
    return [
        ("氏名", f"{display(person.get('lastName'))} {display(person.get('firstName'))}"),
        ("フリガナ", f"{display(person.get('lastNameKana'))} {display(person.get('firstNameKana'))}"),
        ("生年月日", display(person.get("dateOfBirth"))),
        ("性別", display(person.get("gender"), GENDER_LABELS)),
        ("続柄", display(person.get("relation"), RELATION_LABELS)),
    ]


def _payment_rows(payment: Mapping[str, Any]) -> Rows:
    method = payment.get("method")
    rows: Rows = [("お支払方法", display(method, PAYMENT_METHOD_LABELS))]
    if method == "card":
        rows.append(("カード番号", mask_card(payment.get("cardLast4"))))
    elif method == "bank":
        last4 = payment.get("bankLast4")
        rows.append(("口座番号", f"***{last4}" if last4 else MISSING))
    return rows


def confirmation_sections(application: Mapping[str, Any]) -> dict[str, Rows]:
    """Group the aggregated application into labelled rows per section."""

    plan = application.get("plan") or {}
    contract = plan.get("mainContract") or {}
    riders = plan.get("riders") or {}
    customer = application.get("customer") or {}
    notice = application.get("notice") or {}
    beneficiary = application.get("beneficiary") or {}
    kyc = application.get("kyc") or {}

    period = contract.get("paymentPeriod")
    selected_riders = [RIDER_LABELS.get(key, key) for key, choice in riders.items() if (choice or {}).get("selected")]
    sections: dict[str, Rows] = {
        "ご契約内容": [
            ("入院給付金日額", f"{contract['hospitalizationDailyAmount']:,}円" if contract.get("hospitalizationDailyAmount") else MISSING),
            ("支払限度日数", f"{contract['paymentLimitDays']}日" if contract.get("paymentLimitDays") else MISSING),
            ("入院無制限", display(contract.get("unlimitedType"), UNLIMITED_TYPE_LABELS)),
            ("手術給付金", display(contract.get("surgeryType"), SURGERY_TYPE_LABELS)),
            ("手術給付倍率", f"{contract['surgeryMultiplier']}倍" if contract.get("surgeryMultiplier") else MISSING),
            ("放射線治療給付金", display(contract.get("radiationTherapy"))),
            ("死亡保険金", display(contract.get("deathBenefit"))),
            ("保険料払込期間", payment_period_label(int(period)) if isinstance(period, int) else MISSING),
            ("特約", "、".join(selected_riders) if selected_riders else MISSING),
        ],
        "お客様情報": [
            ("氏名", f"{display(customer.get('lastName'))} {display(customer.get('firstName'))}"),
            ("フリガナ", f"{display(customer.get('lastNameKana'))} {display(customer.get('firstNameKana'))}"),
            ("生年月日", display(customer.get("dateOfBirth"))),
            ("性別", display(customer.get("gender"), GENDER_LABELS)),
            ("郵便番号", display(customer.get("postalCode"))),
            (
                "住所",
                " ".join(
                    str(customer.get(field))
                    for field in ("prefecture", "city", "address", "building")
                    if customer.get(field)
                )
                or MISSING,
            ),
            ("携帯電話番号", _phone(customer, "mobilePhone")),
            ("自宅電話番号", _phone(customer, "homePhone")),
            ("メールアドレス", display(customer.get("email"))),
        ],
        "告知内容": [
            ("最近3か月以内の受診", display(notice.get("recentHospitalization"), YES_NO_LABELS)),
            ("過去5年以内のがん", display(notice.get("pastCancer"), YES_NO_LABELS)),
            (
                "血圧",
                f"{display(notice.get('bloodPressureSystolic'))} / {display(notice.get('bloodPressureDiastolic'))} mmHg",
            ),
        ],
        "死亡保険金受取人": _person_rows(
            _person_or_placeholder(beneficiary.get("beneficiary"), PLACEHOLDER_BENEFICIARY, key="beneficiary")
        ),
    }
    if beneficiary.get("sameAsBeneficiary", True):
        sections["指定代理請求人"] = [("指定代理請求人", "受取人と同じ")]
    else:
        sections["指定代理請求人"] = _person_rows(
            _person_or_placeholder(beneficiary.get("agent"), PLACEHOLDER_AGENT, key="agent")
        )
    sections["お支払方法"] = _payment_rows(application.get("payment") or {})
    sections["本人確認"] = [
        ("提出方法", display(kyc.get("method"), KYC_METHOD_LABELS)),
        ("書類の種類", display(kyc.get("docType"), DOCUMENT_TYPES)),
    ]
    return sections


def submit_application(context: WizardContext) -> None:
    """Hand the aggregated application to the sink and go to completion."""

    application = collect_application(context.store)
    context.sink.submit(application)
    st.session_state[StateKeys.SUBMITTED] = True
    context.navigator.go_to(StepAddress.COMPLETE)


def step_confirm(context: WizardContext) -> None:
    step = get_step("confirm")

    render_step_heading("申込内容の最終確認", "内容をご確認のうえ、「申込を確定する」を押してください。")
    application = collect_application(context.store)
    for title, rows in confirmation_sections(application).items():
        st.subheader(title)
        with st.container(border=True):
            for label, value in rows:
                cols = st.columns((1, 2))
                cols[0].markdown(f"**{label}**")
                cols[1].write(value)

    render_navigation_controls(
        context,
        step,
        next_label="申込を確定する",
        on_next=lambda: submit_application(context),
    )
