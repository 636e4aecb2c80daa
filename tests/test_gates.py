from __future__ import annotations

from datetime import date

import pytest

from wizard import gates
from wizard.content import IMPORTANT_SECTIONS

TODAY = date(2024, 5, 11)

PERSON = {
    "lastName": "山田",
    "firstName": "花子",
    "lastNameKana": "ヤマダ",
    "firstNameKana": "ハナコ",
    "dateOfBirth": "1990-05-12",
    "gender": "female",
    "relation": "spouse",
}


def test_important_gate_needs_every_acknowledgement() -> None:
    acknowledged = {section.id: True for section in IMPORTANT_SECTIONS}
    assert gates.important_gate(acknowledged, TODAY) == {}

    acknowledged["privacy"] = False
    assert gates.important_gate(acknowledged, TODAY) == {
        gates.IMPORTANT_GATE_KEY: "すべての項目をご確認のうえ、チェックを入れてください"
    }


def test_notice_gate_requires_answers() -> None:
    errors = gates.notice_gate({}, TODAY)
    assert errors["recentHospitalization"] == "回答を選択してください"
    assert errors["bloodPressureSystolic"] == "最高血圧を入力してください"


def test_beneficiary_gate_skips_agent_when_same() -> None:
    assert gates.beneficiary_gate({"beneficiary": PERSON, "sameAsBeneficiary": True}, TODAY) == {}

    errors = gates.beneficiary_gate({"beneficiary": PERSON, "sameAsBeneficiary": False}, TODAY)
    assert errors["agent.lastName"] == "指定代理請求人の姓を入力してください"
    assert not [key for key in errors if key.startswith("beneficiary.")]


def test_beneficiary_gate_defaults_to_same_agent() -> None:
    errors = gates.beneficiary_gate({}, TODAY)
    assert "beneficiary.lastName" in errors
    assert not [key for key in errors if key.startswith("agent.")]


@pytest.mark.parametrize(
    ("snapshot", "passes"),
    [
        ({}, False),
        ({"method": "card", "agreeCard": True}, False),
        ({"method": "card", "agreeCard": True, "cardRegistered": True, "cardLast4": "1234"}, True),
        ({"method": "bank", "agreeCard": True, "cardRegistered": True}, False),
        ({"method": "bank", "agreeBank": True, "bankRegistered": True, "bankLast4": "4567"}, True),
        ({"method": "cash"}, False),
    ],
)
def test_payment_gate(snapshot: dict[str, object], passes: bool) -> None:
    assert (gates.payment_gate(snapshot, TODAY) == {}) is passes


@pytest.mark.parametrize(
    ("snapshot", "passes"),
    [
        ({"method": "upload-later"}, True),
        ({"method": "upload-now"}, False),
        ({"method": "upload-now", "docType": "健康保険証", "frontName": "front.png"}, True),
        ({"method": "upload-now", "docType": "運転免許証", "frontName": "front.png"}, False),
        (
            {"method": "upload-now", "docType": "運転免許証", "frontName": "front.png", "backName": "back.png"},
            True,
        ),
    ],
)
def test_identity_gate(snapshot: dict[str, object], passes: bool) -> None:
    assert (gates.identity_gate(snapshot, TODAY) == {}) is passes


def test_customer_gate_follows_configured_minimum_age(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENROLLMENT_MIN_AGE", "40")
    errors = gates.customer_gate({"dateOfBirth": "1990-05-12"}, TODAY)
    assert errors["dateOfBirth"] == "40歳未満の方は申込みできません"
