from __future__ import annotations

from datetime import date

import pytest

from core.dates import compute_age, format_japanese_date, parse_iso_date
from core.fields import FieldDescriptor, RecordSchema
from core.schemas import (
    AGENT_SCHEMA,
    BENEFICIARY_SCHEMA,
    CUSTOMER_SCHEMA,
    NOTICE_SCHEMA,
    build_customer_schema,
    parse_number,
)
from core.validation import revalidate, validate_field, validate_record

TODAY = date(2024, 5, 11)

VALID_CUSTOMER = {
    "lastName": "山田",
    "firstName": "太郎",
    "lastNameKana": "ヤマダ",
    "firstNameKana": "タロウ",
    "dateOfBirth": "1990-05-12",
    "gender": "male",
    "postalCode": "1000001",
    "prefecture": "東京都",
    "city": "千代田区",
    "address": "千代田1-1",
    "building": "",
    "mobilePhone1": "090",
    "mobilePhone2": "1234",
    "mobilePhone3": "5678",
    "email": "a@b.com",
    "emailConfirm": "a@b.com",
    "password": "abc123",
    "passwordConfirm": "abc123",
}


def _customer(**overrides: str) -> dict[str, str]:
    record = dict(VALID_CUSTOMER)
    record.update(overrides)
    return record


def test_age_uses_month_day_rollback() -> None:
    assert compute_age(date(1990, 5, 12), TODAY) == 33
    assert compute_age(date(1990, 5, 11), TODAY) == 34


def test_parse_and_format_dates() -> None:
    assert parse_iso_date("2024-02-30") is None
    assert parse_iso_date("") is None
    assert format_japanese_date(date(2024, 5, 1)) == "2024年5月1日"


def test_valid_customer_has_no_errors() -> None:
    assert validate_record(CUSTOMER_SCHEMA, VALID_CUSTOMER, today=TODAY) == {}


def test_required_messages_are_deterministic() -> None:
    errors = validate_record(CUSTOMER_SCHEMA, {}, today=TODAY)

    assert errors["lastName"] == "姓を入力してください"
    assert errors["firstNameKana"] == "メイを入力してください"
    assert errors["dateOfBirth"] == "生年月日を入力してください"
    assert errors["mobilePhone"] == "携帯電話番号を入力してください"
    assert errors["password"] == "パスワードを入力してください"
    assert "building" not in errors
    assert "homePhone" not in errors
    assert "emailConfirm" not in errors


def test_names_require_cjk_and_katakana() -> None:
    errors = validate_record(
        CUSTOMER_SCHEMA,
        _customer(lastName="Yamada", lastNameKana="やまだ"),
        today=TODAY,
    )

    assert errors == {
        "lastName": "姓は漢字で入力してください",
        "lastNameKana": "セイはカタカナで入力してください",
    }


@pytest.mark.parametrize(
    ("password", "message"),
    [
        ("abc123", None),
        ("aaa111", "パスワードに同じ文字が3回以上連続して使用されています"),
        ("abcdef", "パスワードは半角のアルファベットと数字を組み合わせて入力してください"),
        ("ab12", "パスワードは6文字以上で入力してください"),
        ("ab1" * 43, "パスワードは128文字以下で入力してください"),
    ],
)
def test_password_rules(password: str, message: str | None) -> None:
    record = _customer(password=password, passwordConfirm=password)
    assert validate_field(CUSTOMER_SCHEMA, "password", record, today=TODAY) == message


def test_email_confirmation_error_is_attached_to_confirmation_only() -> None:
    assert validate_record(CUSTOMER_SCHEMA, _customer(emailConfirm="a@b.com"), today=TODAY) == {}

    errors = validate_record(CUSTOMER_SCHEMA, _customer(emailConfirm="a@b.co"), today=TODAY)
    assert errors == {"emailConfirm": "メールアドレスが一致しません"}


def test_email_rejects_doubled_punctuation() -> None:
    errors = validate_record(CUSTOMER_SCHEMA, _customer(email="a..b@c.com", emailConfirm="a..b@c.com"), today=TODAY)
    assert errors["email"] == "メールアドレスに連続した記号が含まれています"

    hyphens = _customer(email="a--b@c.com", emailConfirm="a--b@c.com")
    assert validate_field(CUSTOMER_SCHEMA, "email", hyphens, today=TODAY) == "メールアドレスに連続した記号が含まれています"


def test_email_length_is_capped() -> None:
    address = "a" * 250 + "@example.com"
    record = _customer(email=address, emailConfirm=address)
    assert validate_record(CUSTOMER_SCHEMA, record, today=TODAY) == {"email": "メールアドレスが長すぎます"}


def test_password_confirmation_must_match() -> None:
    errors = validate_record(CUSTOMER_SCHEMA, _customer(passwordConfirm="abc124"), today=TODAY)
    assert errors == {"passwordConfirm": "パスワードが一致しません"}


def test_age_limits_for_customer() -> None:
    assert (
        validate_field(CUSTOMER_SCHEMA, "dateOfBirth", _customer(dateOfBirth="2010-01-01"), today=TODAY)
        == "18歳未満の方は申込みできません"
    )
    assert (
        validate_field(CUSTOMER_SCHEMA, "dateOfBirth", _customer(dateOfBirth="2025-01-01"), today=TODAY)
        == "生年月日が未来の日付になっています"
    )
    assert (
        validate_field(CUSTOMER_SCHEMA, "dateOfBirth", _customer(dateOfBirth="1900-01-01"), today=TODAY)
        == "生年月日が正しくありません"
    )
    assert (
        validate_field(CUSTOMER_SCHEMA, "dateOfBirth", _customer(dateOfBirth="1990-13-01"), today=TODAY)
        == "生年月日が正しくありません"
    )


def test_minimum_age_is_configurable() -> None:
    schema = build_customer_schema(minimum_age=20)
    record = _customer(dateOfBirth="2005-01-01")

    assert validate_field(schema, "dateOfBirth", record, today=TODAY) == "20歳未満の方は申込みできません"
    assert validate_field(CUSTOMER_SCHEMA, "dateOfBirth", record, today=TODAY) is None


def test_mobile_phone_is_validated_once_all_segments_are_filled() -> None:
    partial = _customer(mobilePhone3="")
    assert validate_field(CUSTOMER_SCHEMA, "mobilePhone", partial, today=TODAY) == "携帯電話番号を入力してください"

    landline = _customer(mobilePhone1="03", mobilePhone2="1234", mobilePhone3="5678")
    assert (
        validate_field(CUSTOMER_SCHEMA, "mobilePhone", landline, today=TODAY)
        == "携帯電話番号は070、080、090で始まる番号を入力してください"
    )

    short = _customer(mobilePhone1="090", mobilePhone2="12", mobilePhone3="34")
    assert (
        validate_field(CUSTOMER_SCHEMA, "mobilePhone", short, today=TODAY)
        == "携帯電話番号は10桁または11桁の数字で入力してください"
    )


def test_optional_home_phone() -> None:
    assert validate_field(CUSTOMER_SCHEMA, "homePhone", _customer(homePhone1="03"), today=TODAY) is None

    record = _customer(homePhone1="13", homePhone2="1234", homePhone3="5678")
    assert validate_field(CUSTOMER_SCHEMA, "homePhone", record, today=TODAY) == "自宅電話番号は0で始まる番号を入力してください"


def test_revalidate_refreshes_cross_field_partner() -> None:
    record = _customer(emailConfirm="a@b.co")
    errors = validate_record(CUSTOMER_SCHEMA, record, today=TODAY)
    errors["lastName"] = "stale but unrelated"

    record["email"] = "a@b.co"
    updated = revalidate(CUSTOMER_SCHEMA, "email", record, errors, today=TODAY)

    assert "emailConfirm" not in updated
    assert updated["lastName"] == "stale but unrelated"


def test_revalidate_composite_from_segment() -> None:
    record = _customer(mobilePhone3="")
    errors = validate_record(CUSTOMER_SCHEMA, record, today=TODAY)
    assert "mobilePhone" in errors

    record["mobilePhone3"] = "5678"
    assert revalidate(CUSTOMER_SCHEMA, "mobilePhone3", record, errors, today=TODAY) == {}


def test_person_schema_prefixes_keys_and_messages() -> None:
    errors = validate_record(BENEFICIARY_SCHEMA, {}, today=TODAY)
    assert errors["beneficiary.lastName"] == "受取人の姓を入力してください"
    assert errors["beneficiary.relation"] == "受取人との続柄を選択してください"

    agent = validate_record(AGENT_SCHEMA, {"lastNameKana": "やまだ"}, today=TODAY)
    assert agent["agent.lastNameKana"] == "指定代理請求人のセイは全角カナで入力してください"


def test_person_age_allows_children() -> None:
    record = {
        "lastName": "山田",
        "firstName": "次郎",
        "lastNameKana": "ヤマダ",
        "firstNameKana": "ジロウ",
        "dateOfBirth": "2020-01-01",
        "gender": "male",
        "relation": "child",
    }
    assert validate_record(AGENT_SCHEMA, record, today=TODAY) == {}


def test_notice_blood_pressure_rules() -> None:
    base = {"recentHospitalization": "no", "pastCancer": "no"}

    assert validate_record(NOTICE_SCHEMA, {**base, "bloodPressureSystolic": "120", "bloodPressureDiastolic": "80"}) == {}
    errors = validate_record(NOTICE_SCHEMA, {**base, "bloodPressureSystolic": "80", "bloodPressureDiastolic": "90"})
    assert errors == {"bloodPressureSystolic": "最高血圧は最低血圧より大きい値を入力してください"}

    errors = validate_record(NOTICE_SCHEMA, {**base, "bloodPressureSystolic": "abc", "bloodPressureDiastolic": "200"})
    assert errors == {
        "bloodPressureSystolic": "最高血圧は数値で入力してください",
        "bloodPressureDiastolic": "最低血圧は40〜160の範囲で入力してください",
    }


def test_parse_number_rejects_non_finite_values() -> None:
    assert parse_number(" 120 ") == 120
    assert parse_number("1_20") is None
    assert parse_number("inf") is None
    assert parse_number("nan") is None


def test_schema_rejects_duplicate_paths() -> None:
    with pytest.raises(ValueError):
        RecordSchema(name="broken", fields=(FieldDescriptor(path="a"), FieldDescriptor(path="a")))
