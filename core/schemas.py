"""Record schemas for every screen of the enrollment wizard.

All message literals are user-facing and must stay byte-identical; tests
assert on them directly.
"""

from __future__ import annotations

import math
from typing import Callable, Final

from core import regexes
from core.dates import compute_age, parse_iso_date
from core.fields import (
    CrossFieldCheck,
    FieldDescriptor,
    FieldRule,
    RecordSchema,
    RuleCheck,
    ValidationContext,
    length_between,
    max_length,
    min_length,
    pattern_rule,
    strip_whitespace,
)

DEFAULT_MINIMUM_AGE: Final[int] = 18
MAXIMUM_AGE: Final[int] = 120

PREFECTURES: Final[tuple[str, ...]] = (
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
    "静岡県", "愛知県", "三重県", "滋賀県", "京都府", "大阪府", "兵庫県",
    "奈良県", "和歌山県", "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県", "福岡県", "佐賀県", "長崎県",
    "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県",
)

GENDER_LABELS: Final[dict[str, str]] = {"male": "男性", "female": "女性"}

RELATION_LABELS: Final[dict[str, str]] = {
    "spouse": "配偶者",
    "child": "子",
    "parent": "父母",
    "sibling": "兄弟姉妹",
    "other": "その他",
}

ACCOUNT_TYPE_LABELS: Final[dict[str, str]] = {"ordinary": "普通", "checking": "当座"}

YES_NO_LABELS: Final[dict[str, str]] = {"yes": "はい", "no": "いいえ"}

MOBILE_SEGMENTS: Final[tuple[str, str, str]] = ("mobilePhone1", "mobilePhone2", "mobilePhone3")
HOME_SEGMENTS: Final[tuple[str, str, str]] = ("homePhone1", "homePhone2", "homePhone3")


def _matches(pattern) -> Callable[[str], bool]:
    return lambda value: regexes.matches(pattern, value)


def _starts_with(pattern) -> Callable[[str], bool]:
    return lambda value: pattern.match(value) is not None


def _age_check(predicate: Callable[[int], bool]) -> RuleCheck:
    def check(value: str, context: ValidationContext) -> bool:
        birth = parse_iso_date(value)
        if birth is None:
            return True
        return predicate(compute_age(birth, context.today))

    return check


def _is_date(value: str, _context: ValidationContext) -> bool:
    return parse_iso_date(value) is not None


# ---------------------------------------------------------------------------
# Customer (policyholder / insured)
# ---------------------------------------------------------------------------


def _kanji_name(path: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(
        path=path,
        required=True,
        required_message=f"{label}を入力してください",
        rules=(
            length_between(1, 20, f"{label}は1文字以上20文字以下で入力してください"),
            pattern_rule(_matches(regexes.KANJI_NAME), f"{label}は漢字で入力してください"),
        ),
    )


def _kana_name(path: str, label: str) -> FieldDescriptor:
    return FieldDescriptor(
        path=path,
        required=True,
        required_message=f"{label}を入力してください",
        rules=(
            length_between(1, 20, f"{label}は1文字以上20文字以下で入力してください"),
            pattern_rule(_matches(regexes.KATAKANA_NAME), f"{label}はカタカナで入力してください"),
        ),
    )


def _contains_repeated_symbols(value: str) -> bool:
    return ".." in value or "--" in value


def build_customer_schema(*, minimum_age: int = DEFAULT_MINIMUM_AGE) -> RecordSchema:
    """Return the customer-information schema with an enrollment age floor."""

    return RecordSchema(
        name="customer",
        fields=(
            _kanji_name("lastName", "姓"),
            _kanji_name("firstName", "名"),
            _kana_name("lastNameKana", "セイ"),
            _kana_name("firstNameKana", "メイ"),
            FieldDescriptor(
                path="dateOfBirth",
                required=True,
                required_message="生年月日を入力してください",
                rules=(
                    FieldRule(_is_date, "生年月日が正しくありません"),
                    FieldRule(_age_check(lambda age: age >= 0), "生年月日が未来の日付になっています"),
                    FieldRule(_age_check(lambda age: age <= MAXIMUM_AGE), "生年月日が正しくありません"),
                    FieldRule(
                        _age_check(lambda age: age >= minimum_age),
                        f"{minimum_age}歳未満の方は申込みできません",
                    ),
                ),
            ),
            FieldDescriptor(path="gender", required=True, required_message="性別を選択してください"),
            FieldDescriptor(
                path="postalCode",
                required=True,
                required_message="郵便番号を入力してください",
                rules=(pattern_rule(_matches(regexes.POSTAL_CODE), "郵便番号は7桁の数字で入力してください"),),
            ),
            FieldDescriptor(path="prefecture", required=True, required_message="都道府県を選択してください"),
            FieldDescriptor(
                path="city",
                required=True,
                required_message="市区郡・町村を入力してください",
                rules=(length_between(1, 50, "市区郡・町村は1文字以上50文字以下で入力してください"),),
            ),
            FieldDescriptor(
                path="address",
                required=True,
                required_message="丁目・番地を入力してください",
                rules=(length_between(1, 100, "丁目・番地は1文字以上100文字以下で入力してください"),),
            ),
            FieldDescriptor(
                path="building",
                rules=(max_length(100, "建物名・部屋番号は100文字以下で入力してください"),),
            ),
            FieldDescriptor(
                path="mobilePhone",
                required=True,
                required_message="携帯電話番号を入力してください",
                segments=MOBILE_SEGMENTS,
                rules=(
                    pattern_rule(
                        _matches(regexes.PHONE_DIGITS),
                        "携帯電話番号は10桁または11桁の数字で入力してください",
                    ),
                    pattern_rule(
                        _starts_with(regexes.MOBILE_PREFIX),
                        "携帯電話番号は070、080、090で始まる番号を入力してください",
                    ),
                ),
            ),
            FieldDescriptor(
                path="homePhone",
                segments=HOME_SEGMENTS,
                rules=(
                    pattern_rule(
                        _matches(regexes.PHONE_DIGITS),
                        "自宅電話番号は10桁または11桁の数字で入力してください",
                    ),
                    pattern_rule(
                        _starts_with(regexes.LANDLINE_PREFIX),
                        "自宅電話番号は0で始まる番号を入力してください",
                    ),
                ),
            ),
            FieldDescriptor(
                path="email",
                required=True,
                required_message="メールアドレスを入力してください",
                rules=(
                    pattern_rule(_matches(regexes.EMAIL_ADDRESS), "正しいメールアドレスの形式で入力してください"),
                    max_length(254, "メールアドレスが長すぎます"),
                    pattern_rule(
                        lambda value: not _contains_repeated_symbols(value),
                        "メールアドレスに連続した記号が含まれています",
                    ),
                ),
            ),
            FieldDescriptor(
                path="emailConfirm",
                cross_field=CrossFieldCheck(pair="email", message="メールアドレスが一致しません"),
            ),
            FieldDescriptor(
                path="password",
                required=True,
                required_message="パスワードを入力してください",
                rules=(
                    min_length(6, "パスワードは6文字以上で入力してください"),
                    max_length(128, "パスワードは128文字以下で入力してください"),
                    pattern_rule(
                        _matches(regexes.PASSWORD_CHARSET),
                        "パスワードは半角のアルファベットと数字を組み合わせて入力してください",
                    ),
                    pattern_rule(
                        lambda value: regexes.REPEATED_CHARACTER.search(value) is None,
                        "パスワードに同じ文字が3回以上連続して使用されています",
                    ),
                ),
            ),
            FieldDescriptor(
                path="passwordConfirm",
                cross_field=CrossFieldCheck(pair="password", message="パスワードが一致しません"),
            ),
        ),
    )


CUSTOMER_SCHEMA: Final[RecordSchema] = build_customer_schema()


# ---------------------------------------------------------------------------
# Beneficiary / designated agent
# ---------------------------------------------------------------------------

PERSON_ROLES: Final[dict[str, str]] = {"beneficiary": "受取人", "agent": "指定代理請求人"}


def build_person_schema(role: str) -> RecordSchema:
    """Return the person schema for ``role`` (``beneficiary`` or ``agent``).

    Error keys are prefixed with ``"<role>."`` and messages with the role's
    display name.
    """

    prefix = PERSON_ROLES[role]
    kanji = _matches(regexes.KANJI_NAME)
    kana = _matches(regexes.KATAKANA_NAME)
    return RecordSchema(
        name=role,
        error_prefix=f"{role}.",
        fields=(
            FieldDescriptor(
                path="lastName",
                required=True,
                required_message=f"{prefix}の姓を入力してください",
                rules=(pattern_rule(kanji, f"{prefix}の姓は漢字で入力してください"),),
            ),
            FieldDescriptor(
                path="firstName",
                required=True,
                required_message=f"{prefix}の名を入力してください",
                rules=(pattern_rule(kanji, f"{prefix}の名は漢字で入力してください"),),
            ),
            FieldDescriptor(
                path="lastNameKana",
                required=True,
                required_message=f"{prefix}のセイを入力してください",
                rules=(pattern_rule(kana, f"{prefix}のセイは全角カナで入力してください"),),
            ),
            FieldDescriptor(
                path="firstNameKana",
                required=True,
                required_message=f"{prefix}のメイを入力してください",
                rules=(pattern_rule(kana, f"{prefix}のメイは全角カナで入力してください"),),
            ),
            FieldDescriptor(
                path="dateOfBirth",
                required=True,
                required_message=f"{prefix}の生年月日を入力してください",
                rules=(
                    FieldRule(_is_date, f"{prefix}の生年月日が正しくありません"),
                    FieldRule(
                        _age_check(lambda age: 0 <= age <= MAXIMUM_AGE),
                        f"{prefix}の生年月日が正しくありません",
                    ),
                ),
            ),
            FieldDescriptor(path="gender", required=True, required_message=f"{prefix}の性別を選択してください"),
            FieldDescriptor(path="relation", required=True, required_message=f"{prefix}との続柄を選択してください"),
        ),
    )


BENEFICIARY_SCHEMA: Final[RecordSchema] = build_person_schema("beneficiary")
AGENT_SCHEMA: Final[RecordSchema] = build_person_schema("agent")


# ---------------------------------------------------------------------------
# Health notice
# ---------------------------------------------------------------------------


def parse_number(value: str) -> float | None:
    """Return ``value`` as a finite number or ``None``."""

    candidate = value.strip()
    if not candidate or "_" in candidate:
        return None
    try:
        number = float(candidate)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _within(minimum: float, maximum: float) -> RuleCheck:
    def check(value: str, _context: ValidationContext) -> bool:
        number = parse_number(value)
        return number is not None and minimum <= number <= maximum

    return check


def _systolic_exceeds(systolic: str, diastolic: str) -> bool:
    high = parse_number(systolic)
    low = parse_number(diastolic)
    if high is None or low is None or not 40 <= low <= 160:
        return True
    return high > low


NOTICE_SCHEMA: Final[RecordSchema] = RecordSchema(
    name="notice",
    fields=(
        FieldDescriptor(
            path="recentHospitalization",
            required=True,
            required_message="回答を選択してください",
        ),
        FieldDescriptor(path="pastCancer", required=True, required_message="回答を選択してください"),
        FieldDescriptor(
            path="bloodPressureSystolic",
            required=True,
            required_message="最高血圧を入力してください",
            rules=(
                pattern_rule(lambda value: parse_number(value) is not None, "最高血圧は数値で入力してください"),
                FieldRule(_within(70, 260), "最高血圧は70〜260の範囲で入力してください"),
            ),
            cross_field=CrossFieldCheck(
                pair="bloodPressureDiastolic",
                message="最高血圧は最低血圧より大きい値を入力してください",
                comparator=_systolic_exceeds,
            ),
        ),
        FieldDescriptor(
            path="bloodPressureDiastolic",
            required=True,
            required_message="最低血圧を入力してください",
            rules=(
                pattern_rule(lambda value: parse_number(value) is not None, "最低血圧は数値で入力してください"),
                FieldRule(_within(40, 160), "最低血圧は40〜160の範囲で入力してください"),
            ),
        ),
    ),
)


# ---------------------------------------------------------------------------
# Payment registration dialogs
# ---------------------------------------------------------------------------


def strip_card_separators(value: str) -> str:
    return regexes.CARD_SEPARATORS.sub("", value)


def strip_non_digits(value: str) -> str:
    return regexes.NON_DIGITS.sub("", value)


def _expiry_month(context: ValidationContext) -> int | None:
    number = parse_number(str(context.record.get("expiryMonth") or ""))
    if number is None or not number.is_integer():
        return None
    return int(number)


def _expiry_year(context: ValidationContext) -> int:
    number = parse_number(str(context.record.get("expiryYear") or ""))
    return int(number) if number is not None else 0


def _month_selected(_value: str, context: ValidationContext) -> bool:
    month = _expiry_month(context)
    return month is not None and 1 <= month <= 12


def _not_expired(_value: str, context: ValidationContext) -> bool:
    month = _expiry_month(context) or 0
    year = _expiry_year(context)
    current_year = context.today.year % 100
    return not (year < current_year or (year == current_year and month < context.today.month))


_CARD_NUMBER_MESSAGE: Final[str] = "カード番号は14〜19桁の数字で入力してください"
_EXPIRY_MESSAGE: Final[str] = "有効期限（月/年）を選択してください"
_SECURITY_CODE_MESSAGE: Final[str] = "セキュリティコードは3〜4桁で入力してください"
_ACCOUNT_NUMBER_MESSAGE: Final[str] = "口座番号は7桁の数字で入力してください"

CARD_SCHEMA: Final[RecordSchema] = RecordSchema(
    name="card",
    fields=(
        FieldDescriptor(
            path="cardNumber",
            required=True,
            required_message=_CARD_NUMBER_MESSAGE,
            normalize=strip_card_separators,
            rules=(pattern_rule(_matches(regexes.CARD_NUMBER), _CARD_NUMBER_MESSAGE),),
        ),
        FieldDescriptor(
            path="expiry",
            required=True,
            required_message=_EXPIRY_MESSAGE,
            segments=("expiryMonth", "expiryYear"),
            rules=(
                FieldRule(_month_selected, _EXPIRY_MESSAGE),
                FieldRule(_not_expired, "有効期限が過去になっています"),
            ),
        ),
        FieldDescriptor(
            path="cvc",
            required=True,
            required_message=_SECURITY_CODE_MESSAGE,
            rules=(pattern_rule(_matches(regexes.SECURITY_CODE), _SECURITY_CODE_MESSAGE),),
        ),
        FieldDescriptor(
            path="cardHolder",
            required=True,
            required_message="名義人を入力してください",
            normalize=strip_whitespace,
        ),
    ),
)

BANK_SCHEMA: Final[RecordSchema] = RecordSchema(
    name="bank",
    fields=(
        FieldDescriptor(
            path="bankName",
            required=True,
            required_message="金融機関名を入力してください",
            normalize=strip_whitespace,
        ),
        FieldDescriptor(
            path="branchName",
            required=True,
            required_message="支店名を入力してください",
            normalize=strip_whitespace,
        ),
        FieldDescriptor(path="accountType", required=True, required_message="口座種別を選択してください"),
        FieldDescriptor(
            path="accountNumber",
            required=True,
            required_message=_ACCOUNT_NUMBER_MESSAGE,
            normalize=strip_non_digits,
            rules=(pattern_rule(_matches(regexes.ACCOUNT_NUMBER), _ACCOUNT_NUMBER_MESSAGE),),
        ),
        FieldDescriptor(
            path="accountHolder",
            required=True,
            required_message="口座名義を入力してください",
            normalize=strip_whitespace,
        ),
    ),
)
