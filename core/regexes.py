"""Shared regular expressions for enrollment field validation."""

from __future__ import annotations

import re

KANJI_NAME = re.compile(r"^[\u4e00-\u9faf]+$")
"""CJK unified ideographs only, used for names written in kanji."""

KATAKANA_NAME = re.compile(r"^[\u30a0-\u30ff]+$")
"""Full-width katakana block, used for phonetic name readings."""

POSTAL_CODE = re.compile(r"^\d{7}$", re.ASCII)
"""Japanese postal code without hyphen."""

EMAIL_ADDRESS = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
"""Mailbox and domain with a top-level label of at least two letters."""

PHONE_DIGITS = re.compile(r"^\d{10,11}$", re.ASCII)
"""Joined phone number segments."""

MOBILE_PREFIX = re.compile(r"^0[789]0", re.ASCII)
"""Mobile carriers start with 070, 080 or 090."""

LANDLINE_PREFIX = re.compile(r"^0\d{1,4}", re.ASCII)
"""Landline area codes start with 0."""

PASSWORD_CHARSET = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*?&]{6,}$", re.ASCII)
"""At least one letter and one digit from the accepted ASCII charset."""

REPEATED_CHARACTER = re.compile(r"(.)\1{2,}")
"""Any character repeated three or more times in a row."""

CARD_NUMBER = re.compile(r"^\d{14,19}$", re.ASCII)
"""Payment card number after separators are removed."""

CARD_SEPARATORS = re.compile(r"\s|-")
"""Whitespace and hyphens typed between card number groups."""

SECURITY_CODE = re.compile(r"^\d{3,4}$", re.ASCII)
"""Card security code."""

ACCOUNT_NUMBER = re.compile(r"^\d{7}$", re.ASCII)
"""Bank account number after non-digits are removed."""

NON_DIGITS = re.compile(r"\D", re.ASCII)
"""Everything except ASCII digits."""


def matches(pattern: re.Pattern[str], value: str) -> bool:
    """Return ``True`` when ``pattern`` accepts the whole of ``value``.

    Anchored patterns are applied with :meth:`re.Pattern.fullmatch` so a
    trailing newline never slips past ``$``.
    """

    return pattern.fullmatch(value) is not None
