from __future__ import annotations

import logging
import random
from datetime import date, timedelta

import streamlit as st

from constants.keys import StateKeys, StorageKeys
from core.dates import format_japanese_date
from core.errors import StorageError
from state.storage import KeyValueStore
from wizard.navigation_types import WizardContext
from wizard.submission import ACKNOWLEDGEMENT_MESSAGE

__all__ = ["application_dates", "ensure_application_number", "generate_application_number", "step_complete"]

logger = logging.getLogger(__name__)

APPLICATION_NUMBER_LENGTH = 12


def generate_application_number(rng: random.Random | None = None) -> str:
    """Return a 12-digit number that starts with ``1``."""

    source = rng or random.SystemRandom()
    return "1" + "".join(str(source.randrange(10)) for _ in range(APPLICATION_NUMBER_LENGTH - 1))


def _is_application_number(value: str | None) -> bool:
    return bool(value) and len(value or "") == APPLICATION_NUMBER_LENGTH and (value or "").isdigit()


def ensure_application_number(backend: KeyValueStore, rng: random.Random | None = None) -> str:
    """Return the stored application number, generating and storing one if needed.

    Storage failures never block the completion screen: a fresh number is
    returned without being stored.
    """

    try:
        existing = backend.get_item(StorageKeys.APPLICATION_NUMBER)
    except StorageError as error:
        logger.warning("complete:load failed: %s", error)
        existing = None
    if existing is not None and _is_application_number(existing.strip()):
        return existing.strip()
    number = generate_application_number(rng)
    try:
        backend.set_item(StorageKeys.APPLICATION_NUMBER, number)
    except StorageError as error:
        logger.warning("complete:persist failed: %s", error)
    return number


def application_dates(today: date) -> dict[str, str]:
    return {
        "申込日": format_japanese_date(today),
        "告知日": format_japanese_date(today - timedelta(days=2)),
        "責任開始日": format_japanese_date(today),
    }


def step_complete(context: WizardContext) -> None:
    """Show the acknowledgement, the application number and key dates."""

    if st.session_state.pop(StateKeys.SUBMITTED, False):
        st.success(ACKNOWLEDGEMENT_MESSAGE)
    st.header("お申込みが完了しました")
    number = ensure_application_number(context.store.backend)
    with st.container(border=True):
        st.markdown("**申込番号**")
        st.subheader(number)
        for label, value in application_dates(context.today).items():
            cols = st.columns((1, 2))
            cols[0].markdown(f"**{label}**")
            cols[1].write(value)
    st.caption("ご登録のメールアドレスに、お申込み内容の控えをお送りします。")
