"""Utility helpers for rendering error messages in Streamlit."""

from __future__ import annotations

from typing import Final

import streamlit as st

from config import load_settings

_DETAILS_LABEL: Final[str] = "詳細"


def display_error(msg: str, detail: str | None = None) -> None:
    """Render a user-facing error with optional debug details.

    Args:
        msg: Short error message for the user.
        detail: Optional technical detail, shown only when the ``debug``
            setting (``ENROLLMENT_DEBUG``) is on.
    """

    st.error(msg)
    if detail and load_settings().debug:
        with st.expander(_DETAILS_LABEL):
            st.code(detail)
