from __future__ import annotations

from pathlib import Path

import pytest
import streamlit as st
from streamlit.runtime.state import SessionStateProxy
from streamlit.testing.v1 import AppTest

from constants.keys import StepAddress
from wizard.layout import GATED_WARNING

PROJECT_ROOT = Path(__file__).resolve().parents[1]


@pytest.fixture
def app(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> AppTest:
    """Run ``app.py`` against the real session state and a throwaway store."""

    monkeypatch.setattr(st, "session_state", SessionStateProxy())
    monkeypatch.setenv("ENROLLMENT_STORAGE_DIR", str(tmp_path))
    return AppTest.from_file(str(PROJECT_ROOT / "app.py"))


def test_app_opens_on_plan_selection(app: AppTest) -> None:
    app.run(timeout=30)

    assert not app.exception
    assert app.header[0].value == "医療保険 プラン選択"


STEP_HEADERS = [
    (StepAddress.PLAN, "医療保険 プラン選択"),
    (StepAddress.CUSTOMER_INFO, "お客様情報の入力"),
    (StepAddress.IMPORTANT, "重要事項の確認"),
    (StepAddress.PRE_NOTICE_CHECK, "告知の前にご確認ください"),
    (StepAddress.NOTICE, "告知"),
    (StepAddress.BENEFICIARY, "受取人・指定代理請求人の登録"),
    (StepAddress.PAYMENT, "お支払方法の登録"),
    (StepAddress.IDENTITY, "本人確認書類の提出"),
    (StepAddress.CONFIRM, "申込内容の最終確認"),
    (StepAddress.COMPLETE, "お申込みが完了しました"),
]


def _open(app: AppTest, address: str) -> AppTest:
    app.query_params["page"] = address
    return app.run(timeout=30)


@pytest.mark.parametrize(("address", "header"), STEP_HEADERS)
def test_every_step_renders_from_a_fresh_session(app: AppTest, address: str, header: str) -> None:
    _open(app, address)

    assert not app.exception
    assert header in [element.value for element in app.header]


@pytest.mark.parametrize(
    ("address", "header"),
    [
        (StepAddress.CUSTOMER_INFO, "お客様情報の入力"),
        (StepAddress.NOTICE, "告知"),
        (StepAddress.BENEFICIARY, "受取人・指定代理請求人の登録"),
    ],
)
def test_next_on_an_empty_form_stays_and_shows_gated_warning(app: AppTest, address: str, header: str) -> None:
    _open(app, address)

    app.button(key="wiz:medical:nav.next").click().run(timeout=30)

    assert not app.exception
    assert GATED_WARNING in [warning.value for warning in app.warning]
    assert header in [element.value for element in app.header]
