from __future__ import annotations

import streamlit as st

from constants.keys import StorageKeys
from core.fields import RecordSchema
from core.schemas import GENDER_LABELS, HOME_SEGMENTS, MOBILE_SEGMENTS, PREFECTURES
from wizard.form import StepForm
from wizard.gates import customer_schema
from wizard.layout import (
    field_input,
    render_field_error,
    render_navigation_controls,
    render_progress,
    render_step_heading,
)
from wizard.navigation_types import WizardContext
from wizard.step_registry import get_step

__all__ = ["customer_form", "step_customer_info"]


def customer_form(context: WizardContext) -> StepForm:
    return StepForm(
        snapshot_key=StorageKeys.CUSTOMER_INFO,
        schemas=(customer_schema(),),
        store=context.store,
        tracker=context.tracker,
        today=context.today,
    )


def _phone_row(
    context: WizardContext,
    form: StepForm,
    schema: RecordSchema,
    path: str,
    label: str,
    segments: tuple[str, ...],
) -> None:
    st.markdown(f"**{label}**")
    cols = st.columns(len(segments))
    for col, segment in zip(cols, segments):
        field_input(
            context,
            form,
            schema,
            segment,
            label,
            container=col,
            max_chars=5,
            show_error=False,
        )
    render_field_error(form, schema, path)


def step_customer_info(context: WizardContext) -> None:
    """Render the policyholder details form."""

    step = get_step("customer_info")
    form = customer_form(context)
    schema = form.schemas[0]

    render_progress(step)
    render_step_heading("お客様情報の入力", "ご契約者（被保険者）ご本人の情報を入力してください。")

    st.subheader("お名前")
    name_cols = st.columns(2)
    field_input(context, form, schema, "lastName", "姓（漢字）", placeholder="山田", container=name_cols[0])
    field_input(context, form, schema, "firstName", "名（漢字）", placeholder="太郎", container=name_cols[1])
    kana_cols = st.columns(2)
    field_input(context, form, schema, "lastNameKana", "セイ（カナ）", placeholder="ヤマダ", container=kana_cols[0])
    field_input(context, form, schema, "firstNameKana", "メイ（カナ）", placeholder="タロウ", container=kana_cols[1])

    st.subheader("生年月日・性別")
    field_input(context, form, schema, "dateOfBirth", "生年月日", kind="date")
    field_input(context, form, schema, "gender", "性別", kind="radio", options=GENDER_LABELS)

    st.subheader("ご住所")
    field_input(context, form, schema, "postalCode", "郵便番号（ハイフンなし7桁）", placeholder="1000001", max_chars=7)
    field_input(context, form, schema, "prefecture", "都道府県", kind="select", options=PREFECTURES)
    field_input(context, form, schema, "city", "市区町村", placeholder="千代田区")
    field_input(context, form, schema, "address", "番地", placeholder="千代田1-1")
    field_input(context, form, schema, "building", "建物名・部屋番号（任意）")

    st.subheader("ご連絡先")
    _phone_row(context, form, schema, "mobilePhone", "携帯電話番号", MOBILE_SEGMENTS)
    _phone_row(context, form, schema, "homePhone", "自宅電話番号（任意）", HOME_SEGMENTS)
    field_input(context, form, schema, "email", "メールアドレス", placeholder="taro@example.com")
    field_input(context, form, schema, "emailConfirm", "メールアドレス（確認用）")

    st.subheader("マイページ用パスワード")
    st.caption("6〜128文字の半角英数字で、英字と数字を組み合わせてください。")
    field_input(context, form, schema, "password", "パスワード", kind="password")
    field_input(context, form, schema, "passwordConfirm", "パスワード（確認用）", kind="password")

    render_navigation_controls(context, step)
