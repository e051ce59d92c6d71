from datetime import date

import pandas as pd
import streamlit as st

from domain.models import FIELD_MAX_LENGTHS, ITEM_MAX_LENGTHS, FormSession, OrderRecord
from services.amount_service import line_amount, order_totals
from services.auth_service import INVALID_LOGIN_MESSAGE, check_credentials
from utils.formatting import format_amount, format_rupees


def login_form(logo: bytes | None, company_name: str) -> None:
    if logo:
        st.image(logo, width=120)
    st.subheader(company_name)
    st.caption("PI GENERATOR")

    with st.form("login_form", enter_to_submit=True):
        username = st.text_input("Username", key="login_username")
        password = st.text_input("Password", type="password", key="login_password")
        submitted = st.form_submit_button("Login", type="primary")

    if submitted:
        if check_credentials(username, password):
            st.session_state["authenticated"] = True
            st.rerun()
        else:
            st.error(INVALID_LOGIN_MESSAGE)


def order_text_input(record: OrderRecord, name: str, label: str, area: bool = False, **kwargs) -> None:
    """
    Text widget bound to one OrderRecord field. The widget keeps its own
    state under `order_<name>`; the record is refreshed from it every run.
    """
    key = f"order_{name}"
    st.session_state.setdefault(key, getattr(record, name))
    widget = st.text_area if area else st.text_input
    value = widget(label, key=key, max_chars=FIELD_MAX_LENGTHS.get(name), **kwargs)
    record.set_field(name, value)


def order_date_input(record: OrderRecord, name: str, label: str) -> None:
    key = f"order_{name}"
    if key not in st.session_state:
        current = getattr(record, name)
        st.session_state[key] = date.fromisoformat(current) if current else None
    value = st.date_input(label, value=None, key=key, format="DD/MM/YYYY")
    record.set_field(name, value.isoformat() if value else "")


def _remove_row(record: OrderRecord, uid: str) -> None:
    try:
        record.remove_item(record.index_of(uid))
    except KeyError:
        pass  # already gone after a double click


def line_items_editor(session: FormSession) -> None:
    record = session.record
    widths = [0.5, 3, 1.3, 1.3, 1.2, 1.2, 1.4, 1]

    header = st.columns(widths)
    for col, title in zip(header, [
        "S.No", "Particulars", "HSN Code", "D.C. No", "Rate (Rs.)", "Quantity", "Amount (Rs. Ps.)", "",
    ]):
        col.markdown(f"**{title}**")

    for idx, row in enumerate(record.items, start=1):
        cols = st.columns(widths)
        cols[0].write(str(idx))

        for col, name in zip(cols[1:6], ["particulars", "hsn", "dc_no", "rate", "quantity"]):
            key = f"item_{row.uid}_{name}"
            st.session_state.setdefault(key, getattr(row, name))
            value = col.text_input(
                name,
                key=key,
                max_chars=ITEM_MAX_LENGTHS.get(name),
                label_visibility="collapsed",
            )
            row.set_field(name, value)

        cols[6].write(format_amount(line_amount(row.rate, row.quantity)))

        if len(record.items) > 1:
            cols[7].button(
                "Remove",
                key=f"remove_{row.uid}",
                on_click=_remove_row,
                args=(record, row.uid),
                disabled=session.busy,
            )

    st.button(
        "➕ Add New Item",
        on_click=record.add_item,
        disabled=record.is_full or session.busy,
    )
    if record.is_full:
        st.caption("Maximum rows reached for this PDF template.")


def totals_summary(record: OrderRecord) -> None:
    totals = order_totals(record)

    df = pd.DataFrame(
        [
            {"Item": "Subtotal", "Amount": totals.subtotal},
            {"Item": f"CGST @ {record.cgst_rate or '0'}%", "Amount": totals.cgst},
            {"Item": f"SGST @ {record.sgst_rate or '0'}%", "Amount": totals.sgst},
            {"Item": f"IGST @ {record.igst_rate or '0'}%", "Amount": totals.igst},
        ]
    )
    df["Amount"] = df["Amount"].apply(format_rupees)
    st.dataframe(df, hide_index=True)

    st.metric("Grand Total", format_rupees(totals.grand_total))
