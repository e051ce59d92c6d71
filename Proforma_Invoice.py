import asyncio
import logging

import streamlit as st

from config import COMPANY_NAME, LOGO_PATH, resolve_api_base_url
from domain.models import FormSession
from element_component import (
    line_items_editor,
    login_form,
    order_date_input,
    order_text_input,
    totals_summary,
)
from logger import configure_logging
from services.delivery_service import download_document, email_document
from utils.logo import load_logo_data_url, read_logo

st.set_page_config(
    page_title=f"Proforma Invoice Generator - {COMPANY_NAME}",
    page_icon="🧾",
    layout="wide",
)

configure_logging()
logger = logging.getLogger(__name__)


@st.cache_resource
def load_logo() -> tuple[bytes | None, str | None]:
    data = read_logo(LOGO_PATH)
    if data is None:
        return None, None
    return data, load_logo_data_url(LOGO_PATH, data)


logo, logo_data_url = load_logo()

# -----------------------------------------------------------------------------
# Login gate
# -----------------------------------------------------------------------------
st.session_state.setdefault("authenticated", False)

if not st.session_state["authenticated"]:
    login_form(logo, COMPANY_NAME)
    st.stop()

if st.sidebar.button("Logout"):
    st.session_state.clear()
    st.rerun()

# -----------------------------------------------------------------------------
# Session state
# -----------------------------------------------------------------------------
if "form_session" not in st.session_state:
    st.session_state["form_session"] = FormSession()

session: FormSession = st.session_state["form_session"]
record = session.record

ACTIONS = {
    "download": download_document,
    "email": email_document,
}


def start_action(action: str) -> None:
    if not session.begin(action):
        logger.info("Ignoring %s, %s still running", action, session.in_flight)


# -----------------------------------------------------------------------------
# Form
# -----------------------------------------------------------------------------
if logo:
    st.image(logo, width=100)
st.title(f"Proforma Invoice Generator - {COMPANY_NAME}")
st.write(
    f"Generate Proforma Invoice PDF matching {COMPANY_NAME} format. "
    "You can download the PDF or send it via email."
)

st.subheader("Receiver Details")
col_name, col_gstin = st.columns(2)
with col_name:
    order_text_input(record, "receiver_name", "To / Receiver Name")
with col_gstin:
    order_text_input(record, "receiver_gstin", "Receiver GSTIN")
order_text_input(record, "receiver_address", "Receiver Address", area=True, height=100)
col_phone, col_email = st.columns(2)
with col_phone:
    order_text_input(record, "receiver_phone", "Phone Number")
with col_email:
    order_text_input(record, "receiver_email", "Receiver Email")

st.subheader("Order Details")
col_po, col_po_date, col_transport = st.columns(3)
with col_po:
    order_text_input(record, "po_number", "PO / PI Number")
with col_po_date:
    order_date_input(record, "po_date", "PO / PI Date")
with col_transport:
    order_text_input(record, "transport_mode", "Transport Mode")
col_delivery, col_destination = st.columns(2)
with col_delivery:
    order_date_input(record, "delivery_date", "Delivery Date")
with col_destination:
    order_text_input(record, "destination", "Destination")

st.subheader("Line Items")
line_items_editor(session)

st.subheader("Tax")
col_cgst, col_sgst, col_igst = st.columns(3)
with col_cgst:
    order_text_input(record, "cgst_rate", "CGST (%)")
with col_sgst:
    order_text_input(record, "sgst_rate", "SGST (%)")
with col_igst:
    order_text_input(record, "igst_rate", "IGST (%)")

totals_summary(record)

st.subheader("Email")
order_text_input(record, "to_email", "To (email)")
order_text_input(record, "email_subject", "Subject")
order_text_input(record, "email_body", "Body", area=True, height=120)

st.divider()

# -----------------------------------------------------------------------------
# Banners + actions
# -----------------------------------------------------------------------------
if session.error:
    st.error(session.error)
if session.success:
    st.success(session.success)

document = session.take_document()
if document is not None:
    st.download_button(
        "💾 Save PDF",
        key="save_pdf",
        data=document.data,
        file_name=document.file_name,
        mime=document.mime,
        on_click="ignore",
    )

col_download, col_send = st.columns(2)
with col_download:
    st.button(
        "Generating..." if session.in_flight == "download" else "Download PDF",
        key="download_pdf",
        type="primary",
        on_click=start_action,
        args=("download",),
        disabled=session.busy,
    )
with col_send:
    st.button(
        "Sending..." if session.in_flight == "email" else "Generate & Email PDF",
        key="email_pdf",
        on_click=start_action,
        args=("email",),
        disabled=session.busy,
    )

if session.busy:
    base_url = resolve_api_base_url(st.context.headers.get("Host"))
    try:
        with st.spinner("Contacting document service..."):
            status = asyncio.run(
                ACTIONS[session.in_flight](
                    record,
                    base_url=base_url,
                    logo_data_url=logo_data_url,
                )
            )
            # before leaving the spinner: its cleanup can be interrupted by a rerun
            session.apply(status)
    finally:
        session.finish()
    st.rerun()
