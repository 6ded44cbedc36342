# =============================================================================
# streamlit_app.py — servicebill: paste service notes, review, edit, export
# =============================================================================
# Run: streamlit run streamlit_app.py
# Backend: BACKEND_URL (default http://127.0.0.1:8000)
# =============================================================================

import json
import os

import requests
import streamlit as st

BASE_URL = (os.environ.get("BACKEND_URL") or "http://127.0.0.1:8000").rstrip("/")
DOCUMENT_TYPES = ["invoice", "quotation", "receipt"]
NUMBER_KEYS = {"invoice": "invoiceNumber", "quotation": "quotationNumber", "receipt": "receiptNumber"}


def fetch_post_json(path: str, json_payload: dict) -> dict | None:
    path = path if path.startswith("/") else "/" + path
    url = f"{BASE_URL}{path}"
    try:
        r = requests.post(url, json=json_payload, timeout=120)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.HTTPError as e:
        detail = ""
        if e.response is not None:
            try:
                detail = e.response.json().get("detail", "")
            except ValueError:
                detail = e.response.text[:500]
        st.error(f"Request failed: {detail or e}")
        return None
    except requests.exceptions.RequestException as e:
        st.error(f"Request failed: {e}")
        return None


def fetch_json(path: str) -> dict | list | None:
    try:
        r = requests.get(f"{BASE_URL}{path}", timeout=10)
        r.raise_for_status()
        return r.json()
    except requests.exceptions.RequestException as e:
        st.error(f"Request failed: {e}")
        return None


def recalc_totals(items: list[dict]) -> list[dict]:
    for item in items:
        item["total"] = round(float(item.get("unitPrice") or 0) * float(item.get("quantity") or 0), 2)
    return items


st.set_page_config(page_title="servicebill", layout="centered")
st.title("Service bill")
with st.sidebar:
    st.caption(f"Backend: `{BASE_URL}`")
    health = fetch_json("/health")
    if health:
        st.caption(f"Status: {health.get('status')} · models configured: {health.get('configured_models')}")

doc_type = st.radio("Document", DOCUMENT_TYPES, horizontal=True)
notes = st.text_area(
    "Service notes",
    placeholder="e.g. AP09 AB 1234, Ramesh, Swift. engine oil 1 x 2500, oilfltr 1 x 350, r&r bumper 800",
    height=140,
)

if st.button("Extract", type="primary"):
    if not (notes and notes.strip()):
        st.warning("Please enter the service notes.")
    else:
        with st.spinner("Reading notes..."):
            out = fetch_post_json(f"/parse/{doc_type}", {"text": notes.strip()})
        if out:
            st.session_state["document"] = out["details"]
            st.caption(f"Model: {out.get('provider')}/{out.get('model')}")

document = st.session_state.get("document")
if document:
    st.divider()
    st.subheader(doc_type.capitalize())
    number_key = NUMBER_KEYS[doc_type]
    document[number_key] = st.text_input("Number", value=str(document.get(number_key, "")))
    document["customerName"] = st.text_input("Customer", value=document.get("customerName", ""))
    document["vehicleNumber"] = st.text_input("Vehicle number", value=document.get("vehicleNumber", ""))
    document["carModel"] = st.text_input("Car model", value=document.get("carModel", ""))

    edited = st.data_editor(
        document.get("items", []),
        num_rows="dynamic",
        column_order=["description", "unitPrice", "quantity", "total"],
        use_container_width=True,
    )
    document["items"] = recalc_totals([dict(row) for row in edited])
    st.metric("Grand total", f"{sum(i['total'] for i in document['items']):,.2f}")

    instruction = st.text_input("Change", placeholder="add 2 wiper blades for 500 each")
    if st.button("Apply change") and instruction.strip():
        with st.spinner("Updating..."):
            out = fetch_post_json("/modify", {"document": document, "instruction": instruction.strip()})
        if out:
            (st.success if out.get("success") else st.error)(out.get("message", ""))
            st.session_state["document"] = out.get("document", document)
            st.rerun()

    st.download_button(
        "Download JSON",
        data=json.dumps(document, ensure_ascii=False, indent=2),
        file_name=f"{doc_type}-{document.get(number_key) or 'draft'}.json",
        mime="application/json",
    )
