import os

import requests
import streamlit as st

BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000")

SAMPLE_COMMANDS = """insert(type=destination;location=Sofia;landmark=Vitosha)
insert(type=excursion;name=City;start-date=1-Jun-2024;end-date=3-Jun-2024;price=120;transport=bus)
add-destination(name=City;location=Sofia;landmark=Vitosha)
insert(type=vacation;name=Summer;start-date=1-Jun-2024;end-date=10-Jun-2024;price=500;location=Varna)
list()
filter(type=all)"""


def post_commands(commands: list[str]) -> dict:
    resp = requests.post(f"{BACKEND_URL}/commands", json={"commands": commands}, timeout=15)
    resp.raise_for_status()
    return resp.json()


def get_health() -> dict:
    resp = requests.get(f"{BACKEND_URL}/health", timeout=5)
    resp.raise_for_status()
    return resp.json()


st.set_page_config(page_title="Travel Agency", layout="wide")
st.title("Travel Agency Commands")
st.caption("Backend: FastAPI | UI: Streamlit | Registry lives for one batch")

with st.sidebar:
    st.subheader("Backend")
    try:
        health = get_health()
        st.success(f"{health['app']} ({health['environment']})")
    except Exception as exc:  # noqa: BLE001
        st.error(f"Backend unreachable: {exc}")

with st.form("commands_form"):
    raw_commands = st.text_area("Commands (one per line)", value=SAMPLE_COMMANDS, height=260)
    submitted = st.form_submit_button("Run batch")

if submitted:
    try:
        report = post_commands(raw_commands.splitlines())
        st.session_state["last_report"] = report
    except Exception as exc:  # noqa: BLE001
        st.error(f"Failed to run commands: {exc}")
        st.session_state.pop("last_report", None)

report = st.session_state.get("last_report")

if report:
    failed = sum(1 for line in report["results"] if line == "Invalid command.")
    cols = st.columns(2)
    cols[0].metric("Commands", len(report["results"]))
    cols[1].metric("Invalid", failed)
    st.subheader("Report")
    st.code(report["output"], language="text")
