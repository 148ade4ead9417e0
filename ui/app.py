"""Streamlit UI for Civic Intake."""

import requests
import streamlit as st

from civic_intake.config import get_settings
from civic_intake.schema import IncidentType

API_URL = get_settings().api_url

LOCATIONS = [
    "center",
    "residential-north",
    "residential-south",
    "residential-east",
    "residential-west",
    "industrial",
    "commercial",
    "university",
    "hospital",
    "park",
]

PRIORITY_ICONS = {"High": "🔴", "Medium": "🟡", "Low": "🟢"}

st.set_page_config(
    page_title="Civic Intake",
    page_icon="🏙️",
    layout="wide",
)


def check_api_health():
    """Check if the API is healthy."""
    try:
        response = requests.get(f"{API_URL}/health", timeout=5)
        return response.status_code == 200, response.json()
    except Exception as e:
        return False, {"error": str(e)}


def login(username: str, password: str) -> bool:
    """Call the login endpoint."""
    try:
        response = requests.post(
            f"{API_URL}/login",
            json={"username": username, "password": password},
            timeout=10,
        )
        return response.json().get("success", False)
    except Exception:
        return False


def submit_report(report: dict):
    """Call the report submission endpoint."""
    try:
        response = requests.post(f"{API_URL}/reports", json=report, timeout=30)
        return response.json()
    except Exception as e:
        return {"success": False, "error": str(e)}


def search_reports(query: str):
    """Call the report listing endpoint."""
    try:
        response = requests.get(f"{API_URL}/reports", params={"q": query}, timeout=30)
        return response.json()
    except Exception as e:
        return {"success": False, "error": str(e)}


def delete_report(report_id: str, auth: tuple[str, str]) -> bool:
    """Call the report deletion endpoint."""
    try:
        response = requests.delete(f"{API_URL}/reports/{report_id}", auth=auth, timeout=10)
        return response.status_code == 204
    except Exception:
        return False


def render_classification(classification: dict):
    priority = classification.get("priority", "Low")
    probabilities = classification.get("probabilities", {})

    col_pri, col_conf = st.columns(2)
    with col_pri:
        st.metric("Priority", f"{PRIORITY_ICONS.get(priority, '⚪')} {priority}")
    with col_conf:
        st.metric("Confidence", f"{classification.get('confidence', 0)}%")

    for label in ("low", "medium", "high"):
        value = probabilities.get(label, 0)
        st.progress(value / 100, text=f"{label.capitalize()}: {value}%")


# Login gate
if not st.session_state.get("logged_in"):
    st.title("🏙️ Civic Intake")
    st.subheader("Operator login")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Log in", type="primary")

    if submitted:
        if login(username, password):
            st.session_state["logged_in"] = True
            st.session_state["auth"] = (username, password)
            st.rerun()
        else:
            st.error("Invalid credentials")
    st.stop()

# Sidebar - navigation and API status
with st.sidebar:
    st.header("Menu")
    section = st.radio("Section", ["Main menu", "New report", "Report status"])

    st.divider()
    healthy, health_data = check_api_health()
    if healthy:
        st.success("API Connected")
        st.metric("Reports held", health_data.get("report_count", 0))
        st.caption(f"Version: {health_data.get('version', 'unknown')}")
    else:
        st.error("API Not Available")
        st.caption(f"Error: {health_data.get('error', 'Unknown')}")

    if st.button("Log out"):
        st.session_state.clear()
        st.rerun()

if section == "Main menu":
    st.title("🏙️ Civic Intake")
    st.markdown(
        "Register citizen complaints and get an automatic priority "
        "(Low / Medium / High) for each one."
    )

elif section == "New report":
    st.header("New Report")

    col1, col2 = st.columns([1, 1])

    with col1:
        with st.form("report_form"):
            incident_type = st.selectbox("Incident type", [t.value for t in IncidentType])
            location = st.selectbox("Location", LOCATIONS)
            description = st.text_area(
                "Description",
                height=150,
                placeholder="e.g., Fallen tree blocking the street, urgent",
            )
            has_evidence = st.checkbox("Photo or video attached")
            submitted = st.form_submit_button("Submit", type="primary", disabled=not healthy)

        if submitted:
            result = submit_report(
                {
                    "type": incident_type,
                    "description": description,
                    "location": location,
                    "hasEvidence": has_evidence,
                }
            )
            if result.get("success"):
                st.session_state["last_report"] = result["report"]
            else:
                st.error(f"Submission failed: {result.get('error') or result.get('detail')}")

    with col2:
        if "last_report" in st.session_state:
            stored = st.session_state["last_report"]
            st.subheader(f"Report {stored['id']}")
            render_classification(stored["classification"])

else:
    st.header("Report Status")

    query = st.text_input("Filter", placeholder="Filter by type, location, priority...")
    results = search_reports(query)

    if results.get("success"):
        st.caption(f"{results.get('total', 0)} report(s)")
        for stored in results.get("reports", []):
            report = stored.get("report", {})
            priority = stored["classification"]["priority"]
            with st.expander(
                f"{PRIORITY_ICONS.get(priority, '⚪')} **{stored['id']}** "
                f"{report.get('type')} @ {report.get('location')} ({stored.get('status')})"
            ):
                st.write(report.get("description") or "_No description_")
                render_classification(stored["classification"])
                if st.button("Delete", key=f"delete-{stored['id']}"):
                    if delete_report(stored["id"], st.session_state["auth"]):
                        st.rerun()
                    else:
                        st.error("Delete failed")
    else:
        st.error(f"Listing failed: {results.get('error')}")

# Footer
st.divider()
st.caption("Civic Intake - Built with FastAPI and Streamlit")
