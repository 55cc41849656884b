import streamlit as st
import pandas as pd

from miniparty.core.config import settings
from miniparty.services.admin_client import AdminAuthError, AdminClientError, fetch_bookings, summarize

# Page Config
st.set_page_config(
    page_title="MiniParty Admin",
    page_icon="🎉",
    layout="wide"
)

if "admin_token" not in st.session_state:
    st.session_state.admin_token = ""

def login(token: str):
    try:
        st.session_state.bookings = fetch_bookings(settings.API_URL, token)
        st.session_state.admin_token = token
        st.session_state.error = ""
    except AdminAuthError as e:
        st.session_state.admin_token = ""
        st.session_state.error = str(e)
    except AdminClientError as e:
        st.session_state.error = str(e)

def logout():
    st.session_state.admin_token = ""
    st.session_state.bookings = []
    st.session_state.error = ""

# --- Login Gate ---
if not st.session_state.admin_token:
    st.title("Admin Access")
    st.caption("Enter your secret token to continue")

    if st.session_state.get("error"):
        st.error(st.session_state.error)

    with st.form("login"):
        token = st.text_input("Secret Token", type="password", placeholder="Enter admin token")
        if st.form_submit_button("View Dashboard") and token:
            login(token)
            st.rerun()
    st.stop()

# --- Dashboard ---
header, logout_col = st.columns([4, 1])
header.title("Admin Dashboard")
logout_col.button("Logout", on_click=logout)

if st.button("Refresh"):
    login(st.session_state.admin_token)
    st.rerun()

if st.session_state.get("error"):
    st.error(f"{st.session_state.error} Showing the last loaded bookings.")

bookings = st.session_state.get("bookings", [])
totals = summarize(bookings)

col1, col2 = st.columns(2)
col1.metric("Total Bookings", totals["total_bookings"])
col2.metric("Total Guests", totals["total_guests"])

if bookings:
    df = pd.DataFrame(bookings, columns=["name", "date", "time", "guests", "email", "phone", "duration"])
    st.dataframe(
        df,
        use_container_width=True,
        hide_index=True,
        column_config={
            "name": "Name",
            "date": "Date",
            "time": "Time",
            "guests": "Guests",
            "email": "Email",
            "phone": "Phone",
            "duration": st.column_config.NumberColumn("Duration", format="%dh"),
        }
    )
else:
    st.info("No bookings yet.")

# Footer
st.markdown("---")
st.caption("MiniParty • Party venue bookings")
