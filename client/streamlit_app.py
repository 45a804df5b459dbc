# client/streamlit_app.py
import streamlit as st
import api as API

st.set_page_config(page_title="Enquiries", layout="wide")
st.title("🏫 Admissions enquiries")

st.markdown("""
Sidebar pages: **✉️ Enquire** to submit the form (or send sample enquiries),
**📖 Prospectus** to open one enquiry by id, **🗂️ Admin** for the full listing.
""")

with st.sidebar:
    st.text_input("API Base URL (API_BASE_URL)", value=API.API, disabled=True)
    if st.button("Health check"):
        try:
            st.success(API.health())
        except Exception as e:
            st.error(f"Health check failed: {e}")

# ------------------------
# Snapshot of recent enquiries
# ------------------------
st.subheader("Recent enquiries")
try:
    rows = API.admin_enquiries(limit=100).get("enquiries") or []
except Exception as e:
    st.warning(f"Could not load enquiries: {e}")
    rows = []

if rows:
    counts = API.stage_breakdown(rows)
    cols = st.columns(len(counts) + 1)
    cols[0].metric("Last 100", len(rows))
    for col, (stage, n) in zip(cols[1:], counts.items()):
        col.metric(stage, n)
    latest = rows[0]
    st.caption(f"Latest: {latest.get('childName') or 'unnamed'} "
               f"({latest.get('stage')}) at {(latest.get('createdAt') or '')[:16]}")
else:
    st.info("No enquiries yet.")
