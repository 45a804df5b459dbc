import streamlit as st
import api as API
from components import show_enquiry, show_json

st.title("📖 Prospectus")

enquiry_id = st.text_input("Enquiry id", value=st.session_state.get("last_enquiry_id") or "")

if st.button("Open") and enquiry_id:
    try:
        rec = API.enquiry(enquiry_id.strip())
        if rec is None:
            st.warning("Enquiry not found.")
        else:
            show_enquiry(rec)
            with st.expander("Raw record"):
                show_json(rec)
    except Exception as e:
        st.error(e)
