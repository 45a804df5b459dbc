import streamlit as st
import pandas as pd
import api as API
from components import show_table

st.title("🗂️ Admin")

limit = st.number_input("Most recent", 1, 100, 100)
stage = st.selectbox("Stage", ["", "Lower", "Upper", "Senior"])

if st.button("Fetch enquiries"):
    try:
        res = API.admin_enquiries(limit=int(limit))
        rows = res.get("enquiries") or []
        if stage:
            rows = [r for r in rows if r.get("stage") == stage]
        st.metric("Enquiries", len(rows))
        if rows:
            df = pd.DataFrame(rows)
            # counts per stage / entry year for the admissions team
            by = ["stage", "entryYear"] if df["entryYear"].notna().any() else ["stage"]
            st.dataframe(df.groupby(by).size().rename("count").reset_index())
            show_table(rows, caption="Newest first")
        else:
            st.info("No enquiries yet.")
    except Exception as e:
        st.error(e)
