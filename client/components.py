import streamlit as st
import pandas as pd

PRIORITY_LABELS = {1: "Low", 2: "Medium", 3: "High"}

def show_table(rows, caption: str | None = None):
    """Render a list[dict] as a dataframe; otherwise show JSON."""
    if caption:
        st.caption(caption)
    if isinstance(rows, list) and rows and isinstance(rows[0], dict):
        st.dataframe(pd.DataFrame(rows), use_container_width=True)
    else:
        st.write(rows)

def show_json(obj, caption: str | None = None):
    if caption:
        st.caption(caption)
    st.json(obj)

def show_enquiry(rec: dict):
    """Prospectus-style summary of one normalized enquiry."""
    st.subheader(f"{rec.get('childName') or 'Your child'} — {rec.get('familyName') or ''}".strip(" —"))
    c1, c2, c3 = st.columns(3)
    c1.metric("Stage", rec.get("stage", ""))
    c2.metric("Boarding", rec.get("boardingPreference") or "—")
    c3.metric("Submitted", (rec.get("createdAt") or "")[:10])
    prio = rec.get("priorities") or {}
    st.write("**Priorities:** " + ", ".join(
        f"{k} {PRIORITY_LABELS.get(v, v)}" for k, v in prio.items()))
    for label, key in (("Academic interests", "academicInterests"),
                       ("Activities", "activities"),
                       ("Sports", "specificSports")):
        if rec.get(key):
            st.write(f"**{label}:** " + ", ".join(rec[key]))
    if rec.get("universityAspirations"):
        st.write(f"**University aspirations:** {rec['universityAspirations']}")
    if rec.get("additionalInfo"):
        st.caption(rec["additionalInfo"])
