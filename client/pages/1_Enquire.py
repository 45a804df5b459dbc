import random
import requests
import streamlit as st
import api as API
from gen_data import gen_enquiry_form
from components import show_json

st.title("✉️ Enquire")

if "last_enquiry_id" not in st.session_state:
    st.session_state.last_enquiry_id = None

# ------------------------
# The form
# ------------------------
with st.form("enquiry"):
    c1, c2 = st.columns(2)
    with c1:
        child = st.text_input("Child's name")
        stage = st.selectbox("Stage", ["Lower", "Upper", "Senior"], index=2)
        gender = st.radio("Gender", ["Female", "Male", "Prefer not to say"], horizontal=True)
        boarding = st.selectbox("Boarding", ["", "Full Boarding", "Day", "Considering Both"])
    with c2:
        parent = st.text_input("Parent's name")
        email = st.text_input("Email")
        phone = st.text_input("Phone")
        family = st.text_input("Family name (optional)", placeholder="the Smith family")
    interests = st.multiselect("Academic interests", ["Sciences", "Mathematics", "English", "History",
                                                      "Languages", "Art", "Music", "Drama", "Computing"])
    activities = st.text_input("Activities (comma separated)")
    sports = st.text_input("Sports (comma separated)")
    aspirations = st.text_input("University aspirations")

    st.caption("How much does each matter? (1 = a little, 3 = a lot)")
    p1, p2, p3, p4 = st.columns(4)
    priorities = {
        "academic": p1.slider("Academic", 1, 3, 2),
        "sports": p2.slider("Sports", 1, 3, 2),
        "pastoral": p3.slider("Pastoral", 1, 3, 2),
        "activities": p4.slider("Activities", 1, 3, 2),
    }
    info = st.text_area("Anything else?")
    sent = st.form_submit_button("Send enquiry")

def _split(s: str):
    return [x.strip() for x in s.split(",") if x.strip()]

if sent:
    form = {
        "childName": child, "parentName": parent, "email": email, "phone": phone,
        "stage": stage, "gender": gender, "boardingPreference": boarding,
        "academicInterests": interests, "activities": _split(activities),
        "specificSports": _split(sports), "universityAspirations": aspirations,
        "priorities": priorities, "additionalInfo": info,
    }
    if family:
        form["familyName"] = family
    try:
        resp = API.submit(form)
        st.session_state.last_enquiry_id = resp["enquiryId"]
        st.success(f"Thank you! Enquiry {resp['enquiryId']} received.")
        st.caption(f"Prospectus link: {resp['prospectusURL']}")
    except requests.HTTPError as e:
        st.error(e.response.text[:400] if e.response is not None else str(e))
    except Exception as e:
        st.error(e)

st.divider()

# ------------------------
# Sample submissions
# ------------------------
st.caption("Or send generated sample enquiries (mix of current and legacy form shapes)")
c1, c2, c3 = st.columns(3)
with c1:
    n = st.number_input("How many", 1, 500, 10)
with c2:
    legacy_pct = st.slider("Legacy shape %", 0, 100, 30)
with c3:
    seed = st.number_input("Random seed", 0, 999999, 0)

if st.button("🎲 Send samples"):
    if seed:
        random.seed(int(seed))
    ok, failed, last = 0, 0, None
    prog = st.progress(0.0)
    for i in range(int(n)):
        form = gen_enquiry_form(legacy=random.randint(1, 100) <= legacy_pct)
        try:
            last = API.submit(form)
            ok += 1
        except Exception as e:
            failed += 1
            st.error(f"[{i}] {e}")
        prog.progress((i + 1) / n)
    st.write(f"**Sent**: ok={ok} failed={failed}")
    if last:
        st.session_state.last_enquiry_id = last["enquiryId"]
        show_json(last, caption="Last response")
