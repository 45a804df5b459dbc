import os, requests
from dotenv import load_dotenv
load_dotenv()
API = os.getenv("API_BASE_URL", "http://localhost:8000")
S = requests.Session(); S.headers.update({"Accept": "application/json"})

def health():   r=S.get(f"{API}/health",timeout=10); r.raise_for_status(); return r.json()
def submit(form: dict):
    r = S.post(f"{API}/api/submit-enquiry", json=form, timeout=30)
    r.raise_for_status()
    return r.json()

def enquiry(enquiry_id: str):
    """Returns the record, or None when the service says 404."""
    r = S.get(f"{API}/api/enquiry/{enquiry_id}", timeout=20)
    if r.status_code == 404:
        return None
    r.raise_for_status()
    return r.json()["data"]

def admin_enquiries(limit: int = 100):
    r=S.get(f"{API}/api/admin/enquiries",params={"limit":int(limit)},timeout=30); r.raise_for_status(); return r.json()

def stage_breakdown(rows: list[dict]) -> dict:
    """Count admin-listing rows per stage, always in Lower/Upper/Senior order."""
    counts = {"Lower": 0, "Upper": 0, "Senior": 0}
    for r in rows:
        stage = r.get("stage")
        if stage in counts:
            counts[stage] += 1
    return counts
