import pytest

from intake import settings
from intake.normalizers import get_default_normalizer
from intake.repositories import SqlEnquiryStore


@pytest.fixture
def seeded(db_session, clock, sample_form):
    """Three enquiries for this school, one for another school."""
    norm = get_default_normalizer()
    ours = SqlEnquiryStore(db_session, partition_key=settings.SCHOOL_ID, clock=clock)
    theirs = SqlEnquiryStore(db_session, partition_key="another-school", clock=clock)
    ids = [
        ours.create(norm.normalize({**sample_form, "childName": name}))
        for name in ("Amy", "Ben", "Cal")
    ]
    theirs.create(norm.normalize({"childName": "Zed"}))
    return ids


def test_admin_list_newest_first(client, seeded):
    r = client.get("/api/admin/enquiries")
    assert r.status_code == 200
    out = r.json()
    assert out["success"] is True
    assert out["total"] == 3
    assert [e["id"] for e in out["enquiries"]] == list(reversed(seeded))
    first = out["enquiries"][0]
    assert first["childName"] == "Cal"
    assert first["stage"] == "Upper"
    assert first["entryYear"] == 2027
    assert first["status"] == "new"
    assert "priorities" not in first


def test_admin_list_limit(client, seeded):
    out = client.get("/api/admin/enquiries", params={"limit": 2}).json()
    assert out["total"] == 2
    assert [e["childName"] for e in out["enquiries"]] == ["Cal", "Ben"]


@pytest.mark.parametrize("limit", [0, settings.ADMIN_LIST_LIMIT + 1])
def test_admin_list_limit_out_of_range(client, limit):
    r = client.get("/api/admin/enquiries", params={"limit": limit})
    assert r.status_code == 422
    assert r.json()["success"] is False


def test_other_school_is_hidden(client, seeded):
    names = [e["childName"] for e in client.get("/api/admin/enquiries").json()["enquiries"]]
    assert "Zed" not in names


def test_debug_endpoint(client, seeded):
    out = client.get("/api/debug").json()
    assert out["totalEnquiries"] == 3
    first = out["enquiries"][0]
    assert first["id"] == seeded[-1]
    assert first["childName"] == "Cal"
    assert first["priorities"] == {"academic": 3, "sports": 1, "pastoral": 2, "activities": 2}
    assert first["academicInterests"] == ["Sciences", "Mathematics"]


def test_debug_disabled_in_production(client, monkeypatch):
    monkeypatch.setattr(settings, "ENV", "production")
    r = client.get("/api/debug")
    assert r.status_code == 403
    assert r.json() == {"success": False, "error": "Debug endpoint disabled in production"}


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    out = r.json()
    assert out["status"] == "healthy"
    assert out["timestamp"]


def test_unknown_route(client):
    r = client.get("/api/nope")
    assert r.status_code == 404
    assert r.json() == {"success": False, "error": "Route not found"}
