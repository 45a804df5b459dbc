from concurrent.futures import ThreadPoolExecutor

import pytest
from sqlalchemy.exc import OperationalError

from intake.errors import EnquiryNotFound, StoreUnavailable
from intake.ids import UuidIdGenerator
from intake.normalizers import get_default_normalizer
from intake.repositories import MemoryEnquiryStore, SqlEnquiryStore


@pytest.fixture(params=["memory", "sql"])
def store(request, db_session, clock):
    if request.param == "memory":
        return MemoryEnquiryStore(id_generator=UuidIdGenerator(), clock=clock)
    return SqlEnquiryStore(db_session, partition_key="school-a",
                           id_generator=UuidIdGenerator(), clock=clock)


@pytest.fixture
def record(sample_form):
    return get_default_normalizer().normalize(sample_form)


def test_round_trip(store, record):
    eid = store.create(record)
    got = store.get(eid)
    assert got.id == eid
    assert got.created_at is not None
    assert got.model_dump(exclude={"id", "created_at"}) == record.model_dump(exclude={"id", "created_at"})


def test_round_trip_of_empty_record(store):
    rec = get_default_normalizer().normalize({})
    got = store.get(store.create(rec))
    assert got.activities == []
    assert got.priorities.academic == 2
    assert got.stage == "Senior"


def test_create_keeps_pre_generated_id(store, record):
    eid = store.create(record.model_copy(update={"id": "given-1"}))
    assert eid == "given-1"
    assert store.get("given-1").child_name == "Olivia"


def test_create_never_overwrites(store, record):
    store.create(record.model_copy(update={"id": "dup"}))
    with pytest.raises(StoreUnavailable):
        store.create(record.model_copy(update={"id": "dup", "child_name": "Someone else"}))
    assert store.get("dup").child_name == "Olivia"


def test_unknown_id(store):
    with pytest.raises(EnquiryNotFound) as exc:
        store.get("does-not-exist")
    assert exc.value.enquiry_id == "does-not-exist"


def test_list_newest_first_and_bounded(store, record):
    ids = [store.create(record.model_copy(update={"child_name": f"Child {i}"})) for i in range(5)]
    rows = store.list(limit=3)
    assert [r.id for r in rows] == list(reversed(ids))[:3]
    assert rows[0].child_name == "Child 4"
    assert rows[0].stage == "Upper"
    assert rows[0].status == "new"


def test_list_non_positive_limit_is_empty(store, record):
    store.create(record)
    assert store.list(limit=0) == []
    assert store.list(limit=-5) == []
    assert len(store.list(limit=1)) == 1


def test_memory_store_concurrent_creates(record):
    store = MemoryEnquiryStore(id_generator=UuidIdGenerator())
    with ThreadPoolExecutor(max_workers=8) as pool:
        ids = list(pool.map(lambda _: store.create(record), range(200)))
    assert len(set(ids)) == 200
    assert len(store) == 200
    for eid in ids[:10]:
        assert store.get(eid).id == eid


def test_sql_store_derives_entry_year(db_session, clock, record):
    store = SqlEnquiryStore(db_session, partition_key="school-a", clock=clock)
    store.create(record)                                           # Upper
    store.create(record.model_copy(update={"stage": "Senior"}))
    years = {r.stage: r.entry_year for r in store.list()}
    assert years == {"Upper": 2027, "Senior": 2026}


def test_sql_store_is_partitioned(db_session, record):
    a = SqlEnquiryStore(db_session, partition_key="school-a")
    b = SqlEnquiryStore(db_session, partition_key="school-b")
    eid = a.create(record)
    assert [r.id for r in a.list()] == [eid]
    assert b.list() == []
    with pytest.raises(EnquiryNotFound):
        b.get(eid)


def test_sql_store_wraps_database_errors(db_session, record, monkeypatch):
    store = SqlEnquiryStore(db_session, partition_key="school-a")

    def boom(*a, **kw):
        raise OperationalError("SELECT 1", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "execute", boom)
    with pytest.raises(StoreUnavailable):
        store.get("anything")
    with pytest.raises(StoreUnavailable):
        store.list()
