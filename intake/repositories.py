import logging
import threading
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from intake.errors import EnquiryNotFound, StoreUnavailable
from intake.ids import IdGenerator, get_default_id_generator
from intake.models import Enquiry
from intake.normalizers import EnquiryRecord, derive_entry_year
from intake.schemas import EnquirySummary
from intake.settings import ADMIN_LIST_LIMIT

log = logging.getLogger(__name__)

# Fields kept in the JSON blob rather than in their own column
VARIABLE_FIELDS = {
    "gender", "boarding_preference", "academic_interests", "activities",
    "specific_sports", "university_aspirations", "additional_info", "priorities",
}


def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def _as_utc(dt: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything we store is UTC."""
    return dt.replace(tzinfo=timezone.utc) if dt.tzinfo is None else dt


class EnquiryStore(Protocol):
    def create(self, record: EnquiryRecord) -> str:
        """Persist `record` and return its id. Never overwrites an existing id."""
        ...

    def get(self, enquiry_id: str) -> EnquiryRecord:
        """Full record, or EnquiryNotFound."""
        ...

    def list(self, limit: int = ADMIN_LIST_LIMIT) -> List[EnquirySummary]:
        """Most recent first, at most `limit` rows."""
        ...


class MemoryEnquiryStore(EnquiryStore):
    """
    Volatile store: lives as long as the process, nothing is persisted.
    One instance is created at start-up and shared by all requests.
    There is no partition key: the process serves a single school, so
    list/get see every record it holds.
    """
    def __init__(self, id_generator: Optional[IdGenerator] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.id_generator = id_generator or get_default_id_generator()
        self.clock = clock
        self._records: Dict[str, EnquiryRecord] = {}
        self._lock = threading.Lock()

    def create(self, record: EnquiryRecord) -> str:
        enquiry_id = record.id or self.id_generator.next_id()
        stamped = record.model_copy(update={"id": enquiry_id, "created_at": self.clock()})
        with self._lock:
            if enquiry_id in self._records:
                log.error("enquiry id collision: id=%s", enquiry_id)
                raise StoreUnavailable("enquiry id already exists")
            self._records[enquiry_id] = stamped
        return enquiry_id

    def get(self, enquiry_id: str) -> EnquiryRecord:
        with self._lock:
            rec = self._records.get(enquiry_id)
        if rec is None:
            raise EnquiryNotFound(enquiry_id)
        return rec

    def list(self, limit: int = ADMIN_LIST_LIMIT) -> List[EnquirySummary]:
        if limit <= 0:
            return []
        with self._lock:
            recs = list(enumerate(self._records.values()))
        # insertion order breaks ties between identical timestamps
        recs.sort(key=lambda p: (p[1].created_at, p[0]), reverse=True)
        return [_record_to_summary(r) for _, r in recs[:limit]]

    def __len__(self) -> int:
        return len(self._records)


class SqlEnquiryStore(EnquiryStore):
    """
    Durable store over the `enquiries` table, scoped to one school
    (partition key). Every SQLAlchemy failure is logged here and
    re-raised as StoreUnavailable.
    """
    def __init__(self, db: Session, partition_key: str,
                 id_generator: Optional[IdGenerator] = None,
                 clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.partition_key = partition_key
        self.id_generator = id_generator or get_default_id_generator()
        self.clock = clock

    def create(self, record: EnquiryRecord) -> str:
        enquiry_id = record.id or self.id_generator.next_id()
        now = self.clock()
        row = Enquiry(
            id=enquiry_id,
            child_name=record.child_name,
            parent_name=record.parent_name,
            family_name=record.family_name,
            email=record.email,
            phone=record.phone,
            age_group=record.stage,
            entry_year=derive_entry_year(record.stage, now.year),
            school_id=self.partition_key,
            status="new",
            created_at=now,
            data=record.model_dump(mode="json", by_alias=True, include=VARIABLE_FIELDS),
        )
        try:
            self.db.add(row)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("enquiry insert failed: id=%s school=%s", enquiry_id, self.partition_key)
            raise StoreUnavailable("could not save enquiry") from e
        return enquiry_id

    def get(self, enquiry_id: str) -> EnquiryRecord:
        try:
            row = self.db.execute(
                select(Enquiry).where(Enquiry.id == enquiry_id,
                                      Enquiry.school_id == self.partition_key)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("enquiry lookup failed: id=%s", enquiry_id)
            raise StoreUnavailable("could not read enquiry") from e
        if row is None:
            raise EnquiryNotFound(enquiry_id)
        return _row_to_record(row)

    def list(self, limit: int = ADMIN_LIST_LIMIT) -> List[EnquirySummary]:
        if limit <= 0:
            return []
        q = (
            select(Enquiry)
            .where(Enquiry.school_id == self.partition_key)
            .order_by(Enquiry.created_at.desc(), Enquiry.id.desc())
            .limit(limit)
        )
        try:
            rows = self.db.execute(q).scalars().all()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.exception("enquiry listing failed: school=%s", self.partition_key)
            raise StoreUnavailable("could not list enquiries") from e
        return [_row_to_summary(r) for r in rows]


# -------------------------------------------------------------------
# Converters
# -------------------------------------------------------------------
def _row_to_record(row: Enquiry) -> EnquiryRecord:
    return EnquiryRecord.model_validate({
        **(row.data or {}),
        "id": row.id,
        "child_name": row.child_name,
        "parent_name": row.parent_name,
        "family_name": row.family_name,
        "email": row.email,
        "phone": row.phone,
        "stage": row.age_group,
        "created_at": _as_utc(row.created_at),
    })

def _row_to_summary(row: Enquiry) -> EnquirySummary:
    return EnquirySummary(
        id=row.id,
        child_name=row.child_name,
        parent_name=row.parent_name,
        family_name=row.family_name,
        email=row.email,
        stage=row.age_group,
        entry_year=row.entry_year,
        status=row.status,
        created_at=_as_utc(row.created_at),
    )

def _record_to_summary(rec: EnquiryRecord) -> EnquirySummary:
    return EnquirySummary(
        id=rec.id,
        child_name=rec.child_name,
        parent_name=rec.parent_name,
        family_name=rec.family_name,
        email=rec.email,
        stage=rec.stage,
        created_at=rec.created_at,
    )
