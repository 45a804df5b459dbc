# intake/deps.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from intake.db import get_db
from intake.normalizers import Normalizer, get_default_normalizer
from intake.repositories import EnquiryStore, SqlEnquiryStore
from intake.settings import SCHOOL_ID

_normalizer = get_default_normalizer()


def get_normalizer() -> Normalizer:
    return _normalizer


def get_store(request: Request, db: Session = Depends(get_db)) -> EnquiryStore:
    """
    The in-memory store (if the app was started with STORE_BACKEND=memory)
    is a single instance on app.state; otherwise wrap this request's session.
    """
    memory = getattr(request.app.state, "memory_store", None)
    if memory is not None:
        return memory
    return SqlEnquiryStore(db, partition_key=SCHOOL_ID,
                           id_generator=getattr(request.app.state, "id_generator", None))
