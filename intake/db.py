from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from intake.settings import DATABASE_URL, SQL_ECHO

# SQLite connections are shared with FastAPI's worker threads
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, future=True, echo=SQL_ECHO,
                       pool_pre_ping=True, connect_args=_connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
Base = declarative_base()

def get_db():
    """One session per request; always closed, never committed here."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
