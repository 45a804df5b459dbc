# intake/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# Storage
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./enquiries.sqlite3")
STORE_BACKEND = os.getenv("STORE_BACKEND", "sql").lower()   # "sql" | "memory"
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

# One deployment serves one school; every row is tagged with this value
SCHOOL_ID = os.getenv("SCHOOL_ID", "default")

# Normalization
DEFAULT_STAGE = os.getenv("DEFAULT_STAGE", "Senior")

# Admin listing cap (most recent N)
ADMIN_LIST_LIMIT = int(os.getenv("ADMIN_LIST_LIMIT", "100"))

# Random suffix length for timestamp ids
ID_SUFFIX_LENGTH = int(os.getenv("ID_SUFFIX_LENGTH", "5"))

ENV = os.getenv("ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
