import logging, sys

from intake.settings import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s :: %(message)s"

# Libraries that are noisy at INFO; kept at WARNING unless we run in DEBUG
_QUIET = ("sqlalchemy.engine", "httpx", "multipart")


def setup_logging(level: str | None = None) -> logging.Logger:
    """Attach a single stdout handler to the root logger (idempotent)."""
    root = logging.getLogger()
    lvl = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    root.setLevel(lvl)
    if not root.handlers:  # reloads re-import this module
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for name in _QUIET:
        logging.getLogger(name).setLevel(logging.DEBUG if lvl <= logging.DEBUG else logging.WARNING)
    return root
