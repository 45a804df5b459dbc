# intake/ids.py
import secrets
import string
import time
import uuid
from typing import Callable, Protocol

_BASE36 = string.digits + string.ascii_lowercase


class IdGenerator(Protocol):
    def next_id(self) -> str: ...


class TimestampIdGenerator:
    """
    Millisecond timestamp followed by a random base-36 suffix,
    e.g. "1718900000123k3x9q". Ids sort roughly by creation time.
    A longer suffix lowers the collision rate within one millisecond.
    """
    def __init__(self, suffix_length: int = 5, clock: Callable[[], float] = time.time):
        if suffix_length < 1:
            raise ValueError("suffix_length must be >= 1")
        self.suffix_length = suffix_length
        self.clock = clock

    def next_id(self) -> str:
        millis = int(self.clock() * 1000)
        suffix = "".join(secrets.choice(_BASE36) for _ in range(self.suffix_length))
        return f"{millis}{suffix}"


class UuidIdGenerator:
    """Random UUID4 hex; no ordering, negligible collision rate."""
    def next_id(self) -> str:
        return uuid.uuid4().hex


def get_default_id_generator() -> IdGenerator:
    from intake.settings import ID_SUFFIX_LENGTH
    return TimestampIdGenerator(suffix_length=ID_SUFFIX_LENGTH)
