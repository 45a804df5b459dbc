# intake/normalizers/base.py
from typing import Protocol
from .types import EnquiryRecord, RawForm

class Normalizer(Protocol):
    def normalize(self, raw: RawForm) -> EnquiryRecord:
        """Build a canonical record from `raw`. Must never raise; must not mutate `raw`."""
        ...

class FormStage(Protocol):
    def apply(self, raw: RawForm) -> dict:
        """Return a NEW raw mapping (e.g. legacy keys renamed). Must never raise."""
        ...
