from .pipeline import get_default_normalizer, NormalizerPipeline
from .rules import RuleNormalizer, LegacyFieldStage, derive_entry_year
from .types import EnquiryRecord, Priorities, RawForm, Stage, Gender, Boarding
from .base import Normalizer, FormStage

__all__ = [
    "get_default_normalizer",
    "NormalizerPipeline",
    "RuleNormalizer",
    "LegacyFieldStage",
    "derive_entry_year",
    "EnquiryRecord",
    "Priorities",
    "RawForm",
    "Stage",
    "Gender",
    "Boarding",
    "Normalizer",
    "FormStage",
]
