from typing import List, Optional
from .base import Normalizer, FormStage
from .types import EnquiryRecord, RawForm
from .rules import RuleNormalizer, LegacyFieldStage

class NormalizerPipeline(Normalizer):
    """
    A chain of raw->raw form stages followed by the normalizer that
    builds the record. Each stage takes the output of the previous one,
    so legacy clean-ups can be added without touching the rules.
    """
    def __init__(self, stages: List[FormStage], normalizer: Normalizer):
        self.stages = stages
        self.normalizer = normalizer

    def normalize(self, raw: RawForm) -> EnquiryRecord:
        out = raw
        for stage in self.stages:
            out = stage.apply(out)
        return self.normalizer.normalize(out)

def get_default_normalizer(default_stage: Optional[str] = None) -> Normalizer:
    """Factory for the default pipeline: legacy key mapping, then rules."""
    if default_stage is None:
        from intake.settings import DEFAULT_STAGE
        default_stage = DEFAULT_STAGE
    return NormalizerPipeline([LegacyFieldStage()], RuleNormalizer(default_stage))
