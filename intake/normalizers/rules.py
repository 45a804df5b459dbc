import logging
import math
import re
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Optional

from .base import Normalizer, FormStage
from .types import STAGES, BOARDING_OPTIONS, EnquiryRecord, Priorities, RawForm

log = logging.getLogger(__name__)

# Alias tables. Keys are already trimmed + lower-cased (see norm_key).
STAGE_ALIASES = MappingProxyType({
    "lower": "Lower", "13-14": "Lower", "13–14": "Lower",
    "upper": "Upper", "16-18": "Upper", "16–18": "Upper",
    "senior": "Senior",
})

BOARDING_ALIASES = MappingProxyType({
    "full boarding": "Full Boarding",
    "boarding": "Full Boarding",
    "boarder": "Full Boarding",
    "day": "Day",
    "considering": "Considering Both",
    "considering both": "Considering Both",
})

# Older form builds posted these names instead of the canonical ones
LEGACY_KEYS = MappingProxyType({
    "childAge": "stage",
    "childGender": "gender",
    "boarding": "boardingPreference",
})

PRIORITY_FIELDS = ("academic", "sports", "pastoral", "activities")
DEFAULT_PRIORITY = 2

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class LegacyFieldStage(FormStage):
    """Copy legacy keys onto their canonical names when the canonical key is absent."""
    def apply(self, raw: RawForm) -> dict:
        out = dict(raw) if isinstance(raw, Mapping) else {}
        for old, new in LEGACY_KEYS.items():
            if not present(out.get(new)) and present(out.get(old)):
                out[new] = out[old]
        return out


class RuleNormalizer(Normalizer):
    """
    Rule-based normalizer: maps a loosely-shaped enquiry form onto the
    canonical EnquiryRecord. Total: bad or missing input degrades to
    defaults, it never raises.
    """
    def __init__(self, default_stage: str = "Senior"):
        self.default_stage = STAGE_ALIASES.get(norm_key(default_stage))
        if self.default_stage is None:
            log.warning("unknown default stage %r, using Senior", default_stage)
            self.default_stage = "Senior"

    def normalize(self, raw: RawForm) -> EnquiryRecord:
        r = raw if isinstance(raw, Mapping) else {}
        parent_name = text(r.get("parentName"))
        return EnquiryRecord(
            child_name=text(r.get("childName")),
            parent_name=parent_name,
            family_name=text(r.get("familyName")) or derive_family_name(parent_name),
            email=text(r.get("email")),
            phone=text(r.get("phone")),
            stage=resolve_stage(r.get("stage"), self.default_stage),
            gender=infer_gender(r.get("gender")),
            boarding_preference=resolve_boarding(r.get("boardingPreference")),
            academic_interests=as_list(r.get("academicInterests")),
            activities=as_list(r.get("activities")),
            specific_sports=as_list(r.get("specificSports")),
            university_aspirations=text(r.get("universityAspirations")),
            additional_info=text(r.get("additionalInfo")),
            priorities=norm_priorities(r),
        )


# --- Individual field helpers ---

def present(v: Any) -> bool:
    """Form-style truthiness: None, "", False, 0, NaN and empty containers are absent."""
    if v is None or v is False:
        return False
    if isinstance(v, (int, float)):
        return v == v and v != 0
    if isinstance(v, (str, list, tuple, dict)):
        return len(v) > 0
    return True

def first_present(*values: Any) -> Any:
    for v in values:
        if present(v):
            return v
    return None

def _scalar_str(v: Any) -> str:
    """str() of a string or number; '' for anything else, or a number too long to print."""
    if isinstance(v, str):
        return v
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        return ""
    try:
        return str(v)
    except ValueError:  # int past sys.get_int_max_str_digits()
        return ""

def norm_key(v: Any) -> str:
    """Trim + lower-case a scalar for alias lookup; non-scalars map to ''."""
    return _scalar_str(v).strip().lower()

def text(v: Any) -> str:
    """Free-text field: trimmed string, '' when absent or not representable."""
    if not present(v):
        return ""
    if isinstance(v, (list, tuple)):
        # one level only; containers nested inside the list are dropped
        return ", ".join(t for t in (_scalar_str(i).strip() for i in v if present(i)) if t)
    return _scalar_str(v).strip()

def resolve_stage(v: Any, default: str = "Senior") -> str:
    if v in STAGES:
        return v
    return STAGE_ALIASES.get(norm_key(v), default)

def infer_gender(v: Any) -> str:
    """Only the first letter counts: f* -> female, m* -> male."""
    g = norm_key(v)
    if g.startswith("f"): return "female"
    if g.startswith("m"): return "male"
    return ""

def resolve_boarding(v: Any) -> str:
    if v in BOARDING_OPTIONS:
        return v
    return BOARDING_ALIASES.get(norm_key(v), "")

def as_list(v: Any) -> list[str]:
    """Sequence passes through, a present scalar is wrapped, absent -> []."""
    if isinstance(v, (list, tuple)):
        return [t for t in (text(i) for i in v) if t]
    t = text(v)
    return [t] if t else []

def parse_int(v: Any) -> Optional[int]:
    """Leading-integer parse ("2.7" -> 2, "3 stars" -> 3). None when unparseable."""
    if isinstance(v, bool):
        return None
    if isinstance(v, int):
        return v
    if isinstance(v, float):
        return int(v) if math.isfinite(v) else None
    if isinstance(v, str):
        m = _LEADING_INT.match(v)
        if not m:
            return None
        try:
            return int(m.group(1))
        except ValueError:  # digit run past sys.get_int_max_str_digits()
            return None
    return None

def clamp_priority(v: Any, default: int = DEFAULT_PRIORITY) -> int:
    n = parse_int(v)
    if n is None:
        return default
    return max(1, min(3, n))

def norm_priorities(r: Mapping) -> Priorities:
    """Nested priorities.<field> wins over a flat top-level <field>."""
    nested = r.get("priorities")
    if not isinstance(nested, Mapping):
        nested = {}
    return Priorities(**{
        f: clamp_priority(first_present(nested.get(f), r.get(f)))
        for f in PRIORITY_FIELDS
    })

def derive_family_name(parent_name: str) -> str:
    tokens = parent_name.split()
    return f"the {tokens[-1]} family" if tokens else ""

def derive_entry_year(stage: str, current_year: int) -> int:
    """Lower/Upper enquiries are for next September; Senior for this one."""
    return current_year + 1 if stage in ("Lower", "Upper") else current_year
