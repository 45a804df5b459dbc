# intake/normalizers/types.py
from datetime import datetime
from typing import Any, List, Literal, Mapping, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Stage    = Literal["Lower", "Upper", "Senior"]
Gender   = Literal["female", "male", ""]
Boarding = Literal["Full Boarding", "Day", "Considering Both", ""]

STAGES: tuple[str, ...] = get_args(Stage)
BOARDING_OPTIONS: tuple[str, ...] = tuple(b for b in get_args(Boarding) if b)

# Whatever the client posted: JSON object or decoded form fields
RawForm = Mapping[str, Any]


class _Canonical(BaseModel):
    # snake_case in Python, camelCase on the wire
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class Priorities(_Canonical):
    academic:   int = Field(2, ge=1, le=3)
    sports:     int = Field(2, ge=1, le=3)
    pastoral:   int = Field(2, ge=1, le=3)
    activities: int = Field(2, ge=1, le=3)


class EnquiryRecord(_Canonical):
    """Canonical enquiry. Built once by the normalizer, never updated."""
    id: str = ""
    child_name: str = ""
    parent_name: str = ""
    family_name: str = ""
    email: str = ""
    phone: str = ""
    stage: Stage = "Senior"
    gender: Gender = ""
    boarding_preference: Boarding = ""
    academic_interests: List[str] = Field(default_factory=list)
    activities: List[str] = Field(default_factory=list)
    specific_sports: List[str] = Field(default_factory=list)
    university_aspirations: str = ""
    additional_info: str = ""
    priorities: Priorities = Field(default_factory=Priorities)
    created_at: Optional[datetime] = None

    def to_json(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
