# intake/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from intake.normalizers.types import EnquiryRecord, Stage


class EnquirySummary(BaseModel):
    """Admin listing row: the fixed columns only."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)

    id: str
    child_name: str = ""
    parent_name: str = ""
    family_name: str = ""
    email: str = ""
    stage: Stage
    entry_year: Optional[int] = None   # only the SQL store derives it
    status: str = "new"
    created_at: Optional[datetime] = None


# -------------------------------------------------------------------
# Response envelopes. Field names are the wire names.
# -------------------------------------------------------------------
class SubmitResponse(BaseModel):
    success: bool = True
    enquiryId: str
    prospectusURL: str

class EnquiryResponse(BaseModel):
    success: bool = True
    data: EnquiryRecord

class AdminListResponse(BaseModel):
    success: bool = True
    total: int
    enquiries: List[EnquirySummary]

class DebugResponse(BaseModel):
    totalEnquiries: int
    enquiries: List[EnquiryRecord]

class HealthResponse(BaseModel):
    status: str = "healthy"
    timestamp: datetime

class ErrorResponse(BaseModel):
    success: bool = False
    error: str
