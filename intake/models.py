from sqlalchemy import Column, String, Integer, DateTime, JSON, Index
from .db import Base

# -----------------------------
# ORM model (table) for enquiries
# -----------------------------
class Enquiry(Base):
    __tablename__ = "enquiries"
    # Fixed columns are the ones we filter/sort on; everything
    # variable-shaped lives in the JSON `data` blob.
    id          = Column(String, primary_key=True)           # generated enquiry id
    child_name  = Column(String, nullable=False, default="")
    parent_name = Column(String, nullable=False, default="")
    family_name = Column(String, nullable=False, default="")
    email       = Column(String, index=True, nullable=False, default="")
    phone       = Column(String, nullable=False, default="")
    age_group   = Column(String, index=True, nullable=False)  # Lower/Upper/Senior
    entry_year  = Column(Integer)
    school_id   = Column(String, nullable=False)              # partition key
    status      = Column(String, nullable=False, default="new")
    created_at  = Column(DateTime(timezone=True), nullable=False)
    data        = Column(JSON, nullable=False, default=dict)  # interests, priorities, free text

    __table_args__ = (
        Index("ix_enquiries_school_created", "school_id", "created_at"),
    )

    def __repr__(self):
        return f"<Enquiry(id={self.id}, child_name={self.child_name}, age_group={self.age_group})>"
