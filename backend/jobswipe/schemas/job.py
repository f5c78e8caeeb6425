from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class JobBase(BaseModel):
    title: str
    company_name: str
    company_logo_url: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    currency: str = "USD"
    work_mode: Optional[Literal["remote", "hybrid", "onsite"]] = None
    employment_type: str = "full-time"
    summary: Optional[str] = None
    description: Optional[str] = None
    perks: dict[str, bool] = Field(default_factory=dict)
    apply_url: Optional[str] = None


class JobCreate(JobBase):
    external_id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    source: Optional[str] = None


class JobSummary(JobBase):
    """Card shown in the swipe feed."""

    id: int

    class Config:
        from_attributes = True


class JobResponse(JobCreate):
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
