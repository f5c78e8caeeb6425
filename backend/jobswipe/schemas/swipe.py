from pydantic import BaseModel
from datetime import datetime
from typing import Literal, Optional
from jobswipe.schemas.job import JobSummary


class Verdict(BaseModel):
    """Qualification oracle judgment for one (resume, profile, job) triple."""

    qualified: bool
    reason: str


class NextJobResponse(BaseModel):
    job: Optional[JobSummary] = None
    verdict: Optional[Verdict] = None


class DecisionRequest(BaseModel):
    job_id: int
    decision: Literal["like", "dislike"]
    verdict: Optional[Verdict] = None


class DecisionResponse(BaseModel):
    ok: bool = True


class UndoResponse(BaseModel):
    ok: bool = True
    swipe_id: int


class SwipeResponse(BaseModel):
    id: int
    job_id: int
    decision: str
    qualified_flag: Optional[bool] = None
    qualified_reason: Optional[str] = None
    created_at: datetime
    undone_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class SwipeHistoryItem(BaseModel):
    swipe: SwipeResponse
    job: Optional[JobSummary] = None


class ApplicationResponse(BaseModel):
    id: int
    job_id: int
    swipe_id: Optional[int] = None
    status: str
    submitted_at: Optional[datetime] = None
    failure_reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicationHistoryItem(BaseModel):
    application: ApplicationResponse
    job: Optional[JobSummary] = None


class ApplicationStatusUpdate(BaseModel):
    status: Literal["queued", "submitted", "failed"]
    failure_reason: Optional[str] = None
