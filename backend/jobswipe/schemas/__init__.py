from jobswipe.schemas.job import JobCreate, JobResponse, JobSummary
from jobswipe.schemas.profile import ProfileUpdate, ProfileResponse, ResumeUpload, ResumeResponse, ProfileBundle
from jobswipe.schemas.auth import LoginRequest, LoginResponse, UserResponse
from jobswipe.schemas.swipe import (
    Verdict,
    NextJobResponse,
    DecisionRequest,
    DecisionResponse,
    UndoResponse,
    SwipeResponse,
    SwipeHistoryItem,
    ApplicationResponse,
    ApplicationHistoryItem,
    ApplicationStatusUpdate,
)

__all__ = [
    "JobCreate",
    "JobResponse",
    "JobSummary",
    "ProfileUpdate",
    "ProfileResponse",
    "ResumeUpload",
    "ResumeResponse",
    "ProfileBundle",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
    "Verdict",
    "NextJobResponse",
    "DecisionRequest",
    "DecisionResponse",
    "UndoResponse",
    "SwipeResponse",
    "SwipeHistoryItem",
    "ApplicationResponse",
    "ApplicationHistoryItem",
    "ApplicationStatusUpdate",
]
