from pydantic import BaseModel, Field
from datetime import datetime
from typing import Literal, Optional


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    min_salary: Optional[int] = Field(None, ge=0)
    max_salary: Optional[int] = Field(None, ge=0)
    currency: Optional[str] = None
    experience_years: Optional[int] = Field(None, ge=0)
    current_role_title: Optional[str] = None
    desired_title: Optional[str] = None
    work_mode_preferences: Optional[list[Literal["remote", "hybrid", "onsite"]]] = None
    perks_preferences: Optional[dict[str, bool]] = None
    skills: Optional[list[str]] = None


class ProfileResponse(BaseModel):
    id: int
    user_id: int
    full_name: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    currency: str
    experience_years: Optional[int] = None
    current_role_title: Optional[str] = None
    desired_title: Optional[str] = None
    work_mode_preferences: list[str]
    perks_preferences: dict[str, bool]
    skills: list[str]
    updated_at: datetime

    class Config:
        from_attributes = True


class ResumeUpload(BaseModel):
    file_url: str
    file_key: str
    original_filename: Optional[str] = None
    mime_type: Optional[str] = None
    parsed_text: Optional[str] = None


class ResumeResponse(BaseModel):
    id: int
    file_url: str
    file_key: str
    original_filename: Optional[str] = None
    mime_type: Optional[str] = None
    parsed_text: Optional[str] = None
    parsed_at: Optional[datetime] = None
    updated_at: datetime

    class Config:
        from_attributes = True


class ProfileBundle(BaseModel):
    profile: Optional[ProfileResponse] = None
    resume: Optional[ResumeResponse] = None
