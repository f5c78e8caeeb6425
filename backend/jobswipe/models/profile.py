"""
Profile and Resume Models - Job search preferences and CV text

Both are strictly one-to-one with a user (unique user_id) and are
written through upserts only, never as additional rows.

Work Mode Preferences:
    Subset of ["remote", "hybrid", "onsite"]. An empty list means
    "any work mode".
"""

from sqlalchemy import Column, String, Integer, Float, Text, JSON, DateTime, ForeignKey
from jobswipe.database import Base, utcnow


class Profile(Base):
    """
    User profile used by the feed's preference filter and the oracle prompt.

    Attributes:
        city/country: Location used for the inclusive-OR location filter
        min_salary/max_salary: Acceptable salary band (nullable, annual)
        work_mode_preferences: Accepted work modes (empty = any)
        perks_preferences: Map of perk name to desired flag
        skills: Plain list of skill names
    """

    __tablename__ = "profiles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    full_name = Column(String(255), nullable=True)
    city = Column(String(255), nullable=True)
    country = Column(String(255), nullable=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    min_salary = Column(Integer, nullable=True)
    max_salary = Column(Integer, nullable=True)
    currency = Column(String(10), nullable=False, default="USD")
    experience_years = Column(Integer, nullable=True)
    current_role_title = Column(String(255), nullable=True)
    desired_title = Column(String(255), nullable=True)
    work_mode_preferences = Column(JSON, nullable=False, default=list)
    perks_preferences = Column(JSON, nullable=False, default=dict)
    skills = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class Resume(Base):
    """
    Uploaded resume metadata and its extracted plain text.

    File bytes live in external storage; file_url/file_key are references.
    """

    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    file_url = Column(Text, nullable=False)
    file_key = Column(Text, nullable=False)
    original_filename = Column(String(500), nullable=True)
    mime_type = Column(String(100), nullable=True)
    parsed_text = Column(Text, nullable=True)
    parsed_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
