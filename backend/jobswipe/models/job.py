"""
Job Model - SQLAlchemy ORM model for job postings

Jobs are created through the admin path (or the seed script) and are
read-only for the swipe feed.
"""

from sqlalchemy import Column, String, Integer, Float, Text, DateTime, JSON
from jobswipe.database import Base, utcnow

WORK_MODES = ("remote", "hybrid", "onsite")


class Job(Base):
    """
    Job posting offered in the swipe feed.

    Attributes:
        external_id: Reference on the source job board (unique, nullable)
        city/country: Location (both nullable, absence passes the filter)
        salary_min/max: Salary range (nullable)
        work_mode: One of WORK_MODES or None
        perks: Map of perk name to flag
        apply_url: Where the application is ultimately sent
        source: Provenance tag (e.g. "internal", "seek")
    """

    __tablename__ = "jobs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    external_id = Column(String(255), nullable=True, unique=True)
    title = Column(String(500), nullable=False)
    company_name = Column(String(500), nullable=False)
    company_logo_url = Column(Text, nullable=True)
    city = Column(String(255), nullable=True, index=True)
    country = Column(String(255), nullable=True, index=True)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    salary_min = Column(Integer, nullable=True)
    salary_max = Column(Integer, nullable=True)
    currency = Column(String(10), nullable=False, default="USD")
    work_mode = Column(String(20), nullable=True)
    employment_type = Column(String(50), nullable=False, default="full-time")
    summary = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    perks = Column(JSON, nullable=False, default=dict)
    apply_url = Column(Text, nullable=True)
    source = Column(String(100), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
