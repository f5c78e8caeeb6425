"""
Swipe and Application Models - Decision ledger and derived applications

Swipe Lifecycle:
    created on decision → (optionally) undone via undone_at
    Rows are never deleted; a re-swipe after undo appends a new row.

Application Lifecycle:
    queued → submitted
    queued → failed (external failure or undo of the originating swipe)

Application.swipe_id is a lookup-only back-reference: it is nulled if the
swipe row ever disappears, and the application survives.
"""

from sqlalchemy import Column, String, Integer, Boolean, Text, DateTime, ForeignKey, Index
from jobswipe.database import Base, utcnow

DECISIONS = ("like", "dislike")
APPLICATION_STATUSES = ("queued", "submitted", "failed")


class Swipe(Base):
    """
    One like/dislike decision by one user on one job.

    qualified_flag/qualified_reason hold the oracle verdict as it was
    when the user decided; they are never re-derived.
    """

    __tablename__ = "swipes"
    __table_args__ = (
        Index("ix_swipes_user_latest", "user_id", "undone_at", "created_at", "id"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    decision = Column(String(10), nullable=False)
    qualified_flag = Column(Boolean, nullable=True)
    qualified_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    undone_at = Column(DateTime, nullable=True)

    @property
    def is_undone(self) -> bool:
        return self.undone_at is not None


class Application(Base):
    """Application queued as a consequence of a like swipe."""

    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False)
    swipe_id = Column(Integer, ForeignKey("swipes.id", ondelete="SET NULL"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default="queued")
    submitted_at = Column(DateTime, nullable=True)
    failure_reason = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
