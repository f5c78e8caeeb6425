"""
Swipe Ledger & Application Tracker - Row-level operations

The functions here only stage changes on the session (add/flush/update);
committing or rolling back is the caller's job so that a swipe and the
application it spawns (or the undo of both) land in one transaction.
"""

from typing import List, Optional, Tuple
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import utcnow
from jobswipe.models import Application, Job, Swipe
from jobswipe.schemas import Verdict

UNDO_FAILURE_REASON = "swipe undone by user"

# Status moves an external fulfilment update may make; failed and
# submitted are terminal
APPLICATION_TRANSITIONS = {
    "queued": ("submitted", "failed"),
}


# ==================== Swipe Ledger ====================

async def create_swipe(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    decision: str,
    verdict: Optional[Verdict] = None,
) -> Swipe:
    """Append a swipe row and flush so its id is assigned."""
    swipe = Swipe(
        user_id=user_id,
        job_id=job_id,
        decision=decision,
        qualified_flag=verdict.qualified if verdict else None,
        qualified_reason=verdict.reason if verdict else None,
        created_at=utcnow(),
    )
    db.add(swipe)
    await db.flush()
    return swipe


async def get_latest_active_swipe(db: AsyncSession, user_id: int) -> Optional[Swipe]:
    """
    Most recent non-undone swipe for the user.

    Ordered by (created_at DESC, id DESC) so equal timestamps resolve to
    the later insert. The row is locked FOR UPDATE on backends that
    support it (no-op on SQLite).
    """
    query = (
        select(Swipe)
        .where(Swipe.user_id == user_id, Swipe.undone_at.is_(None))
        .order_by(Swipe.created_at.desc(), Swipe.id.desc())
        .limit(1)
        .with_for_update()
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


def mark_swipe_undone(swipe: Swipe) -> None:
    swipe.undone_at = utcnow()


async def get_swipe_history(
    db: AsyncSession,
    user_id: int,
    decision: Optional[str] = None,
) -> List[Tuple[Swipe, Optional[Job]]]:
    """Live swipes for the user, newest first, each with its job."""
    query = (
        select(Swipe, Job)
        .outerjoin(Job, Swipe.job_id == Job.id)
        .where(Swipe.user_id == user_id, Swipe.undone_at.is_(None))
    )
    if decision:
        query = query.where(Swipe.decision == decision)
    query = query.order_by(Swipe.created_at.desc(), Swipe.id.desc())

    result = await db.execute(query)
    return [(row[0], row[1]) for row in result.all()]


# ==================== Application Tracker ====================

async def create_application(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    swipe_id: int,
) -> Application:
    application = Application(
        user_id=user_id,
        job_id=job_id,
        swipe_id=swipe_id,
        status="queued",
        created_at=utcnow(),
    )
    db.add(application)
    await db.flush()
    return application


async def fail_applications_for_swipe(
    db: AsyncSession,
    swipe_id: int,
    reason: str = UNDO_FAILURE_REASON,
) -> int:
    """
    Mark every application spawned by the swipe as failed.

    submitted_at is left as it was.

    Returns:
        Number of applications updated
    """
    result = await db.execute(
        update(Application)
        .where(Application.swipe_id == swipe_id)
        .values(status="failed", failure_reason=reason, updated_at=utcnow())
        .execution_options(synchronize_session="fetch")
    )
    return result.rowcount or 0


async def get_application(
    db: AsyncSession,
    application_id: int,
) -> Optional[Application]:
    result = await db.execute(select(Application).where(Application.id == application_id))
    return result.scalar_one_or_none()


def can_transition(current: str, status: str) -> bool:
    return status in APPLICATION_TRANSITIONS.get(current, ())


def apply_application_status(
    application: Application,
    status: str,
    failure_reason: Optional[str] = None,
) -> None:
    """
    Move an application to a new status.

    Callers check can_transition first. "submitted" stamps submitted_at;
    "failed" records the failure reason when one is supplied.
    """
    application.status = status
    if status == "submitted":
        application.submitted_at = utcnow()
    if status == "failed" and failure_reason:
        application.failure_reason = failure_reason


async def get_application_history(
    db: AsyncSession,
    user_id: int,
) -> List[Tuple[Application, Optional[Job]]]:
    """All of the user's applications, newest first, each with its job."""
    query = (
        select(Application, Job)
        .outerjoin(Job, Application.job_id == Job.id)
        .where(Application.user_id == user_id)
        .order_by(Application.created_at.desc(), Application.id.desc())
    )
    result = await db.execute(query)
    return [(row[0], row[1]) for row in result.all()]
