"""
Feed Orchestrator - Next job, decisions and single-level undo

Composes the preference filter and qualification oracle to answer
"what's next", and the swipe ledger and application tracker to record
or reverse a decision.

State Machine (per user/job, as a sequence of swipe rows):
    no swipe → decided(like | dislike) → undone
    undone → decided(...)   (new row; history is append-only)

Consistency:
    - record_decision writes the swipe and, for a like, its queued
      application in one transaction.
    - undo_last_decision marks the latest live swipe undone and fails its
      applications in one transaction.
    - Both run under a per-user asyncio.Lock, so a decision and an undo
      for the same user never interleave within this process. The latest
      swipe lookup also takes a row lock where the database supports it.
"""

import asyncio
import logging
import weakref
from dataclasses import dataclass
from typing import List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from jobswipe.database import transaction
from jobswipe.exceptions import ConflictError, NotFoundError, PreconditionError
from jobswipe.middleware.metrics import record_swipe_decision, record_swipe_undo
from jobswipe.models import DECISIONS, APPLICATION_STATUSES, Application, Job, Swipe
from jobswipe.schemas import Verdict
from jobswipe.services import ledger
from jobswipe.services.preferences import select_next_job
from jobswipe.services.profiles import get_profile, get_resume
from jobswipe.services.qualification import QualificationOracle, assess_qualification

logger = logging.getLogger(__name__)


class UserLocks:
    """
    Registry of one asyncio.Lock per user id.

    Locks are held weakly and disappear once no request is using them.
    """

    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[int, asyncio.Lock]" = weakref.WeakValueDictionary()

    def lock_for(self, user_id: int) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock


user_locks = UserLocks()


@dataclass
class NextJobResult:
    job: Optional[Job]
    verdict: Optional[Verdict]

    @property
    def exhausted(self) -> bool:
        return self.job is None


async def get_next_job(
    db: AsyncSession,
    user_id: int,
    oracle: QualificationOracle,
    timeout: Optional[float] = None,
) -> NextJobResult:
    """
    Next unseen job matching the user's preferences, with a verdict.

    Raises:
        PreconditionError: If the user has no profile yet

    Returns:
        NextJobResult; job and verdict are both None when the feed is exhausted
    """
    profile = await get_profile(db, user_id)
    if profile is None:
        raise PreconditionError("profile required")

    job = await select_next_job(db, user_id, profile)
    if job is None:
        logger.info(f"Feed exhausted for user {user_id}")
        return NextJobResult(job=None, verdict=None)

    resume = await get_resume(db, user_id)
    resume_text = resume.parsed_text if resume else None
    verdict = await assess_qualification(oracle, resume_text, profile, job, timeout=timeout)
    return NextJobResult(job=job, verdict=verdict)


async def record_decision(
    db: AsyncSession,
    user_id: int,
    job_id: int,
    decision: str,
    verdict: Optional[Verdict] = None,
) -> Swipe:
    """
    Record a like/dislike and, for a like, queue an application.

    Args:
        user_id: Acting user
        job_id: Job being decided on
        decision: "like" or "dislike"
        verdict: Verdict shown to the user, snapshotted into the swipe

    Raises:
        ValueError: If decision is not a known value
        NotFoundError: If the job does not exist

    Returns:
        The new Swipe
    """
    if decision not in DECISIONS:
        raise ValueError(f"Unknown decision: {decision}")

    async with user_locks.lock_for(user_id):
        async with transaction(db):
            job = await db.get(Job, job_id)
            if job is None:
                raise NotFoundError("job not found")

            swipe = await ledger.create_swipe(db, user_id, job_id, decision, verdict)
            if decision == "like":
                await ledger.create_application(db, user_id, job_id, swipe.id)

    record_swipe_decision(decision)
    logger.info(f"User {user_id} swiped {decision} on job {job_id} (swipe {swipe.id})")
    return swipe


async def undo_last_decision(db: AsyncSession, user_id: int) -> int:
    """
    Reverse the user's most recent live swipe.

    Raises:
        NotFoundError: If there is no live swipe to undo (nothing is written)

    Returns:
        Id of the undone swipe
    """
    async with user_locks.lock_for(user_id):
        async with transaction(db):
            swipe = await ledger.get_latest_active_swipe(db, user_id)
            if swipe is None:
                raise NotFoundError("no swipe to undo")

            ledger.mark_swipe_undone(swipe)
            failed = await ledger.fail_applications_for_swipe(db, swipe.id)

    record_swipe_undo()
    logger.info(f"User {user_id} undid swipe {swipe.id} ({failed} application(s) failed)")
    return swipe.id


async def list_swipe_history(
    db: AsyncSession,
    user_id: int,
    decision: Optional[str] = None,
) -> List[Tuple[Swipe, Optional[Job]]]:
    """Live (non-undone) swipes, newest first, optionally filtered by decision."""
    if decision is not None and decision not in DECISIONS:
        raise ValueError(f"Unknown decision: {decision}")
    return await ledger.get_swipe_history(db, user_id, decision)


async def list_applications(
    db: AsyncSession,
    user_id: int,
) -> List[Tuple[Application, Optional[Job]]]:
    return await ledger.get_application_history(db, user_id)


async def update_application_status(
    db: AsyncSession,
    application_id: int,
    status: str,
    failure_reason: Optional[str] = None,
) -> Application:
    """
    Record an external fulfilment outcome for an application.

    Raises:
        ValueError: If status is not a known value
        NotFoundError: If the application does not exist
        ConflictError: If the application is not queued (failed and
            submitted are final)
    """
    if status not in APPLICATION_STATUSES:
        raise ValueError(f"Unknown application status: {status}")

    async with transaction(db):
        application = await ledger.get_application(db, application_id)
        if application is None:
            raise NotFoundError("application not found")
        if not ledger.can_transition(application.status, status):
            raise ConflictError(
                f"cannot move application from {application.status} to {status}"
            )
        ledger.apply_application_status(application, status, failure_reason)

    await db.refresh(application)
    logger.info(f"Application {application_id} moved to {status}")
    return application
