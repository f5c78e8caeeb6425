"""
Job Catalogue - Admin creation and lookup of postings

The swipe feed never writes jobs; these helpers back the admin routes
and the seed script.
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import transaction
from jobswipe.models import Job

DEFAULT_LIST_LIMIT = 100


async def create_job(db: AsyncSession, data: Dict[str, Any]) -> Job:
    job = Job(**data)
    async with transaction(db):
        db.add(job)
    await db.refresh(job)
    return job


async def get_job(db: AsyncSession, job_id: int) -> Optional[Job]:
    result = await db.execute(select(Job).where(Job.id == job_id))
    return result.scalar_one_or_none()


async def list_jobs(db: AsyncSession, limit: int = DEFAULT_LIST_LIMIT) -> List[Job]:
    """Newest jobs first."""
    result = await db.execute(
        select(Job).order_by(Job.created_at.desc(), Job.id.desc()).limit(limit)
    )
    return list(result.scalars().all())


async def get_existing_external_ids(db: AsyncSession, external_ids: List[str]) -> set:
    """Batch lookup of which external ids are already stored."""
    if not external_ids:
        return set()
    result = await db.execute(select(Job.external_id).where(Job.external_id.in_(external_ids)))
    return {row[0] for row in result.all()}
