"""
Profile & Resume Store

Both records are one per user and are only ever upserted: an update
rewrites the existing row in place.
"""

from typing import Any, Dict, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import transaction, utcnow
from jobswipe.models import Profile, Resume

# Non-nullable profile columns: an explicit null resets them to these
PROFILE_DEFAULTS = {
    "currency": "USD",
    "work_mode_preferences": [],
    "perks_preferences": {},
    "skills": [],
}


async def get_profile(db: AsyncSession, user_id: int) -> Optional[Profile]:
    result = await db.execute(select(Profile).where(Profile.user_id == user_id))
    return result.scalar_one_or_none()


async def get_resume(db: AsyncSession, user_id: int) -> Optional[Resume]:
    result = await db.execute(select(Resume).where(Resume.user_id == user_id))
    return result.scalar_one_or_none()


async def upsert_profile(db: AsyncSession, user_id: int, data: Dict[str, Any]) -> Profile:
    """
    Create the user's profile or update the supplied fields.

    Args:
        user_id: Owner of the profile
        data: Field values to set (unset fields are left untouched)
    """
    async with transaction(db):
        profile = await get_profile(db, user_id)
        if profile is None:
            profile = Profile(user_id=user_id)
            db.add(profile)

        for field, value in data.items():
            if value is None and field in PROFILE_DEFAULTS:
                value = PROFILE_DEFAULTS[field]
            setattr(profile, field, value)

    await db.refresh(profile)
    return profile


async def upsert_resume(db: AsyncSession, user_id: int, data: Dict[str, Any]) -> Resume:
    """
    Replace the user's resume metadata and extracted text.

    parsed_at is stamped when text is supplied and cleared otherwise.
    """
    async with transaction(db):
        resume = await get_resume(db, user_id)
        if resume is None:
            resume = Resume(user_id=user_id)
            db.add(resume)

        for field, value in data.items():
            setattr(resume, field, value)
        resume.parsed_at = utcnow() if data.get("parsed_text") else None
        if not data.get("parsed_text"):
            resume.parsed_text = None

    await db.refresh(resume)
    return resume
