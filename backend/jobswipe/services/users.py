from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.config import get_settings
from jobswipe.database import transaction, utcnow
from jobswipe.models import User


async def get_user(db: AsyncSession, user_id: int) -> Optional[User]:
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def upsert_user(db: AsyncSession, email: str, name: Optional[str] = None) -> User:
    """
    Find or create the user for a login and refresh last_signed_in.

    Emails listed in settings.admin_emails are given the admin role.
    """
    email = email.strip().lower()
    admin_emails = {e.strip().lower() for e in get_settings().admin_emails}

    async with transaction(db):
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        if user is None:
            user = User(email=email)
            db.add(user)

        if name is not None:
            user.name = name
        if email in admin_emails:
            user.role = "admin"
        user.last_signed_in = utcnow()

    await db.refresh(user)
    return user
