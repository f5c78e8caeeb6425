"""
Shared fixtures: in-memory database, seeded users/jobs/profiles and a
controllable qualification oracle.
"""

import asyncio
from typing import List, Optional

import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import jobswipe.models  # noqa: F401
from jobswipe.database import Base, enable_sqlite_foreign_keys
from jobswipe.models import Job, Profile, Resume, User
from jobswipe.schemas import Verdict
from jobswipe.services.qualification import QualificationOracle


class StubOracle(QualificationOracle):
    """Oracle returning a fixed verdict, raising, or stalling on demand."""

    name = "stub"

    def __init__(
        self,
        verdict: Optional[Verdict] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ) -> None:
        self.verdict = verdict or Verdict(qualified=True, reason="Strong skills overlap.")
        self.error = error
        self.delay = delay
        self.calls: List[int] = []

    async def score(self, resume_text, profile, job) -> Verdict:
        self.calls.append(job.id)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.verdict


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def oracle():
    return StubOracle()


async def add_user(db: AsyncSession, email: str = "seeker@example.com", role: str = "user") -> User:
    user = User(email=email, role=role)
    db.add(user)
    await db.commit()
    return user


async def add_job(db: AsyncSession, **overrides) -> Job:
    data = {
        "title": "Software Engineer",
        "company_name": "Acme",
        "perks": {},
    }
    data.update(overrides)
    job = Job(**data)
    db.add(job)
    await db.commit()
    return job


async def add_profile(db: AsyncSession, user_id: int, **overrides) -> Profile:
    data = {
        "work_mode_preferences": [],
        "perks_preferences": {},
        "skills": [],
    }
    data.update(overrides)
    profile = Profile(user_id=user_id, **data)
    db.add(profile)
    await db.commit()
    return profile


async def add_resume(db: AsyncSession, user_id: int, parsed_text: Optional[str]) -> Resume:
    resume = Resume(
        user_id=user_id,
        file_url="https://files.example.com/resume.pdf",
        file_key=f"resumes/{user_id}/resume.pdf",
        parsed_text=parsed_text,
    )
    db.add(resume)
    await db.commit()
    return resume


async def fetch_all(session_factory, model, *conditions):
    """Read rows through a fresh session so nothing comes from an identity map."""
    async with session_factory() as session:
        result = await session.execute(select(model).where(*conditions).order_by(model.id))
        return list(result.scalars().all())


@pytest.fixture
async def user(db):
    return await add_user(db)


@pytest.fixture
async def sf_profile(db, user):
    """San Francisco seeker: 100k-150k, remote or hybrid."""
    return await add_profile(
        db,
        user.id,
        city="San Francisco",
        country="USA",
        min_salary=100000,
        max_salary=150000,
        work_mode_preferences=["remote", "hybrid"],
        skills=["Python", "React"],
    )
