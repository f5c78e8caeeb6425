"""
Preference Filter - Narrows the job catalogue to the user's next candidate

Filters (all AND'd together, each skipped when the profile leaves it unset):
    - Already decided: jobs with a non-undone swipe by the user are excluded
    - Location: job city == profile city OR job country == profile country
    - Salary floor: job salary_max is NULL or >= profile min_salary
    - Salary ceiling: job salary_min is NULL or <= profile max_salary
    - Work mode: job work_mode is NULL or in profile work_mode_preferences

Missing job data never disqualifies: a job with no city and no country,
no salary bounds, or no work mode passes the matching filter.

Selection Order:
    Oldest job first (created_at ASC, id ASC). No ranking happens here;
    the oracle verdict is explanatory only.
"""

from typing import List, Optional
from sqlalchemy import and_, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement
from jobswipe.models import Job, Profile, Swipe


def decided_job_ids_query(user_id: int):
    """Subquery of job ids the user has a live (non-undone) swipe on."""
    return select(Swipe.job_id).where(Swipe.user_id == user_id, Swipe.undone_at.is_(None))


def location_condition(profile: Profile) -> Optional[ColumnElement]:
    matches = []
    if profile.city:
        matches.append(Job.city == profile.city)
    if profile.country:
        matches.append(Job.country == profile.country)
    if not matches:
        return None

    unknown_location = and_(Job.city.is_(None), Job.country.is_(None))
    return or_(*matches, unknown_location)


def salary_conditions(profile: Profile) -> List[ColumnElement]:
    conditions = []
    if profile.min_salary is not None:
        conditions.append(
            or_(Job.salary_max.is_(None), Job.salary_max >= profile.min_salary)
        )
    if profile.max_salary is not None:
        conditions.append(
            or_(Job.salary_min.is_(None), Job.salary_min <= profile.max_salary)
        )
    return conditions


def work_mode_condition(profile: Profile) -> Optional[ColumnElement]:
    preferences = profile.work_mode_preferences or []
    if not preferences:
        return None
    return or_(Job.work_mode.is_(None), Job.work_mode.in_(list(preferences)))


def build_preference_conditions(profile: Optional[Profile]) -> List[ColumnElement]:
    """
    Translate a profile into SQL filter conditions on Job.

    Args:
        profile: The user's profile, or None for "no preferences"

    Returns:
        List of conditions to AND together (empty when nothing is set)
    """
    if profile is None:
        return []

    conditions = []
    location = location_condition(profile)
    if location is not None:
        conditions.append(location)
    conditions.extend(salary_conditions(profile))
    work_mode = work_mode_condition(profile)
    if work_mode is not None:
        conditions.append(work_mode)
    return conditions


def eligible_jobs_query(user_id: int, profile: Optional[Profile]):
    """Select statement for every job the user could be offered, in feed order."""
    query = select(Job).where(Job.id.not_in(decided_job_ids_query(user_id)))
    for condition in build_preference_conditions(profile):
        query = query.where(condition)
    return query.order_by(Job.created_at.asc(), Job.id.asc())


async def select_next_job(
    db: AsyncSession,
    user_id: int,
    profile: Optional[Profile],
) -> Optional[Job]:
    """
    Pick the next job to show in the user's feed.

    Returns:
        The first eligible Job, or None when the feed is exhausted
    """
    result = await db.execute(eligible_jobs_query(user_id, profile).limit(1))
    return result.scalars().first()
