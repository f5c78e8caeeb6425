from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Literal, Optional
from jobswipe.database import get_db
from jobswipe.models import User
from jobswipe.schemas import (
    ApplicationHistoryItem,
    ApplicationResponse,
    JobSummary,
    SwipeHistoryItem,
    SwipeResponse,
)
from jobswipe.auth import get_current_user
from jobswipe.services import feed

router = APIRouter()


@router.get("/swipes", response_model=list[SwipeHistoryItem])
async def swipe_history(
    decision: Optional[Literal["like", "dislike"]] = Query(None),
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = await feed.list_swipe_history(db, user.id, decision)
    return [
        SwipeHistoryItem(
            swipe=SwipeResponse.model_validate(swipe),
            job=JobSummary.model_validate(job) if job else None,
        )
        for swipe, job in rows
    ]


@router.get("/applications", response_model=list[ApplicationHistoryItem])
async def application_history(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    rows = await feed.list_applications(db, user.id)
    return [
        ApplicationHistoryItem(
            application=ApplicationResponse.model_validate(application),
            job=JobSummary.model_validate(job) if job else None,
        )
        for application, job in rows
    ]
