from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import get_db
from jobswipe.models import User
from jobswipe.schemas import DecisionRequest, DecisionResponse, JobSummary, NextJobResponse, UndoResponse
from jobswipe.auth import get_current_user
from jobswipe.services import feed
from jobswipe.services.qualification import QualificationOracle, get_oracle

router = APIRouter()


@router.get("/next", response_model=NextJobResponse)
async def next_job(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    oracle: QualificationOracle = Depends(get_oracle),
):
    result = await feed.get_next_job(db, user.id, oracle)
    if result.exhausted:
        return NextJobResponse(job=None, verdict=None)
    return NextJobResponse(
        job=JobSummary.model_validate(result.job),
        verdict=result.verdict,
    )


@router.post("/decision", response_model=DecisionResponse)
async def decision(
    request: DecisionRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    await feed.record_decision(db, user.id, request.job_id, request.decision, request.verdict)
    return DecisionResponse(ok=True)


@router.post("/undo", response_model=UndoResponse)
async def undo(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    swipe_id = await feed.undo_last_decision(db, user.id)
    return UndoResponse(ok=True, swipe_id=swipe_id)
