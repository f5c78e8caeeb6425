from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import get_db
from jobswipe.models import User
from jobswipe.schemas import ApplicationResponse, ApplicationStatusUpdate, JobCreate, JobResponse
from jobswipe.auth import require_admin
from jobswipe.services import feed
from jobswipe.services.jobs import DEFAULT_LIST_LIMIT, create_job, get_job, list_jobs

router = APIRouter()


@router.post("/jobs", response_model=JobResponse, status_code=201)
async def create_job_posting(
    job: JobCreate,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
):
    created = await create_job(db, job.model_dump())
    return JobResponse.model_validate(created)


@router.get("/jobs", response_model=list[JobResponse])
async def list_job_postings(
    limit: int = Query(DEFAULT_LIST_LIMIT, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
):
    jobs = await list_jobs(db, limit)
    return [JobResponse.model_validate(job) for job in jobs]


@router.get("/jobs/{job_id}", response_model=JobResponse)
async def get_job_posting(
    job_id: int,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
):
    job = await get_job(db, job_id)

    if not job:
        raise HTTPException(status_code=404, detail="Job not found")

    return JobResponse.model_validate(job)


@router.patch("/applications/{application_id}", response_model=ApplicationResponse)
async def update_application(
    application_id: int,
    update: ApplicationStatusUpdate,
    db: AsyncSession = Depends(get_db),
    _: User = Depends(require_admin),
):
    application = await feed.update_application_status(
        db, application_id, update.status, update.failure_reason
    )
    return ApplicationResponse.model_validate(application)
