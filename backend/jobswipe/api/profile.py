from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from jobswipe.database import get_db
from jobswipe.models import User
from jobswipe.schemas import ProfileBundle, ProfileResponse, ProfileUpdate, ResumeResponse, ResumeUpload
from jobswipe.auth import get_current_user
from jobswipe.services.profiles import get_profile, get_resume, upsert_profile, upsert_resume

router = APIRouter()


@router.get("", response_model=ProfileBundle)
async def read_profile(
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    profile = await get_profile(db, user.id)
    resume = await get_resume(db, user.id)
    return ProfileBundle(
        profile=ProfileResponse.model_validate(profile) if profile else None,
        resume=ResumeResponse.model_validate(resume) if resume else None,
    )


@router.put("", response_model=ProfileResponse)
async def update_profile(
    update: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    update_data = update.model_dump(exclude_unset=True)
    profile = await upsert_profile(db, user.id, update_data)
    return ProfileResponse.model_validate(profile)


@router.put("/resume", response_model=ResumeResponse)
async def update_resume(
    upload: ResumeUpload,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
):
    resume = await upsert_resume(db, user.id, upload.model_dump())
    return ResumeResponse.model_validate(resume)
