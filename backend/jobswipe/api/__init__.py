from fastapi import APIRouter
from jobswipe.api import admin, auth, history, profile, swipe

api_router = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(profile.router, prefix="/profile", tags=["profile"])
api_router.include_router(swipe.router, prefix="/swipe", tags=["swipe"])
api_router.include_router(history.router, prefix="/history", tags=["history"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
