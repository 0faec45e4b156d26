from fastapi import APIRouter

from pathwise.api.routes import advisor, auth, profile

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["authentication"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(advisor.router, tags=["advisor"])
