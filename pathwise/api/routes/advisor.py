import re
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from pathwise.api.deps import get_advisor_service, get_current_user
from pathwise.models.user import User
from pathwise.schemas.advisor import SkillAnalysis
from pathwise.services.advisor_service import AdvisorService
from pathwise.services.resume_renderer import render_resume_pdf

router = APIRouter()


def _attachment_filename(name: str) -> str:
    safe_name = re.sub(r"[^A-Za-z0-9_.-]+", "_", name).strip("_") or "user"
    return f"{safe_name}_Resume.pdf"


@router.get("/jobs")
async def get_jobs(
    current_user: User = Depends(get_current_user),
    advisor: AdvisorService = Depends(get_advisor_service),
) -> Any:
    """Suggest job or internship opportunities from skills and career paths."""
    return await advisor.recommend_jobs(current_user)


@router.get("/resources")
async def get_resources(
    current_user: User = Depends(get_current_user),
    advisor: AdvisorService = Depends(get_advisor_service),
) -> Any:
    """Recommend learning resources for the user's skills."""
    return await advisor.recommend_resources(current_user)


@router.get("/skills", response_model=SkillAnalysis)
async def get_skill_analysis(
    current_user: User = Depends(get_current_user),
    advisor: AdvisorService = Depends(get_advisor_service),
) -> Any:
    return await advisor.analyze_skills(current_user)


@router.get("/resume")
async def get_resume(
    current_user: User = Depends(get_current_user),
    advisor: AdvisorService = Depends(get_advisor_service),
) -> Any:
    """Generate an AI-enhanced resume and return it as a PDF attachment."""
    enhanced = await advisor.enhance_resume(current_user)
    if enhanced is None:
        return {"status": "incomplete"}

    pdf_bytes = render_resume_pdf(current_user.name, current_user.email, enhanced)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{_attachment_filename(current_user.name)}"'
        },
    )
