from typing import Any, Dict, Optional
from loguru import logger

from pathwise.core.exceptions import NotFoundError
from pathwise.models.user import User
from pathwise.prompts import advisor_prompts
from pathwise.schemas.advisor import (
    EnhancedResume,
    JobRecommendations,
    LearningResources,
    SkillAnalysis,
)
from pathwise.services.oracle_service import Oracle, ask_oracle

INSUFFICIENT_PROFILE = "insufficient_profile"
NO_USER_DATA = "no_user_data"


def profile_snapshot(user: User) -> Dict[str, Any]:
    """The part of a profile that is shared with the oracle."""
    return {
        "name": user.name,
        "interests": list(user.interests or []),
        "skills": [{"name": s.name, "level": s.level} for s in user.skills],
        "career_paths": [{"title": c.title, "summary": c.summary} for c in user.career_paths],
    }


def resume_is_complete(user: User) -> bool:
    resume = user.resume
    return bool(resume and resume.summary and resume.education and resume.experience)


class AdvisorService:
    def __init__(self, oracle: Oracle):
        self.oracle = oracle

    async def recommend_jobs(self, user: User) -> Dict[str, Any]:
        if not user.skills or not user.career_paths:
            return {"message": INSUFFICIENT_PROFILE}

        result = await ask_oracle(
            self.oracle, advisor_prompts.jobs_prompt(profile_snapshot(user)), JobRecommendations
        )
        logger.info(f"Generated {len(result.jobs)} job recommendations for user {user.id}")
        return result.model_dump()

    async def recommend_resources(self, user: User) -> Dict[str, Any]:
        if not user.skills:
            return {"message": NO_USER_DATA}

        result = await ask_oracle(
            self.oracle, advisor_prompts.resources_prompt(profile_snapshot(user)), LearningResources
        )
        logger.info(f"Generated {len(result.resources)} learning resources for user {user.id}")
        return result.model_dump()

    async def analyze_skills(self, user: User) -> SkillAnalysis:
        if not user.skills:
            raise NotFoundError("No skills found for this user.")

        return await ask_oracle(
            self.oracle, advisor_prompts.skills_prompt(profile_snapshot(user)), SkillAnalysis
        )

    async def enhance_resume(self, user: User) -> Optional[EnhancedResume]:
        """Rewrite the stored resume, or return None when it is incomplete."""
        if not resume_is_complete(user):
            return None

        resume = user.resume
        resume_data = {
            "name": user.name,
            "email": user.email,
            "summary": resume.summary,
            "education": resume.education,
            "experience": resume.experience,
            "skills": [f"{s.name} ({s.level})" for s in user.skills],
            "interests": [c.title for c in user.career_paths],
        }
        return await ask_oracle(self.oracle, advisor_prompts.resume_prompt(resume_data), EnhancedResume)
