from typing import List, Literal, Optional
from pydantic import BaseModel, Field


class JobOpportunity(BaseModel):
    title: str
    company: str
    description: str
    requirements: str
    application_link: str = Field(description="A placeholder or realistic-looking URL.")
    deadline: Optional[str] = Field(default=None, description="A date or 'N/A'.")


class JobRecommendations(BaseModel):
    jobs: List[JobOpportunity] = Field(
        description="An array of 5 suggested job or internship opportunities."
    )


class LearningResource(BaseModel):
    type: str = Field(description="e.g. Website, Video, Article, Course")
    title: str
    link: str
    description: str


class LearningResources(BaseModel):
    resources: List[LearningResource]


class SkillBreakdown(BaseModel):
    skill_name: str
    current_level: Literal["Beginner", "Intermediate", "Advanced", "Expert"]
    strengths: List[str]
    improvements: List[str]
    recommended_learning_paths: List[str]


class SkillAnalysis(BaseModel):
    summary: str = Field(description="A short summary of the user's overall skill level.")
    skills_analysis: List[SkillBreakdown] = Field(
        description="Detailed breakdown of each skill with strengths and growth recommendations."
    )
    suggested_next_skills: List[str] = Field(description="New or related skills to learn next.")


class EnhancedResume(BaseModel):
    summary: str
    education: str
    experience: str
    skills: List[str]
    highlights: Optional[str] = None
