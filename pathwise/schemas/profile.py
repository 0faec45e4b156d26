from typing import List, Optional
from pydantic import BaseModel, Field

from pathwise.schemas.user import UserResponse


class SkillBase(BaseModel):
    name: str
    level: str = ""

    class Config:
        from_attributes = True


class CareerPathBase(BaseModel):
    title: str
    summary: str = ""

    class Config:
        from_attributes = True


class ResumeBase(BaseModel):
    summary: str = ""
    education: str = ""
    experience: str = ""

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    user_id: str = Field(alias="userId", min_length=1)
    # None leaves the stored interests unchanged
    interests: Optional[List[str]] = None
    skills: List[SkillBase] = []
    career_paths: List[CareerPathBase] = Field(default=[], alias="careerPaths")
    resume: Optional[ResumeBase] = None

    class Config:
        populate_by_name = True


class ProfileResponse(UserResponse):
    skills: List[SkillBase] = []
    career_paths: List[CareerPathBase] = Field(default=[], alias="careerPaths")
    resume: Optional[ResumeBase] = None


class ProfileSaveResponse(BaseModel):
    success: bool = True
    user: UserResponse
