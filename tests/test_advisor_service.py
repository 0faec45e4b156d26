"""
Tests for the advisor operations: profile gating before any oracle call and
what part of the profile reaches the prompt.
"""

import json

import pytest

from pathwise.core.exceptions import NotFoundError, OracleOutputInvalidError
from pathwise.models.user import CareerPath, Resume, Skill, User
from pathwise.schemas.advisor import EnhancedResume, SkillAnalysis
from pathwise.services.advisor_service import (
    INSUFFICIENT_PROFILE,
    NO_USER_DATA,
    AdvisorService,
    profile_snapshot,
    resume_is_complete,
)

JOBS_RESPONSE = {
    "jobs": [
        {
            "title": "Data Engineering Intern",
            "company": "Acme",
            "description": "Maintain ETL jobs",
            "requirements": "Python",
            "application_link": "https://example.com/jobs/1",
        }
    ]
}

RESOURCES_RESPONSE = {
    "resources": [
        {
            "type": "course",
            "title": "Designing Data Pipelines",
            "link": "https://example.com/course",
            "description": "Batch and streaming basics",
        }
    ]
}

SKILLS_RESPONSE = {
    "summary": "Solid foundation in Python.",
    "skills_analysis": [
        {
            "skill_name": "Python",
            "current_level": "Advanced",
            "strengths": ["Idiomatic code"],
            "improvements": ["Packaging"],
            "recommended_learning_paths": ["Publish a library"],
        }
    ],
    "suggested_next_skills": ["Airflow"],
}

RESUME_RESPONSE = {
    "summary": "Data-minded engineer.",
    "education": "BSc Mathematics",
    "experience": "Three years building analytics tooling.",
    "skills": ["Python", "SQL"],
    "highlights": "Shipped the first difference engine.",
}


def build_user(db, skills=True, career_paths=True, resume=True):
    user = User(
        email="ada@example.com",
        name="Ada Lovelace",
        hashed_password="$2b$10$secret-hash-value",
        interests=["mathematics"],
    )
    if skills:
        user.skills = [
            Skill(name="Python", level="advanced", position=0),
            Skill(name="SQL", level="intermediate", position=1),
        ]
    if career_paths:
        user.career_paths = [CareerPath(title="Data Engineer", summary="Pipelines", position=0)]
    if resume:
        user.resume = Resume(summary="Engineer", education="BSc Mathematics", experience="3 years")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def advisor(fake_oracle):
    return AdvisorService(fake_oracle)


def test_snapshot_leaves_out_credentials(db):
    user = build_user(db)
    snapshot = profile_snapshot(user)

    assert set(snapshot) == {"name", "interests", "skills", "career_paths"}
    assert snapshot["skills"][0] == {"name": "Python", "level": "advanced"}
    assert "ada@example.com" not in json.dumps(snapshot)


@pytest.mark.parametrize(
    "fields,expected",
    [
        ({"summary": "s", "education": "e", "experience": "x"}, True),
        ({"summary": "", "education": "e", "experience": "x"}, False),
        ({"summary": "s", "education": "e", "experience": ""}, False),
    ],
)
def test_resume_completeness(fields, expected):
    user = User(name="Ada", email="ada@example.com")
    user.resume = Resume(**fields)
    assert resume_is_complete(user) is expected


def test_missing_resume_is_incomplete():
    assert resume_is_complete(User(name="Ada", email="ada@example.com")) is False


class TestRecommendJobs:
    @pytest.mark.asyncio
    async def test_requires_skills(self, db, advisor, fake_oracle):
        user = build_user(db, skills=False)
        assert await advisor.recommend_jobs(user) == {"message": INSUFFICIENT_PROFILE}
        assert fake_oracle.calls == []

    @pytest.mark.asyncio
    async def test_requires_career_paths(self, db, advisor, fake_oracle):
        user = build_user(db, career_paths=False)
        assert await advisor.recommend_jobs(user) == {"message": INSUFFICIENT_PROFILE}
        assert fake_oracle.calls == []

    @pytest.mark.asyncio
    async def test_returns_validated_jobs(self, db, advisor, fake_oracle):
        user = build_user(db)
        fake_oracle.queue(json.dumps(JOBS_RESPONSE))

        result = await advisor.recommend_jobs(user)

        assert result["jobs"][0]["company"] == "Acme"
        assert result["jobs"][0]["deadline"] is None
        prompt = fake_oracle.calls[0]["prompt"]
        assert "Data Engineer" in prompt
        assert "ada@example.com" not in prompt
        assert "secret-hash-value" not in prompt

    @pytest.mark.asyncio
    async def test_invalid_output_is_reported(self, db, advisor, fake_oracle):
        user = build_user(db)
        fake_oracle.queue("Sorry, I cannot help with that.")
        with pytest.raises(OracleOutputInvalidError):
            await advisor.recommend_jobs(user)


class TestRecommendResources:
    @pytest.mark.asyncio
    async def test_requires_skills(self, db, advisor, fake_oracle):
        user = build_user(db, skills=False)
        assert await advisor.recommend_resources(user) == {"message": NO_USER_DATA}
        assert fake_oracle.calls == []

    @pytest.mark.asyncio
    async def test_career_paths_are_optional(self, db, advisor, fake_oracle):
        user = build_user(db, career_paths=False)
        fake_oracle.queue(json.dumps(RESOURCES_RESPONSE))

        result = await advisor.recommend_resources(user)
        assert result["resources"][0]["type"] == "course"


class TestAnalyzeSkills:
    @pytest.mark.asyncio
    async def test_no_skills_is_not_found(self, db, advisor, fake_oracle):
        user = build_user(db, skills=False)
        with pytest.raises(NotFoundError):
            await advisor.analyze_skills(user)
        assert fake_oracle.calls == []

    @pytest.mark.asyncio
    async def test_returns_analysis(self, db, advisor, fake_oracle):
        user = build_user(db)
        fake_oracle.queue(json.dumps(SKILLS_RESPONSE))

        result = await advisor.analyze_skills(user)

        assert isinstance(result, SkillAnalysis)
        assert result.skills_analysis[0].current_level == "Advanced"
        assert fake_oracle.calls[0]["schema"] == SkillAnalysis.model_json_schema()


class TestEnhanceResume:
    @pytest.mark.asyncio
    async def test_incomplete_resume_returns_none(self, db, advisor, fake_oracle):
        user = build_user(db, resume=False)
        assert await advisor.enhance_resume(user) is None
        assert fake_oracle.calls == []

    @pytest.mark.asyncio
    async def test_prompt_carries_resume_fields(self, db, advisor, fake_oracle):
        user = build_user(db)
        fake_oracle.queue(json.dumps(RESUME_RESPONSE))

        result = await advisor.enhance_resume(user)

        assert isinstance(result, EnhancedResume)
        assert result.highlights == "Shipped the first difference engine."
        prompt = fake_oracle.calls[0]["prompt"]
        assert "Python (advanced)" in prompt
        assert "BSc Mathematics" in prompt
        assert "secret-hash-value" not in prompt
