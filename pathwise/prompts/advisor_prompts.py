import json
from typing import Any, Dict

JOBS_PROMPT = """
You are a job recommendation assistant.
Based on this user's skills and career paths, suggest 5 relevant job or internship opportunities.
Return ONLY JSON that adheres to the provided schema. Do not include any markdown formatting.

User profile:
{profile}
"""

RESOURCES_PROMPT = """
You are a learning resource assistant.
Given this user's skills and career paths, recommend 5 to 7 high-quality learning resources
such as websites, YouTube videos, online courses, or articles to help them improve or explore new topics.
Include only relevant and credible resources with short descriptions.

User data:
{profile}

Return only valid JSON following the schema.
"""

SKILLS_PROMPT = """
You are a career and learning advisor AI.
The following user has these skills and career goals.
Provide a detailed skill growth analysis as structured JSON following the given schema.

User profile:
{profile}

Respond ONLY with valid JSON that matches the schema.
No markdown or explanations.
"""

RESUME_PROMPT = """
You are a professional resume writing assistant.
Improve this user's resume by rewriting it in a professional, clear, and concise tone.
Enhance their summary, skills, and experience phrasing.
Also include a short "Career Highlights" section.

User data:
{profile}

Return only valid JSON following the schema.
"""


def _render(template: str, data: Dict[str, Any]) -> str:
    return template.format(profile=json.dumps(data, indent=2, ensure_ascii=False))


def jobs_prompt(snapshot: Dict[str, Any]) -> str:
    return _render(JOBS_PROMPT, snapshot)


def resources_prompt(snapshot: Dict[str, Any]) -> str:
    return _render(RESOURCES_PROMPT, snapshot)


def skills_prompt(snapshot: Dict[str, Any]) -> str:
    return _render(SKILLS_PROMPT, snapshot)


def resume_prompt(resume_data: Dict[str, Any]) -> str:
    return _render(RESUME_PROMPT, resume_data)
