import asyncio
import json
from functools import wraps
from typing import Any, Dict, Optional, Protocol, Type, TypeVar

import openai
from loguru import logger
from openai import AsyncOpenAI
from pydantic import BaseModel, ValidationError

from pathwise.core.config import Settings, settings
from pathwise.core.exceptions import OracleOutputInvalidError, OracleUnavailableError

ModelT = TypeVar("ModelT", bound=BaseModel)

SYSTEM_PROMPT = (
    "You are a career guidance assistant. "
    "Reply with a single JSON document that follows the supplied schema and nothing else."
)


class Oracle(Protocol):
    """Prompt-in, JSON-text-out generative service."""

    async def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        ...


def with_timeout(timeout_seconds: float = 30):
    """
    Decorator that bounds an async call and reports a timeout as OracleUnavailableError.
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await asyncio.wait_for(func(*args, **kwargs), timeout=timeout_seconds)
            except asyncio.TimeoutError as e:
                raise OracleUnavailableError(
                    f"Operation timed out after {timeout_seconds} seconds") from e
        return wrapper
    return decorator


class OpenAIOracle:
    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key, base_url=base_url)

    @classmethod
    def from_settings(cls, config: Settings) -> "OpenAIOracle":
        return cls(
            api_key=config.OPENAI_API_KEY,
            model=config.AI_MODEL,
            base_url=config.OPENAI_BASE_URL,
        )

    @with_timeout(timeout_seconds=settings.ORACLE_TIMEOUT_SECONDS)
    async def generate(self, prompt: str, schema: Dict[str, Any]) -> str:
        logger.info(f"Sending request to model {self.model}")
        start_time = asyncio.get_event_loop().time()
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": schema.get("title", "response"),
                        "schema": schema,
                    },
                },
                temperature=0.3,
            )
        except openai.OpenAIError as e:
            raise OracleUnavailableError() from e
        end_time = asyncio.get_event_loop().time()
        logger.info(f"Model responded after {end_time - start_time:.2f} seconds")

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self):
        await self.client.close()


def strip_code_fence(text: str) -> str:
    """Remove a surrounding markdown code fence, if any."""
    result_text = text.strip()
    if result_text.startswith("```json"):
        result_text = result_text.replace("```json", "", 1)
        if "```" in result_text:
            result_text = result_text.split("```")[0]
    elif result_text.startswith("```"):
        result_text = result_text.replace("```", "", 1)
        if "```" in result_text:
            result_text = result_text.split("```")[0]
    return result_text.strip()


def parse_oracle_output(text: Optional[str], model: Type[ModelT]) -> ModelT:
    """Validate raw oracle text against ``model``.

    Empty text, text that is not JSON, and JSON that violates the schema all
    raise OracleOutputInvalidError.
    """
    if not text or not text.strip():
        raise OracleOutputInvalidError("AI response was empty")

    result_text = strip_code_fence(text)
    try:
        result_data = json.loads(result_text)
    except json.JSONDecodeError as e:
        logger.error(f"Could not decode AI response as JSON: {e}")
        logger.debug(f"Raw AI response: {result_text}")
        raise OracleOutputInvalidError() from e

    try:
        return model.model_validate(result_data)
    except ValidationError as e:
        logger.error(f"AI response does not match {model.__name__}: {e.error_count()} errors")
        logger.debug(f"Raw AI response: {result_text}")
        raise OracleOutputInvalidError() from e


async def ask_oracle(oracle: Oracle, prompt: str, model: Type[ModelT]) -> ModelT:
    """Send ``prompt`` with the JSON schema of ``model`` and return the validated result."""
    text = await oracle.generate(prompt, model.model_json_schema())
    return parse_oracle_output(text, model)
