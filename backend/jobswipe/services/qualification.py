"""
Qualification Oracle - Candidate/Job Fit Verdicts

Produces a {qualified, reason} verdict for a (resume text, profile, job)
triple. The verdict is shown next to the job card and snapshotted into the
swipe; it never affects which job is offered or whether a swipe is allowed.

Provider Options:
    - OpenAI: Chat completion constrained to a strict JSON schema
    - Skills: Offline heuristic comparing profile skills with the job text

Failure Policy (assess_qualification):
    - No resume text → "resume required for matching", oracle not called
    - Timeout / transport error / malformed reply → technical-error
      fallback verdict; the failure is logged and counted, never raised

Key Classes:
    - QualificationOracle: Abstract interface for all providers
    - OpenAIQualificationOracle: LLM-backed provider
    - SkillOverlapOracle: Keyword heuristic provider
    - get_oracle(): Factory returning the configured shared instance
"""

import asyncio
import json
import logging
import re
import time
from abc import ABC, abstractmethod
from typing import Any, List, Optional

from pydantic import ValidationError

from jobswipe.config import get_settings
from jobswipe.exceptions import UpstreamServiceError
from jobswipe.middleware.metrics import record_oracle_fallback, record_oracle_latency
from jobswipe.models import Job, Profile
from jobswipe.schemas import Verdict

logger = logging.getLogger(__name__)

RESUME_REQUIRED_REASON = "resume required for matching"
TECHNICAL_ERROR_REASON = "unable to determine fit due to technical error"

RESUME_REQUIRED_VERDICT = Verdict(qualified=False, reason=RESUME_REQUIRED_REASON)
FALLBACK_VERDICT = Verdict(qualified=False, reason=TECHNICAL_ERROR_REASON)

SYSTEM_PROMPT = """You are an expert job matching assistant. Decide whether a candidate is qualified for a specific job based on their resume, profile and the job requirements.

Return ONLY a JSON object with this exact structure:
{"qualified": true or false, "reason": "A brief 1-2 sentence explanation"}

Focus on:
- Required skills and experience match
- Years of experience alignment
- Location compatibility
- Salary expectations alignment
- Work mode preferences"""

VERDICT_RESPONSE_FORMAT = {
    "type": "json_schema",
    "json_schema": {
        "name": "job_match_result",
        "strict": True,
        "schema": {
            "type": "object",
            "properties": {
                "qualified": {
                    "type": "boolean",
                    "description": "Whether the candidate is qualified for the job",
                },
                "reason": {
                    "type": "string",
                    "description": "Brief explanation of the qualification decision",
                },
            },
            "required": ["qualified", "reason"],
            "additionalProperties": False,
        },
    },
}

# Resume text sent to the LLM is capped to keep prompts bounded
MAX_RESUME_CHARS = 6000


def _or(value: Any, default: str) -> str:
    if value is None or value == "" or value == []:
        return default
    if isinstance(value, list):
        return ", ".join(str(v) for v in value)
    return str(value)


def build_user_prompt(resume_text: str, profile: Profile, job: Job) -> str:
    """Render the candidate, resume and job into the oracle's user message."""
    return f"""Candidate Profile:
- Name: {_or(profile.full_name, 'Not provided')}
- Location: {_or(profile.city, 'Unknown')}, {_or(profile.country, 'Unknown')}
- Experience: {profile.experience_years or 0} years
- Current Role: {_or(profile.current_role_title, 'Not specified')}
- Desired Role: {_or(profile.desired_title, 'Not specified')}
- Skills: {_or(profile.skills, 'Not specified')}
- Salary Range: {profile.currency or 'USD'} {profile.min_salary or 0} - {profile.max_salary or 0}
- Work Mode Preferences: {_or(profile.work_mode_preferences, 'Any')}

Resume:
{resume_text[:MAX_RESUME_CHARS]}

Job Details:
- Title: {job.title}
- Company: {job.company_name}
- Location: {_or(job.city, 'Unknown')}, {_or(job.country, 'Unknown')}
- Salary: {job.currency or 'USD'} {job.salary_min or 0} - {job.salary_max or 0}
- Work Mode: {_or(job.work_mode, 'Not specified')}
- Employment Type: {_or(job.employment_type, 'full-time')}
- Summary: {_or(job.summary, 'Not provided')}
- Description: {_or(job.description, 'Not provided')}

Is this candidate qualified for this job?"""


def parse_verdict(content: Optional[str]) -> Verdict:
    """
    Parse and validate a raw oracle reply.

    Raises:
        UpstreamServiceError: If the reply is empty, not JSON, or has the wrong shape
    """
    if not content or not content.strip():
        raise UpstreamServiceError("empty response from qualification oracle")

    content = content.strip()
    # Handle markdown code blocks
    if content.startswith("```"):
        lines = content.split("\n")
        content = "\n".join(lines[1:-1])

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise UpstreamServiceError(f"oracle reply is not JSON: {content[:100]}") from e

    if not isinstance(data, dict):
        raise UpstreamServiceError("oracle reply has an invalid shape")

    try:
        verdict = Verdict.model_validate(data, strict=True)
    except ValidationError as e:
        raise UpstreamServiceError("oracle reply has an invalid shape") from e

    if not verdict.reason.strip():
        raise UpstreamServiceError("oracle reply has an empty reason")
    return verdict


class QualificationOracle(ABC):
    """
    Abstract base class for qualification providers.

    Implementations raise UpstreamServiceError (or let any other error
    escape) on failure; the caller owns fallback handling.
    """

    name: str = "unknown"

    @abstractmethod
    async def score(self, resume_text: str, profile: Profile, job: Job) -> Verdict:
        """
        Judge whether the candidate fits the job.

        Args:
            resume_text: Extracted resume body (non-empty)
            profile: Candidate profile
            job: Job being offered

        Returns:
            Verdict with a short explanation
        """
        pass


class OpenAIQualificationOracle(QualificationOracle):
    """
    LLM-backed oracle using OpenAI chat completions.

    Attributes:
        client: AsyncOpenAI client
        model: Chat model name (e.g. gpt-4o-mini)
    """

    name = "openai"

    def __init__(self, openai_client: Any, model: str = "gpt-4o-mini") -> None:
        self.client = openai_client
        self.model = model

    async def score(self, resume_text: str, profile: Profile, job: Job) -> Verdict:
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_user_prompt(resume_text, profile, job)},
                ],
                response_format=VERDICT_RESPONSE_FORMAT,
                temperature=0.1,
                max_tokens=300,
            )
        except Exception as e:
            raise UpstreamServiceError(f"OpenAI request failed: {e}") from e

        if not response.choices:
            raise UpstreamServiceError("no choices in OpenAI response")
        return parse_verdict(response.choices[0].message.content)


class SkillOverlapOracle(QualificationOracle):
    """
    Offline heuristic: counts profile skills mentioned in the job posting.

    A candidate is qualified when at least `min_matches` of their skills
    (or all of them, if they list fewer) appear in the job text.
    """

    name = "skills"

    def __init__(self, min_matches: int = 2) -> None:
        self.min_matches = min_matches

    @staticmethod
    def matched_skills(skills: List[str], text: str) -> List[str]:
        text_lower = text.lower()
        found = []
        for skill in skills:
            skill_clean = skill.strip().lower()
            if not skill_clean:
                continue
            pattern = r'(?<!\w)' + re.escape(skill_clean) + r'(?!\w)'
            if re.search(pattern, text_lower):
                found.append(skill.strip())
        return found

    async def score(self, resume_text: str, profile: Profile, job: Job) -> Verdict:
        skills = [s for s in (profile.skills or []) if s and s.strip()]
        if not skills:
            return Verdict(qualified=False, reason="No skills listed on profile to compare against this job.")

        job_text = " ".join(filter(None, [job.title, job.summary, job.description]))
        found = self.matched_skills(skills, job_text)
        required = min(self.min_matches, len(skills))

        if len(found) >= required:
            return Verdict(
                qualified=True,
                reason=f"Job mentions {len(found)} of your skills: {', '.join(found[:5])}.",
            )
        if found:
            return Verdict(
                qualified=False,
                reason=f"Only {', '.join(found)} from your skills appear in this job.",
            )
        return Verdict(qualified=False, reason="None of your listed skills appear in this job.")


async def assess_qualification(
    oracle: QualificationOracle,
    resume_text: Optional[str],
    profile: Profile,
    job: Job,
    timeout: Optional[float] = None,
) -> Verdict:
    """
    Get a verdict for the feed, never raising.

    Args:
        oracle: Provider to consult
        resume_text: Extracted resume text, may be None/blank
        profile: Candidate profile
        job: Job being offered
        timeout: Seconds to wait for the oracle (defaults to settings)

    Returns:
        The oracle's verdict, or one of the fixed fallback verdicts
    """
    if not resume_text or not resume_text.strip():
        return RESUME_REQUIRED_VERDICT

    if timeout is None:
        timeout = get_settings().oracle_timeout_seconds

    start_time = time.perf_counter()
    try:
        return await asyncio.wait_for(oracle.score(resume_text, profile, job), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Qualification oracle '{oracle.name}' timed out after {timeout}s for job {job.id}")
        record_oracle_fallback(oracle.name, "timeout")
    except UpstreamServiceError as e:
        logger.warning(f"Qualification oracle '{oracle.name}' failed for job {job.id}: {e.message}")
        record_oracle_fallback(oracle.name, "upstream")
    except Exception as e:
        logger.exception(f"Unexpected qualification oracle error for job {job.id}: {e}")
        record_oracle_fallback(oracle.name, "unexpected")
    finally:
        record_oracle_latency(oracle.name, time.perf_counter() - start_time)
    return FALLBACK_VERDICT


# ==============================================================================
# Singleton Pattern for Dependency Injection
# ==============================================================================

_oracle: Optional[QualificationOracle] = None


def get_oracle() -> QualificationOracle:
    """
    Get the shared oracle instance for the configured provider.

    Falls back to the skills heuristic when OpenAI is selected but no
    API key is configured.
    """
    global _oracle
    if _oracle is None:
        settings = get_settings()
        provider = settings.oracle_provider.lower()

        if provider == "openai" and settings.openai_api_key:
            from openai import AsyncOpenAI

            client = AsyncOpenAI(api_key=settings.openai_api_key)
            _oracle = OpenAIQualificationOracle(openai_client=client, model=settings.openai_model)
        else:
            if provider == "openai":
                logger.warning("OPENAI_API_KEY not set, using skills heuristic oracle")
            elif provider != "skills":
                logger.warning(f"Unknown oracle provider '{provider}', using skills heuristic oracle")
            _oracle = SkillOverlapOracle()
        logger.info(f"Created singleton qualification oracle: {_oracle.name}")
    return _oracle
