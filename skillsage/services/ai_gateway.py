import asyncio
import json
import re
import uuid
from functools import wraps
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from loguru import logger
from openai import APIConnectionError, AsyncOpenAI, RateLimitError
from tenacity import AsyncRetrying, retry_if_exception_type, stop_after_attempt, wait_random_exponential

from skillsage.core.config import Settings
from skillsage.core.errors import ProviderUnavailable
from skillsage.core.policy import FailurePolicy, policy_for
from skillsage.prompts import career_prompts
from skillsage.prompts.prompt_factory import get_prompt_by_type
from skillsage.schemas.ai import (
    CareerAdvice,
    CourseRecommendations,
    CoverLetter,
    InterviewFeedback,
    PredictedQuestions,
    ResumeAnalysis,
    ResumeRoast,
    SkillGapAnalysis,
    TranslatedResume,
)
from skillsage.schemas.interview import InterviewType
from skillsage.schemas.job import JobListing
from skillsage.services import fallbacks
from skillsage.services.resume_parser import find_skills, match_keywords

T = TypeVar("T")

RETRYABLE_ERRORS = (APIConnectionError, RateLimitError, TimeoutError)

LANGUAGE_CODES = {
    "hindi": "hi",
    "tamil": "ta",
    "french": "fr",
    "spanish": "es",
    "german": "de",
    "chinese": "zh",
    "japanese": "ja",
    "arabic": "ar",
    "portuguese": "pt",
    "telugu": "te",
    "kannada": "kn",
    "malayalam": "ml",
    "marathi": "mr",
    "bengali": "bn",
}

_FENCE_RE = re.compile(r"```(?:json)?\s*|\s*```")


def with_timeout(func):
    """Bound a gateway coroutine by the instance's ``timeout_seconds``."""

    @wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await asyncio.wait_for(func(self, *args, **kwargs), timeout=self.timeout_seconds)
        except asyncio.TimeoutError:
            raise TimeoutError(f"Operation timed out after {self.timeout_seconds} seconds")

    return wrapper


def clean_json(text: str) -> str:
    """Strip Markdown code fences the model wraps around JSON."""
    return _FENCE_RE.sub("", text).strip()


def parse_json(text: str) -> Any:
    if not text or not text.strip():
        raise ValueError("Empty response from model")
    return json.loads(clean_json(text))


def parse_object(text: str) -> Dict[str, Any]:
    data = parse_json(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


class AIGateway:
    """Prompt builders and reply parsers around an OpenAI-compatible chat API.

    Each public method returns a validated response model. When the provider
    is missing, fails, or replies with something unparseable, the configured
    failure policy decides: ``DEGRADE`` logs and returns a canned default,
    ``FAIL_FAST`` raises ProviderUnavailable.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        model: str,
        timeout_seconds: float = 60.0,
        max_retries: int = 3,
        policy: Optional[FailurePolicy] = None,
    ):
        self.client = client
        self.model = model
        self.timeout_seconds = timeout_seconds
        self.max_retries = max(1, max_retries)
        self.policy = policy or policy_for("ai")

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def close(self) -> None:
        if self.client is not None:
            await self.client.close()

    @with_timeout
    async def _request(self, messages: List[Dict[str, str]], json_mode: bool) -> str:
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": messages,
            "temperature": 0.5 if json_mode else 0.7,
            "max_tokens": 4096 if json_mode else 2048,
        }
        if json_mode:
            params["response_format"] = {"type": "json_object"}
        completion = await self.client.chat.completions.create(**params)
        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def _complete(self, prompt: str, system_prompt: Optional[str] = None, json_mode: bool = False) -> str:
        if self.client is None:
            raise ProviderUnavailable("AI provider is not configured")

        messages = []
        if json_mode:
            system_prompt = (system_prompt or "") + career_prompts.JSON_ONLY
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.max_retries),
            wait=wait_random_exponential(min=1, max=20),
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            reraise=True,
        ):
            with attempt:
                return await self._request(messages, json_mode)

    async def _complete_json(self, prompt: str, system_prompt: str) -> Dict[str, Any]:
        return parse_object(await self._complete(prompt, system_prompt, json_mode=True))

    async def _guarded(self, operation: str, call: Callable[[], Awaitable[T]], default: Callable[[], T]) -> T:
        try:
            return await call()
        except Exception as e:
            if self.policy == FailurePolicy.FAIL_FAST:
                if isinstance(e, ProviderUnavailable):
                    raise
                raise ProviderUnavailable(f"AI provider failed during {operation}") from e
            logger.warning(f"AI {operation} degraded to default response: {type(e).__name__}: {str(e)}")
            return default()

    async def get_career_advice(self, message: str, user_context: Optional[Dict[str, Any]] = None) -> CareerAdvice:
        async def call() -> CareerAdvice:
            text = await self._complete(
                career_prompts.career_advice_prompt(message, user_context),
                career_prompts.MENTOR_SYSTEM_PROMPT,
            )
            if not text.strip():
                raise ValueError("Empty response from model")
            return CareerAdvice(message=text)

        return await self._guarded("career_advice", call, lambda: fallbacks.career_advice(message))

    async def analyze_interview_response(
        self, question: str, response: str, interview_type: InterviewType
    ) -> InterviewFeedback:
        evaluation = get_prompt_by_type(interview_type).get_prompt_for_answer_evaluation()

        async def call() -> InterviewFeedback:
            data = await self._complete_json(
                career_prompts.interview_feedback_prompt(evaluation, interview_type.value, question, response),
                "You are an interview assessment AI. Analyze the candidate's response and provide constructive feedback.",
            )
            return InterviewFeedback.model_validate(data)

        return await self._guarded("interview_feedback", call, fallbacks.interview_feedback)

    async def generate_interview_question(self, interview_type: InterviewType) -> str:
        prompt = get_prompt_by_type(interview_type)

        async def call() -> str:
            text = await self._complete(
                prompt.get_prompt_for_question_generation(),
                "You are an interview question generator. Generate realistic interview questions.",
            )
            if not text.strip():
                raise ValueError("Empty response from model")
            return text.strip()

        return await self._guarded("interview_question", call, lambda: prompt.fallback_question)

    async def recommend_courses(self, skills: List[str], interests: List[str]) -> List[str]:
        async def call() -> List[str]:
            data = await self._complete_json(
                career_prompts.course_recommendation_prompt(skills, interests),
                "You are a career advisor.",
            )
            return CourseRecommendations.model_validate(data).courses

        return await self._guarded("course_recommendations", call, lambda: fallbacks.course_recommendations().courses)

    async def search_jobs(self, query: str, location: Optional[str] = None) -> List[JobListing]:
        async def call() -> List[JobListing]:
            data = parse_json(
                await self._complete(
                    career_prompts.job_search_prompt(query, location),
                    "You are a job listing generator. Generate realistic job listings in JSON format.",
                    json_mode=True,
                )
            )
            items = data.get("jobs") if isinstance(data, dict) else data
            if not isinstance(items, list) or not items:
                raise ValueError("No job listings in response")
            listings = []
            for index, item in enumerate(items, start=1):
                if not isinstance(item, dict):
                    continue
                listings.append(
                    JobListing.model_validate(
                        {
                            "title": f"{query} Position",
                            "company": f"Tech Company {index}",
                            "location": location or "Remote",
                            "requirements": [query, "Bachelor's degree", "2+ years experience"],
                            **{k: v for k, v in item.items() if v not in (None, "", [])},
                            "id": f"job_{uuid.uuid4().hex[:12]}",
                        }
                    )
                )
            if not listings:
                raise ValueError("No usable job listings in response")
            return listings

        return await self._guarded("job_search", call, lambda: fallbacks.jobs(query, location))

    async def analyze_resume(self, content: str, job_keywords: Optional[str] = None) -> ResumeAnalysis:
        async def call() -> ResumeAnalysis:
            data = await self._complete_json(
                career_prompts.resume_analysis_prompt(content, job_keywords),
                "You are a professional resume analyzer. Analyze resumes and provide detailed feedback.",
            )
            if not data.get("summary"):
                raise ValueError("Received malformed analysis from AI")
            return ResumeAnalysis.model_validate(data)

        analysis = await self._guarded("resume_analysis", call, fallbacks.resume_analysis)
        return self._merge_local_analysis(analysis, content, job_keywords)

    def _merge_local_analysis(
        self, analysis: ResumeAnalysis, content: str, job_keywords: Optional[str]
    ) -> ResumeAnalysis:
        local = match_keywords(content, job_keywords)
        keywords = analysis.keyword_analysis
        merged_keywords = keywords.model_copy(
            update={
                "found": list(dict.fromkeys(keywords.found + local.found)),
                "missing": list(dict.fromkeys(k for k in keywords.missing + local.missing if k not in local.found)),
                "suggestions": list(dict.fromkeys(keywords.suggestions + local.suggestions)),
            }
        )
        extracted = analysis.extracted_data
        if not extracted.skills:
            extracted = extracted.model_copy(update={"skills": find_skills(content)})
        return analysis.model_copy(
            update={
                "keyword_analysis": merged_keywords,
                "extracted_data": extracted,
                "formatting_score": analysis.formatting_score if analysis.formatting_score is not None else analysis.score,
                "content_score": analysis.content_score if analysis.content_score is not None else analysis.score,
                "ats_score": analysis.ats_score if analysis.ats_score is not None else analysis.score,
                "overall_score": analysis.overall_score if analysis.overall_score is not None else analysis.score,
            }
        )

    async def generate_cover_letter(
        self, resume_data: Dict[str, Any], job_description: str, company_name: str, tone: str = "formal"
    ) -> CoverLetter:
        async def call() -> CoverLetter:
            data = await self._complete_json(
                career_prompts.cover_letter_prompt(resume_data, job_description, company_name, tone),
                "You are an expert cover letter writer. Generate compelling, personalized cover letters.",
            )
            data.setdefault("tone", tone)
            return CoverLetter.model_validate(data)

        return await self._guarded("cover_letter", call, lambda: fallbacks.cover_letter(tone))

    async def analyze_skill_gap(self, skills: List[str], job_description: str) -> SkillGapAnalysis:
        async def call() -> SkillGapAnalysis:
            data = await self._complete_json(
                career_prompts.skill_gap_prompt(skills, job_description),
                "You are a career skills analyst. Provide accurate skill gap analysis with helpful learning resources.",
            )
            return SkillGapAnalysis.model_validate(data)

        return await self._guarded("skill_gap", call, fallbacks.skill_gap)

    async def translate_resume(self, resume_data: Dict[str, Any], target_language: str) -> TranslatedResume:
        async def call() -> TranslatedResume:
            data = await self._complete_json(
                career_prompts.translate_prompt(resume_data, target_language),
                f"You are a professional resume translator specializing in {target_language}.",
            )
            quality_note = data.pop("qualityNote", None) or "Translation completed successfully."
            return TranslatedResume(
                translated_content=data,
                language=target_language,
                language_code=LANGUAGE_CODES.get(target_language.strip().lower(), "en"),
                quality_note=quality_note,
            )

        return await self._guarded(
            "resume_translation", call, lambda: fallbacks.translation(resume_data, target_language)
        )

    async def roast_resume(self, resume_content: str, resume_data: Optional[Dict[str, Any]] = None) -> ResumeRoast:
        async def call() -> ResumeRoast:
            data = await self._complete_json(
                career_prompts.roast_prompt(resume_content, resume_data),
                "You are a brutally honest but helpful resume critic. Be direct, specific, and constructive.",
            )
            return ResumeRoast.model_validate(data)

        return await self._guarded("resume_roast", call, fallbacks.roast)

    async def predict_interview_questions(
        self, resume_data: Dict[str, Any], job_description: Optional[str] = None
    ) -> PredictedQuestions:
        async def call() -> PredictedQuestions:
            data = await self._complete_json(
                career_prompts.predict_questions_prompt(resume_data, job_description),
                "You are an experienced recruiter and interview coach.",
            )
            return PredictedQuestions.model_validate(data)

        return await self._guarded("interview_prediction", call, fallbacks.predicted_questions)


def build_ai_gateway(settings: Settings) -> AIGateway:
    client = None
    if settings.ai_configured:
        # Retries are handled by tenacity around each call
        client = AsyncOpenAI(api_key=settings.AI_API_KEY, base_url=settings.AI_BASE_URL, max_retries=0)
    else:
        logger.warning("AI provider not configured; AI features will return default responses")
    return AIGateway(
        client,
        model=settings.AI_MODEL,
        timeout_seconds=settings.AI_TIMEOUT_SECONDS,
        max_retries=settings.AI_MAX_RETRIES,
    )
