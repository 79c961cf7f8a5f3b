"""
AI summaries and Q&A over course reviews (Gemini generateContent REST API).

The model is asked for plain text, but answers still come back with
markdown now and then, so every answer goes through clean_text().
Failures never reach the views: each call returns a fixed fallback message instead.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable, Optional

import requests

from coursepilot.config import DEFAULT_MODEL, Settings
from coursepilot.model import Course, Review


logger = logging.getLogger(__name__)

API_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

SUMMARY_FAILED = "The AI is currently processing other academic data. Please check back later."
SUMMARY_EMPTY = "Summary analysis not available."
ANSWER_FAILED = "Service temporarily unavailable."
ANSWER_EMPTY = "No specific data found for this query."

_MARKDOWN_CHARS = re.compile(r"[*#]")


class AIServiceError(RuntimeError):
    """Raised when the text-generation service cannot produce an answer."""


class GeminiClient:
    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._http = session or requests

    @classmethod
    def from_settings(cls, settings: Settings) -> "GeminiClient":
        return cls(api_key=settings.api_key, model=settings.model, timeout=settings.timeout)

    def generate(self, prompt: str) -> str:
        """
        Send one prompt, return the generated text ("" if the model returned no text).
        """
        if not self.api_key:
            raise AIServiceError("No API key configured (set GEMINI_API_KEY)")

        url = f"{API_BASE_URL}/models/{self.model}:generateContent"
        payload = {"contents": [{"parts": [{"text": prompt}]}]}
        headers = {"x-goog-api-key": self.api_key, "Content-Type": "application/json"}

        try:
            resp = self._http.post(url, headers=headers, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise AIServiceError(f"Request failed: {e}") from e

        if resp.status_code != 200:
            raise AIServiceError(f"API error {resp.status_code}: {_error_message(resp)}")

        try:
            data = resp.json()
        except ValueError as e:
            raise AIServiceError("Response is not JSON") from e

        return _response_text(data)


def _error_message(resp: Any) -> str:
    try:
        return str(resp.json().get("error", {}).get("message", "Unknown error"))
    except (ValueError, AttributeError):
        return "Unknown error"


def _response_text(data: Any) -> str:
    """Join the text parts of the first candidate."""
    try:
        parts = data["candidates"][0]["content"]["parts"]
    except (KeyError, IndexError, TypeError):
        return ""
    return "".join(p.get("text", "") for p in parts if isinstance(p, dict)).strip()


def clean_text(text: Optional[str]) -> str:
    """Strip markdown bold/header characters the model sends despite the prompt."""
    if not text:
        return ""
    return _MARKDOWN_CHARS.sub("", text)


# ---------------------------------------------------------------------------
# Prompts
# ---------------------------------------------------------------------------


def build_summary_prompt(course: Course, reviews: Iterable[Review]) -> str:
    blocks = [
        f"[Easiness: {r.rating}/5]\n"
        f"Teaching Method: {r.teaching_method}\n"
        f"Exam Structure: {r.exam_structure}\n"
        f"Leniency: {r.leniency}\n"
        f"Grading Comments: {r.grading_comments}\n"
        f"Extra Classes: {r.extra_classes}\n"
        f"General Feedback: {r.comment}"
        for r in reviews
    ]
    reviews_text = "\n---\n".join(blocks)

    return (
        f'You are an academic analysis tool. Summarize these student reviews for "{course.name}".\n\n'
        "IMPORTANT:\n"
        "1. DO NOT use any markdown formatting characters.\n"
        "2. DO NOT use asterisks for bolding or bullet points.\n"
        "3. DO NOT use hash symbols for headers.\n"
        "4. Use plain text only. Use capital letters for headers and simple dashes (-) for lists.\n\n"
        f"Data from multiple students:\n{reviews_text}\n\n"
        "Provide a concise synthesis covering:\n"
        "1. COMMON TEACHING STYLE: How do instructors usually deliver this course?\n"
        "2. EXAM & GRADING INSIGHT: What is the paper pattern and is grading generally fair or harsh?\n"
        "3. LOGISTICS: Mention if extra classes are common.\n"
        "4. VERDICT: Overall student sentiment.\n\n"
        "Be direct and professional."
    )


def build_question_prompt(question: str, course: Course, reviews: Iterable[Review]) -> str:
    context = " | ".join(
        f"Teaching: {r.teaching_method}. Exam: {r.exam_structure}. "
        f"Grading: {r.grading_comments}. General: {r.comment}"
        for r in reviews
    )
    return (
        f'Student Question: "{question}"\n'
        f'Context for "{course.name}": {context}\n\n'
        "IMPORTANT: Provide a plain text answer. DO NOT use markdown characters.\n\n"
        "Answer the student's question based strictly on the provided feedback. "
        "If not mentioned, state that information is unavailable."
    )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def course_summary(course: Course, reviews: Iterable[Review], client: GeminiClient) -> str:
    try:
        text = client.generate(build_summary_prompt(course, reviews))
    except AIServiceError as e:
        logger.warning("Summary for %r failed: %s", course.name, e)
        return SUMMARY_FAILED
    return clean_text(text) or SUMMARY_EMPTY


def ask_about_course(question: str, course: Course, reviews: Iterable[Review], client: GeminiClient) -> str:
    try:
        text = client.generate(build_question_prompt(question, course, reviews))
    except AIServiceError as e:
        logger.warning("Question about %r failed: %s", course.name, e)
        return ANSWER_FAILED
    return clean_text(text) or ANSWER_EMPTY
