"""
Unit tests for the AI summary / Q&A wrapper.

Contract:
- markdown characters (* and #) are stripped from every answer
- service failures become fixed fallback messages, never exceptions
"""

import unittest
from unittest import mock

import requests

from coursepilot.ai import (
    ANSWER_EMPTY,
    ANSWER_FAILED,
    SUMMARY_EMPTY,
    SUMMARY_FAILED,
    AIServiceError,
    GeminiClient,
    ask_about_course,
    build_summary_prompt,
    clean_text,
    course_summary,
)
from coursepilot.fixtures import MOCK_COURSES, MOCK_REVIEWS


COURSE = MOCK_COURSES[1]
REVIEWS = [r for r in MOCK_REVIEWS if r.course_id == COURSE.id]


def _client(text: str = "", error: Exception | None = None) -> mock.Mock:
    client = mock.Mock(spec=GeminiClient)
    if error is not None:
        client.generate.side_effect = error
    else:
        client.generate.return_value = text
    return client


class TestHelpers(unittest.TestCase):
    def test_clean_text(self) -> None:
        self.assertEqual(clean_text("## VERDICT\n**Great** course"), " VERDICT\nGreat course")
        self.assertEqual(clean_text(None), "")

    def test_summary_prompt_contains_reviews(self) -> None:
        prompt = build_summary_prompt(COURSE, REVIEWS)
        self.assertIn(COURSE.name, prompt)
        self.assertIn("[Easiness: 5/5]", prompt)
        self.assertIn("Project-based learning with heavy coding.", prompt)


class TestSummaryAndAsk(unittest.TestCase):
    def test_summary_is_cleaned(self) -> None:
        text = course_summary(COURSE, REVIEWS, _client("# VERDICT: *loved* it"))
        self.assertEqual(text, " VERDICT: loved it")

    def test_summary_failure_and_empty(self) -> None:
        with self.assertLogs("coursepilot.ai", level="WARNING"):
            self.assertEqual(course_summary(COURSE, REVIEWS, _client(error=AIServiceError("down"))), SUMMARY_FAILED)
        self.assertEqual(course_summary(COURSE, REVIEWS, _client("")), SUMMARY_EMPTY)

    def test_ask(self) -> None:
        client = _client("Exams are **open book**.")
        self.assertEqual(ask_about_course("How are exams?", COURSE, REVIEWS, client), "Exams are open book.")
        prompt = client.generate.call_args[0][0]
        self.assertIn('Student Question: "How are exams?"', prompt)

    def test_ask_failure_and_empty(self) -> None:
        with self.assertLogs("coursepilot.ai", level="WARNING"):
            self.assertEqual(ask_about_course("?", COURSE, REVIEWS, _client(error=AIServiceError("x"))), ANSWER_FAILED)
        self.assertEqual(ask_about_course("?", COURSE, REVIEWS, _client("")), ANSWER_EMPTY)


class TestGeminiClient(unittest.TestCase):
    def _session(self, status: int = 200, payload: object = None, error: Exception | None = None) -> mock.Mock:
        session = mock.Mock()
        if error is not None:
            session.post.side_effect = error
            return session
        resp = mock.Mock()
        resp.status_code = status
        resp.json.return_value = payload
        session.post.return_value = resp
        return session

    def test_generate_returns_text(self) -> None:
        payload = {"candidates": [{"content": {"parts": [{"text": "Hello "}, {"text": "world"}]}}]}
        session = self._session(payload=payload)
        client = GeminiClient(api_key="k", model="m1", timeout=3, session=session)

        self.assertEqual(client.generate("hi"), "Hello world")
        args, kwargs = session.post.call_args
        self.assertTrue(args[0].endswith("/models/m1:generateContent"))
        self.assertEqual(kwargs["headers"]["x-goog-api-key"], "k")
        self.assertEqual(kwargs["json"]["contents"][0]["parts"][0]["text"], "hi")
        self.assertEqual(kwargs["timeout"], 3)

    def test_generate_without_candidates_is_empty(self) -> None:
        client = GeminiClient(api_key="k", session=self._session(payload={"candidates": []}))
        self.assertEqual(client.generate("hi"), "")

    def test_missing_key_raises(self) -> None:
        session = self._session()
        with self.assertRaises(AIServiceError):
            GeminiClient(api_key="", session=session).generate("hi")
        session.post.assert_not_called()

    def test_http_error_raises(self) -> None:
        session = self._session(status=500, payload={"error": {"message": "overloaded"}})
        with self.assertRaises(AIServiceError) as ctx:
            GeminiClient(api_key="k", session=session).generate("hi")
        self.assertIn("overloaded", str(ctx.exception))

    def test_transport_error_raises(self) -> None:
        session = self._session(error=requests.Timeout("slow"))
        with self.assertRaises(AIServiceError):
            GeminiClient(api_key="k", session=session).generate("hi")


if __name__ == "__main__":
    unittest.main()
