"""Gemini generation client.

One call per feature. Every failure (transport error, empty response,
malformed or non-conforming JSON) is logged and turned into a fallback value;
nothing raised by the service reaches the screens.
"""
import base64
import json
import logging

import google.generativeai as genai

from edugenie.config import Settings
from edugenie.models import (
    QuizQuestion, StudyDay, UserProfile, parse_quiz_questions, parse_study_plan,
)
from edugenie.prompts import (
    IMAGE_PLACEHOLDER, build_doubt_prompt, build_notes_prompt, build_plan_prompt,
    build_quiz_prompt,
)

logger = logging.getLogger(__name__)

DEFAULT_IMAGE_MIME = "image/jpeg"

DOUBT_EMPTY = "Sorry, I couldn't generate an explanation."
DOUBT_FAILED = "Something went wrong while connecting to EduGenie."
NOTES_EMPTY = "No notes generated."
NOTES_FAILED = "Failed to generate notes."


def split_data_url(data_url: str) -> tuple[str, str]:
    """Return (mime_type, base64 payload) for a data URL or a raw base64 string.

    Everything up to and including the first comma is the scheme prefix. A
    string without a comma is taken to be the payload already.
    """
    prefix, sep, payload = data_url.partition(",")
    if not sep or not payload:
        return DEFAULT_IMAGE_MIME, data_url
    mime = DEFAULT_IMAGE_MIME
    if prefix.startswith("data:"):
        declared = prefix[len("data:"):].split(";", 1)[0]
        if declared:
            mime = declared
    return mime, payload


def image_part(data_url: str) -> dict:
    mime, payload = split_data_url(data_url)
    return {"mime_type": mime, "data": base64.b64decode(payload)}


def _response_text(response) -> str:
    # response.text raises ValueError when the candidate was blocked
    text = response.text
    return text.strip() if text else ""


class GenerationClient:
    """Adapter between the prompt builders and the Gemini API."""

    def __init__(self, settings: Settings, model_factory=None):
        self.model_name = settings.model_name
        if model_factory is None:
            if settings.api_key:
                genai.configure(api_key=settings.api_key)
            else:
                logger.warning("GOOGLE_API_KEY not set; generation requests will fail.")
            model_factory = genai.GenerativeModel
        self._model_factory = model_factory

    def _model(self, system_instruction: str | None = None):
        if system_instruction:
            return self._model_factory(self.model_name, system_instruction=system_instruction)
        return self._model_factory(self.model_name)

    def _generate_json(self, instruction: str, schema: dict):
        response = self._model().generate_content(
            instruction,
            generation_config={
                "response_mime_type": "application/json",
                "response_schema": schema,
            },
        )
        text = _response_text(response)
        if not text:
            return None
        return json.loads(text)

    def solve_doubt(self, query: str, image_data_url: str | None, profile: UserProfile,
                    funny_mode: bool = False) -> str:
        prompt = build_doubt_prompt(query, bool(image_data_url), profile, funny_mode)
        try:
            parts = [
                image_part(image_data_url) if part == IMAGE_PLACEHOLDER else part
                for part in prompt.user_content
            ]
            response = self._model(prompt.system_instruction).generate_content(parts)
            return _response_text(response) or DOUBT_EMPTY
        except Exception as e:
            logger.error(f"Doubt solver error: {e}")
            return DOUBT_FAILED

    def generate_notes(self, topic: str, style: str, profile: UserProfile) -> str:
        prompt = build_notes_prompt(topic, style, profile)
        try:
            response = self._model().generate_content(prompt)
            return _response_text(response) or NOTES_EMPTY
        except Exception as e:
            logger.error(f"Notes generation error: {e}")
            return NOTES_FAILED

    def generate_quiz(self, topic: str, count: int, profile: UserProfile) -> list[QuizQuestion]:
        prompt = build_quiz_prompt(topic, count, profile)
        try:
            data = self._generate_json(prompt.instruction, prompt.schema)
            if data is None:
                logger.warning(f"Empty quiz response for {topic!r}")
                return []
            return parse_quiz_questions(data)[:count]
        except Exception as e:
            logger.error(f"Quiz gen error: {e}")
            return []

    def generate_study_plan(self, hours: int, subjects: list[str], profile: UserProfile) -> list[StudyDay]:
        prompt = build_plan_prompt(hours, subjects, profile)
        try:
            data = self._generate_json(prompt.instruction, prompt.schema)
            if data is None:
                logger.warning("Empty study plan response")
                return []
            return parse_study_plan(data)
        except Exception as e:
            logger.error(f"Planner error: {e}")
            return []
