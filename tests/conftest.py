import json
from types import SimpleNamespace

import pytest

from edugenie.config import Settings
from edugenie.gemini import GenerationClient
from edugenie.models import UserProfile


class FakeGemini:
    """Stands in for genai.GenerativeModel; records every call."""

    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.calls = []

    def __call__(self, model_name, system_instruction=None):
        self.model_name = model_name
        self.system_instruction = system_instruction
        return self

    def generate_content(self, contents, generation_config=None):
        self.calls.append({
            "contents": contents,
            "generation_config": generation_config,
            "system_instruction": self.system_instruction,
        })
        if self.error:
            raise self.error
        return SimpleNamespace(text=self.text)


def quiz_item(n=1, correct=0, options=None):
    return {
        "question": f"Question {n}?",
        "options": options or ["A", "B", "C", "D"],
        "correctAnswer": correct,
        "explanation": f"Because {n}.",
    }


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_edugenie.db")
    return db_path


@pytest.fixture
def profile():
    return UserProfile(name="Asha", class_level="10", board="CBSE", language="Hinglish", onboarded=True)


@pytest.fixture
def settings(tmp_db):
    return Settings(api_key="", model_name="gemini-test", db_path=tmp_db)


@pytest.fixture
def fake_gemini():
    return FakeGemini()


@pytest.fixture
def client(settings, fake_gemini):
    return GenerationClient(settings, model_factory=fake_gemini)


@pytest.fixture
def quiz_json():
    return json.dumps([quiz_item(n, correct=n % 4) for n in range(1, 6)])
