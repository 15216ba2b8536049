"""Tests for the generation client, using a fake model."""
import base64
import json

import pytest

from edugenie.gemini import (
    DOUBT_EMPTY, DOUBT_FAILED, NOTES_EMPTY, NOTES_FAILED, GenerationClient,
    image_part, split_data_url,
)
from edugenie.models import StudyDay, StudySlot
from edugenie.prompts import PLAN_SCHEMA, QUIZ_SCHEMA
from conftest import FakeGemini, quiz_item


def test_split_data_url_strips_prefix():
    assert split_data_url("data:image/jpeg;base64,AAAA") == ("image/jpeg", "AAAA")


def test_split_data_url_reads_mime_type():
    assert split_data_url("data:image/png;base64,iVBO") == ("image/png", "iVBO")


def test_split_data_url_raw_base64_passes_through():
    assert split_data_url("AAAA") == ("image/jpeg", "AAAA")


def test_split_data_url_only_first_comma_is_prefix():
    assert split_data_url("data:image/jpeg;base64,AA,AA")[1] == "AA,AA"


def test_image_part_decodes_payload():
    part = image_part("data:image/jpeg;base64,AAAA")
    assert part["mime_type"] == "image/jpeg"
    assert base64.b64encode(part["data"]).decode() == "AAAA"


# --- solve_doubt ---


def test_solve_doubt_returns_model_text(client, fake_gemini, profile):
    fake_gemini.text = "**Osmosis** is..."
    answer = client.solve_doubt("What is osmosis?", None, profile, False)
    assert answer == "**Osmosis** is..."
    call = fake_gemini.calls[0]
    assert call["contents"] == [{"text": "What is osmosis?"}]
    assert "Hinglish" in call["system_instruction"]


def test_solve_doubt_sends_image_before_text(client, fake_gemini, profile):
    fake_gemini.text = "It is a leaf."
    client.solve_doubt("What is this?", "data:image/jpeg;base64,AAAA", profile, False)
    image, text = fake_gemini.calls[0]["contents"]
    assert image["mime_type"] == "image/jpeg"
    assert base64.b64encode(image["data"]).decode() == "AAAA"
    assert text == {"text": "What is this?"}


def test_solve_doubt_raw_base64_image(client, fake_gemini, profile):
    fake_gemini.text = "ok"
    client.solve_doubt("q", "AAAA", profile, False)
    image = fake_gemini.calls[0]["contents"][0]
    assert base64.b64encode(image["data"]).decode() == "AAAA"


def test_solve_doubt_uses_configured_model(client, fake_gemini, profile):
    fake_gemini.text = "ok"
    client.solve_doubt("q", None, profile, True)
    assert fake_gemini.model_name == "gemini-test"
    assert "witty" in fake_gemini.system_instruction


def test_solve_doubt_transport_failure_returns_fallback(settings, profile):
    client = GenerationClient(settings, model_factory=FakeGemini(error=ConnectionError("offline")))
    assert client.solve_doubt("q", None, profile, False) == DOUBT_FAILED


def test_solve_doubt_empty_text_returns_fallback(client, profile):
    assert client.solve_doubt("q", None, profile, False) == DOUBT_EMPTY


def test_solve_doubt_bad_image_returns_fallback(client, fake_gemini, profile):
    fake_gemini.text = "ok"
    assert client.solve_doubt("q", "data:image/jpeg;base64,A", profile, False) == DOUBT_FAILED
    assert fake_gemini.calls == []


# --- generate_notes ---


def test_generate_notes_scenario(client, fake_gemini, profile):
    fake_gemini.text = "# Photosynthesis\n..."
    notes = client.generate_notes("Photosynthesis", "Simple", profile)
    assert notes == "# Photosynthesis\n..."
    instruction = fake_gemini.calls[0]["contents"]
    for fragment in ("Photosynthesis", "Class 10", "CBSE", "Simple"):
        assert fragment in instruction


def test_generate_notes_failure_returns_fallback(settings, profile):
    client = GenerationClient(settings, model_factory=FakeGemini(error=RuntimeError("500")))
    assert client.generate_notes("Gravity", "Exam", profile) == NOTES_FAILED


def test_generate_notes_empty_returns_fallback(client, profile):
    assert client.generate_notes("Gravity", "Exam", profile) == NOTES_EMPTY


# --- generate_quiz ---


def test_generate_quiz_success(client, fake_gemini, profile, quiz_json):
    fake_gemini.text = quiz_json
    questions = client.generate_quiz("Photosynthesis", 5, profile)
    assert len(questions) == 5
    assert all(0 <= q.correct_answer < len(q.options) for q in questions)
    config = fake_gemini.calls[0]["generation_config"]
    assert config["response_mime_type"] == "application/json"
    assert config["response_schema"] is QUIZ_SCHEMA


def test_generate_quiz_trims_to_count(client, fake_gemini, profile):
    fake_gemini.text = json.dumps([quiz_item(n) for n in range(8)])
    assert len(client.generate_quiz("Algebra", 5, profile)) == 5


def test_generate_quiz_transport_failure(settings, profile):
    client = GenerationClient(settings, model_factory=FakeGemini(error=TimeoutError()))
    assert client.generate_quiz("Algebra", 5, profile) == []


@pytest.mark.parametrize("text", [
    "",
    "not json",
    '{"question": "x"}',
    json.dumps([quiz_item(correct=7)]),
])
def test_generate_quiz_bad_response_is_empty(client, fake_gemini, profile, text):
    fake_gemini.text = text
    assert client.generate_quiz("Algebra", 5, profile) == []


def test_generate_quiz_one_bad_item_fails_batch(client, fake_gemini, profile):
    fake_gemini.text = json.dumps([quiz_item(1), quiz_item(2, correct=9)])
    assert client.generate_quiz("Algebra", 5, profile) == []


def test_generate_quiz_blocked_response_is_empty(settings, profile):
    class Blocked:
        @property
        def text(self):
            raise ValueError("response was blocked")

    fake = FakeGemini()
    fake.generate_content = lambda contents, generation_config=None: Blocked()
    client = GenerationClient(settings, model_factory=fake)
    assert client.generate_quiz("Algebra", 5, profile) == []


# --- generate_study_plan ---


def test_generate_study_plan_success(client, fake_gemini, profile):
    fake_gemini.text = json.dumps([
        {"day": "Monday", "sessions": [{"time": "5-6 PM", "subject": "Math", "topic": "Algebra"}]},
    ])
    plan = client.generate_study_plan(2, ["Math"], profile)
    assert plan == [StudyDay("Monday", [StudySlot("5-6 PM", "Math", "Algebra")])]
    assert fake_gemini.calls[0]["generation_config"]["response_schema"] is PLAN_SCHEMA
    assert "Subjects: Math." in fake_gemini.calls[0]["contents"]


def test_generate_study_plan_transport_failure(settings, profile):
    client = GenerationClient(settings, model_factory=FakeGemini(error=ConnectionError()))
    assert client.generate_study_plan(2, ["Math"], profile) == []


@pytest.mark.parametrize("text", ["", "[", json.dumps([{"day": "Monday"}])])
def test_generate_study_plan_bad_response_is_empty(client, fake_gemini, profile, text):
    fake_gemini.text = text
    assert client.generate_study_plan(2, ["Math"], profile) == []


def test_default_factory_configures_api_key(monkeypatch, settings):
    configured = {}
    monkeypatch.setattr("edugenie.gemini.genai.configure", lambda **kw: configured.update(kw))
    settings.api_key = "secret"
    GenerationClient(settings)
    assert configured == {"api_key": "secret"}
