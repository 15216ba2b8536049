"""Prompt construction for every feature.

All functions here are pure: they take the profile and the feature inputs and
return instruction text, plus a response schema for the structured features.
Callers reject empty input before getting here.
"""
from dataclasses import dataclass, field

from edugenie.models import LANGUAGES, NOTE_STYLES, UserProfile

DEFAULT_QUIZ_COUNT = 5

IMAGE_PLACEHOLDER = {"image": True}

LANGUAGE_DIRECTIVES = {
    "English": "Answer in English.",
    "Hindi": "Answer primarily in Hindi.",
    "Hinglish": "Answer in a mix of Hindi and English (Hinglish), commonly used by Indian students.",
}

FUNNY_TONE = "funny, witty, and relatable like a cool older brother"
TEACHER_TONE = "kind, encouraging, and clear like a professional teacher"

NOTES_OUTLINE = """Structure the notes as:
1. Introduction (Brief)
2. Key Concepts (Bullet points)
3. Detailed Explanation (Step-by-step)
4. Important Formulas/Dates/Facts (Boxed or highlighted)
5. Summary"""

QUIZ_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "question": {"type": "STRING"},
            "options": {"type": "ARRAY", "items": {"type": "STRING"}},
            "correctAnswer": {"type": "INTEGER", "description": "Index of the correct option (0-3)"},
            "explanation": {"type": "STRING"},
        },
        "required": ["question", "options", "correctAnswer", "explanation"],
    },
}

PLAN_SCHEMA = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "day": {"type": "STRING", "description": "Day of the week (e.g., Monday)"},
            "sessions": {
                "type": "ARRAY",
                "items": {
                    "type": "OBJECT",
                    "properties": {
                        "time": {"type": "STRING", "description": "Time slot (e.g., 4:00 PM - 5:00 PM)"},
                        "subject": {"type": "STRING"},
                        "topic": {"type": "STRING", "description": "Specific focus topic"},
                    },
                    "required": ["time", "subject", "topic"],
                },
            },
        },
        "required": ["day", "sessions"],
    },
}


@dataclass
class DoubtPrompt:
    system_instruction: str
    user_content: list[dict] = field(default_factory=list)


@dataclass
class StructuredPrompt:
    instruction: str
    schema: dict


def language_directive(language: str) -> str:
    try:
        return LANGUAGE_DIRECTIVES[language]
    except KeyError:
        raise ValueError(f"Unsupported language: {language!r}") from None


def _require(value: str, what: str) -> str:
    if not value or not value.strip():
        raise ValueError(f"{what} must not be empty")
    return value.strip()


def build_doubt_prompt(query: str, has_image: bool, profile: UserProfile, funny_mode: bool) -> DoubtPrompt:
    """Persona instruction plus the user's content parts.

    When an image is attached the first part is IMAGE_PLACEHOLDER, which the
    generation client swaps for the inline image data. A doubt may be an image
    alone, so the query may be empty only when has_image is set.
    """
    if not has_image:
        _require(query, "query")
    tone = FUNNY_TONE if funny_mode else TEACHER_TONE
    system_instruction = (
        f"You are EduGenie, an expert AI tutor for Indian students "
        f"({profile.board} Board, Class {profile.class_level}).\n"
        f"Tone: {tone}.\n"
        f"Language: {language_directive(profile.language)}\n"
        "Format: Use Markdown. Break down complex problems into steps. Use bold text for key terms.\n"
        "If the question is academic, provide a solution, explanation, and a similar practice example."
    )
    parts = [{"text": query}]
    if has_image:
        parts.insert(0, dict(IMAGE_PLACEHOLDER))
    return DoubtPrompt(system_instruction=system_instruction, user_content=parts)


def build_notes_prompt(topic: str, style: str, profile: UserProfile) -> str:
    topic = _require(topic, "topic")
    if style not in NOTE_STYLES:
        raise ValueError(f"Unknown notes style: {style!r}")
    if profile.language not in LANGUAGES:
        raise ValueError(f"Unsupported language: {profile.language!r}")
    return (
        f'Generate comprehensive study notes for the topic: "{topic}".\n'
        f"Context: Class {profile.class_level}, {profile.board} Board.\n"
        f"Style: {style}.\n"
        f"Language preference: {profile.language} (or Hinglish if appropriate for better understanding).\n\n"
        f"{NOTES_OUTLINE}"
    )


def build_quiz_prompt(topic: str, count: int, profile: UserProfile) -> StructuredPrompt:
    topic = _require(topic, "topic")
    if count < 1:
        raise ValueError("count must be at least 1")
    instruction = f'Create a {count} question quiz about "{topic}" for a Class {profile.class_level} student.'
    return StructuredPrompt(instruction=instruction, schema=QUIZ_SCHEMA)


def build_plan_prompt(hours: int, subjects: list[str], profile: UserProfile) -> StructuredPrompt:
    if not subjects:
        raise ValueError("subjects must not be empty")
    instruction = (
        "Create a 1-week study timetable.\n"
        f"Student Profile: Class {profile.class_level}, {profile.board}, Subjects: {', '.join(subjects)}.\n"
        f"Available daily hours: {hours}.\n"
        "Focus: Balanced mix of learning and revision."
    )
    return StructuredPrompt(instruction=instruction, schema=PLAN_SCHEMA)
