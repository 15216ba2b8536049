"""Data classes for the study assistant domain model."""
from dataclasses import dataclass, field
from typing import Optional

LANGUAGES = ("English", "Hindi", "Hinglish")
BOARDS = ("CBSE", "ICSE", "State Board", "Other")
CLASS_LEVELS = tuple(str(n) for n in range(1, 13)) + ("Competitive Exam",)
STREAMS = ("Science (PCM)", "Science (PCB)", "Commerce", "Arts/Humanities")
STREAM_CLASSES = ("11", "12")
NOTE_STYLES = ("Simple", "Exam", "Detailed")

MIN_OPTIONS = 2
MAX_OPTIONS = 4


class ResponseFormatError(ValueError):
    """A generated JSON document does not have the shape that was asked for."""


@dataclass
class UserProfile:
    name: str
    class_level: str
    board: str
    language: str = "English"
    stream: Optional[str] = None
    onboarded: bool = False

    def to_dict(self) -> dict:
        data = {
            "name": self.name,
            "classLevel": self.class_level,
            "board": self.board,
            "language": self.language,
            "onboarded": self.onboarded,
        }
        if self.stream:
            data["stream"] = self.stream
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        language = data.get("language", "English")
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        return cls(
            name=str(data["name"]),
            class_level=str(data["classLevel"]),
            board=str(data["board"]),
            language=language,
            stream=data.get("stream") or None,
            onboarded=bool(data.get("onboarded", False)),
        )


@dataclass(frozen=True)
class ChatMessage:
    id: str
    role: str  # "user" or "model"
    text: str
    timestamp: int
    image: Optional[str] = None


@dataclass
class QuizQuestion:
    question: str
    options: list[str]
    correct_answer: int
    explanation: str = ""

    def is_correct(self, index: int) -> bool:
        return index == self.correct_answer


@dataclass
class StudySlot:
    time: str
    subject: str
    topic: str


@dataclass
class StudyDay:
    day: str
    sessions: list[StudySlot] = field(default_factory=list)


def _require_str(item: dict, key: str, where: str) -> str:
    value = item.get(key)
    if not isinstance(value, str) or not value.strip():
        raise ResponseFormatError(f"{where}: missing or empty '{key}'")
    return value


def parse_quiz_questions(data) -> list[QuizQuestion]:
    """Validate a decoded quiz document and build QuizQuestion objects."""
    if not isinstance(data, list):
        raise ResponseFormatError("quiz response is not an array")
    questions = []
    for n, item in enumerate(data, 1):
        where = f"question {n}"
        if not isinstance(item, dict):
            raise ResponseFormatError(f"{where}: not an object")
        text = _require_str(item, "question", where)
        options = item.get("options")
        if not isinstance(options, list) or not MIN_OPTIONS <= len(options) <= MAX_OPTIONS:
            raise ResponseFormatError(f"{where}: needs {MIN_OPTIONS}-{MAX_OPTIONS} options")
        if not all(isinstance(o, str) for o in options):
            raise ResponseFormatError(f"{where}: options must be strings")
        answer = item.get("correctAnswer")
        # bool is an int subclass
        if isinstance(answer, bool) or not isinstance(answer, int):
            raise ResponseFormatError(f"{where}: correctAnswer must be an integer")
        if not 0 <= answer < len(options):
            raise ResponseFormatError(f"{where}: correctAnswer {answer} out of range")
        explanation = item.get("explanation", "")
        if not isinstance(explanation, str):
            raise ResponseFormatError(f"{where}: explanation must be a string")
        questions.append(QuizQuestion(text, list(options), answer, explanation))
    return questions


def parse_study_plan(data) -> list[StudyDay]:
    """Validate a decoded study plan document and build StudyDay objects."""
    if not isinstance(data, list):
        raise ResponseFormatError("study plan response is not an array")
    days = []
    for n, item in enumerate(data, 1):
        where = f"day {n}"
        if not isinstance(item, dict):
            raise ResponseFormatError(f"{where}: not an object")
        day = _require_str(item, "day", where)
        sessions = item.get("sessions")
        if not isinstance(sessions, list):
            raise ResponseFormatError(f"{where}: sessions must be an array")
        slots = []
        for m, s in enumerate(sessions, 1):
            slot_where = f"{where} session {m}"
            if not isinstance(s, dict):
                raise ResponseFormatError(f"{slot_where}: not an object")
            slots.append(StudySlot(
                time=_require_str(s, "time", slot_where),
                subject=_require_str(s, "subject", slot_where),
                topic=_require_str(s, "topic", slot_where),
            ))
        days.append(StudyDay(day=day, sessions=slots))
    return days
