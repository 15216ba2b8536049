"""Profile persistence and the onboarding wizard."""
import json
import logging

from edugenie.db import delete_setting, get_setting, set_setting
from edugenie.models import (
    BOARDS, CLASS_LEVELS, LANGUAGES, STREAM_CLASSES, STREAMS, UserProfile,
)

logger = logging.getLogger(__name__)

PROFILE_KEY = "edugenie_profile"


def load_profile(db_path: str) -> UserProfile | None:
    """Stored profile, or None when the student has not onboarded."""
    raw = get_setting(db_path, PROFILE_KEY)
    if raw is None:
        return None
    try:
        return UserProfile.from_dict(json.loads(raw))
    except (ValueError, KeyError, TypeError) as e:
        logger.error(f"Ignoring unreadable stored profile: {e}")
        return None


def save_profile(db_path: str, profile: UserProfile) -> None:
    set_setting(db_path, PROFILE_KEY, json.dumps(profile.to_dict()))


def clear_profile(db_path: str) -> None:
    delete_setting(db_path, PROFILE_KEY)


class OnboardingWizard:
    """Three-step linear form that produces a UserProfile.

    Step 1 collects name and class, step 2 the board (and the stream for
    classes 11 and 12), step 3 the language. Nothing is stored here.
    """

    STEPS = 3

    def __init__(self):
        self.step = 1
        self.name = ""
        self.class_level = ""
        self.board = "CBSE"
        self.stream = None
        self.language = "English"

    @property
    def needs_stream(self) -> bool:
        return self.class_level in STREAM_CLASSES

    def can_advance(self) -> bool:
        if self.step == 1:
            return bool(self.name.strip())
        return True

    def set_name(self, name: str) -> None:
        self.name = name

    def set_class_level(self, class_level: str) -> None:
        if class_level not in CLASS_LEVELS:
            raise ValueError(f"Unknown class level: {class_level!r}")
        self.class_level = class_level
        if not self.needs_stream:
            self.stream = None

    def set_board(self, board: str) -> None:
        if board not in BOARDS:
            raise ValueError(f"Unknown board: {board!r}")
        self.board = board

    def set_stream(self, stream: str | None) -> None:
        if stream is not None and stream not in STREAMS:
            raise ValueError(f"Unknown stream: {stream!r}")
        self.stream = stream if self.needs_stream else None

    def set_language(self, language: str) -> None:
        if language not in LANGUAGES:
            raise ValueError(f"Unsupported language: {language!r}")
        self.language = language

    def next(self) -> UserProfile | None:
        """Advance one step; on the last step return the finished profile."""
        if not self.can_advance():
            return None
        if self.step < self.STEPS:
            self.step += 1
            return None
        return UserProfile(
            name=self.name.strip(),
            class_level=self.class_level,
            board=self.board,
            language=self.language,
            stream=self.stream,
            onboarded=True,
        )
