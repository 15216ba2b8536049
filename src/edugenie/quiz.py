"""Quiz playback: setup, one locked answer per question, final score."""
import logging
from enum import Enum
from typing import Callable

from edugenie.models import QuizQuestion
from edugenie.prompts import DEFAULT_QUIZ_COUNT
from edugenie.tracker import RequestTracker

logger = logging.getLogger(__name__)


class QuizState(Enum):
    SETUP = "setup"
    PLAYING = "playing"
    COMPLETED = "completed"


class QuizSession:
    """State machine for one quiz screen.

    SETUP --start--> PLAYING(0, None, 0) --select/advance--> ... --> COMPLETED
    COMPLETED --restart--> SETUP
    """

    def __init__(self, count: int = DEFAULT_QUIZ_COUNT):
        self.count = count
        self.tracker = RequestTracker()
        self._reset()

    def _reset(self) -> None:
        self.state = QuizState.SETUP
        self.topic = ""
        self.questions: list[QuizQuestion] = []
        self.index = 0
        self.selected: int | None = None
        self.score = 0

    @property
    def total(self) -> int:
        return len(self.questions)

    @property
    def current_question(self) -> QuizQuestion | None:
        if self.state is not QuizState.PLAYING:
            return None
        return self.questions[self.index]

    @property
    def is_last_question(self) -> bool:
        return self.index == self.total - 1

    def begin(self, topic: str) -> int | None:
        """Record the topic and return a request token, or None if not startable."""
        if self.state is not QuizState.SETUP or not topic.strip():
            return None
        self.topic = topic.strip()
        return self.tracker.begin()

    def receive(self, token: int, questions: list[QuizQuestion]) -> bool:
        """Enter PLAYING with the generated questions; stays in SETUP on failure."""
        if not self.tracker.accepts(token):
            logger.info("Discarding stale quiz response")
            return False
        if self.state is not QuizState.SETUP or not questions:
            return False
        self.questions = list(questions)
        self.index = 0
        self.selected = None
        self.score = 0
        self.state = QuizState.PLAYING
        return True

    def start(self, topic: str, generate: Callable[[str, int], list[QuizQuestion]]) -> bool:
        token = self.begin(topic)
        if token is None:
            return False
        return self.receive(token, generate(self.topic, self.count))

    def select_option(self, idx: int) -> bool:
        """Lock in an answer for the current question. Later calls are no-ops."""
        if self.state is not QuizState.PLAYING or self.selected is not None:
            return False
        question = self.questions[self.index]
        if not 0 <= idx < len(question.options):
            return False
        self.selected = idx
        if question.is_correct(idx):
            self.score += 1
        return True

    def advance(self) -> bool:
        """Move to the next question, or to COMPLETED after the last one."""
        if self.state is not QuizState.PLAYING or self.selected is None:
            return False
        self.selected = None
        if self.is_last_question:
            self.state = QuizState.COMPLETED
        else:
            self.index += 1
        return True

    def restart(self) -> None:
        self.tracker.abandon()
        self._reset()
