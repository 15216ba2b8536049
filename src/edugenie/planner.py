"""Study planner screen state."""
import logging
from typing import Callable

from edugenie.models import StudyDay
from edugenie.tracker import RequestTracker

logger = logging.getLogger(__name__)

MIN_HOURS = 1
MAX_HOURS = 12
DEFAULT_HOURS = 4


class PlannerScreen:
    def __init__(self):
        self.subjects: list[str] = []
        self.hours = DEFAULT_HOURS
        self.plan: list[StudyDay] = []
        self.tracker = RequestTracker()

    def add_subject(self, subject: str) -> bool:
        """Append a subject; blanks and duplicates are ignored."""
        subject = subject.strip()
        if not subject or subject in self.subjects:
            return False
        self.subjects.append(subject)
        return True

    def remove_subject(self, subject: str) -> None:
        self.subjects = [s for s in self.subjects if s != subject]

    def set_hours(self, hours: int) -> None:
        if not MIN_HOURS <= hours <= MAX_HOURS:
            raise ValueError(f"Hours must be between {MIN_HOURS} and {MAX_HOURS}")
        self.hours = hours

    def can_generate(self) -> bool:
        return bool(self.subjects) and not self.tracker.loading

    def begin(self) -> int | None:
        if not self.can_generate():
            return None
        return self.tracker.begin()

    def receive(self, token: int, plan: list[StudyDay]) -> bool:
        """Show a generated plan; an empty one means generation failed."""
        if not self.tracker.accepts(token):
            logger.info("Discarding stale study plan response")
            return False
        self.plan = plan
        return bool(plan)

    def generate(self, generate: Callable[[int, list[str]], list[StudyDay]]) -> bool:
        token = self.begin()
        if token is None:
            return False
        return self.receive(token, generate(self.hours, list(self.subjects)))
