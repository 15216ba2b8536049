"""Notes generator screen state and markdown export."""
import logging
import re
from pathlib import Path
from typing import Callable

from edugenie.models import NOTE_STYLES
from edugenie.tracker import RequestTracker

logger = logging.getLogger(__name__)


class NotesScreen:
    def __init__(self):
        self.topic = ""
        self.style = "Simple"
        self.notes = ""
        self.tracker = RequestTracker()

    def set_style(self, style: str) -> None:
        if style not in NOTE_STYLES:
            raise ValueError(f"Unknown notes style: {style!r}")
        self.style = style

    def begin(self, topic: str) -> int | None:
        if not topic.strip() or self.tracker.loading:
            return None
        self.topic = topic.strip()
        self.notes = ""
        return self.tracker.begin()

    def receive(self, token: int, notes: str) -> bool:
        if not self.tracker.accepts(token):
            logger.info("Discarding stale notes response")
            return False
        self.notes = notes
        return True

    def generate(self, topic: str, generate: Callable[[str, str], str]) -> bool:
        token = self.begin(topic)
        if token is None:
            return False
        return self.receive(token, generate(self.topic, self.style))


def notes_filename(topic: str, style: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", topic.lower()).strip("-") or "notes"
    return f"{slug}-{style.lower()}.md"


def export_notes(notes: str, topic: str, style: str, directory: str) -> Path:
    """Write notes to a markdown file in directory and return its path."""
    path = Path(directory) / notes_filename(topic, style)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"# {topic}\n\n{notes}\n", encoding="utf-8")
    return path
