"""Doubt solver screen: chat thread, image attachments and voice input."""
import base64
import logging
import mimetypes
import time
from pathlib import Path
from typing import Callable

from edugenie.models import ChatMessage
from edugenie.tracker import RequestTracker

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".jpg", ".jpeg", ".png", ".webp", ".gif", ".heic")


def read_image_as_data_url(file_path: str) -> str:
    path = Path(file_path)
    if path.suffix.lower() not in IMAGE_SUFFIXES:
        raise ValueError(f"Not an image file: {path.name}")
    mime = mimetypes.guess_type(path.name)[0] or "image/jpeg"
    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{payload}"


class DoubtScreen:
    """State for one chat session. Messages live only as long as the screen."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._last_id = 0
        self.messages: list[ChatMessage] = []
        self.input = ""
        self.image: str | None = None
        self.funny_mode = False
        self.tracker = RequestTracker()

    def _new_message(self, role: str, text: str, image: str | None = None) -> ChatMessage:
        now = int(self._clock() * 1000)
        msg_id = max(now, self._last_id + 1)
        self._last_id = msg_id
        return ChatMessage(id=str(msg_id), role=role, text=text, timestamp=now, image=image)

    def attach_image(self, file_path: str) -> None:
        self.image = read_image_as_data_url(file_path)

    def toggle_funny_mode(self) -> bool:
        self.funny_mode = not self.funny_mode
        return self.funny_mode

    def append_transcript(self, transcript: str) -> None:
        transcript = transcript.strip()
        if not transcript:
            return
        self.input = f"{self.input} {transcript}" if self.input.strip() else transcript

    def can_send(self) -> bool:
        return bool(self.input.strip() or self.image) and not self.tracker.loading

    def begin(self) -> tuple[int, ChatMessage] | None:
        """Post the pending input as a user message and open a request."""
        if not self.can_send():
            return None
        message = self._new_message("user", self.input, self.image)
        self.messages.append(message)
        self.input = ""
        self.image = None
        return self.tracker.begin(), message

    def receive(self, token: int, text: str) -> bool:
        if not self.tracker.accepts(token):
            logger.info("Discarding stale doubt response")
            return False
        self.messages.append(self._new_message("model", text))
        return True

    def send(self, solve: Callable[[str, str | None, bool], str]) -> bool:
        started = self.begin()
        if started is None:
            return False
        token, message = started
        return self.receive(token, solve(message.text, message.image, self.funny_mode))
