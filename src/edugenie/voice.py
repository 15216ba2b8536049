"""One-shot speech-to-text capture."""
import logging

import speech_recognition as sr

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en-US"
LOCALES = {"Hindi": "hi-IN"}


class VoiceUnavailableError(RuntimeError):
    """No microphone or audio backend on this machine."""


def locale_for(language: str) -> str:
    return LOCALES.get(language, DEFAULT_LOCALE)


class VoiceInput:
    """Listens once and returns a single final transcript."""

    def __init__(self, language: str, recognizer=None, microphone_factory=None, timeout: float = 8.0):
        self.locale = locale_for(language)
        self.timeout = timeout
        self._recognizer = recognizer or sr.Recognizer()
        self._microphone_factory = microphone_factory or sr.Microphone
        self.listening = False

    def listen(self) -> str | None:
        """Capture one phrase. Returns None when nothing usable was heard."""
        if self.listening:
            return None
        try:
            microphone = self._microphone_factory()
        except (AttributeError, OSError) as e:
            # sr.Microphone needs PyAudio and an input device
            raise VoiceUnavailableError(str(e)) from e
        self.listening = True
        try:
            with microphone as source:
                audio = self._recognizer.listen(source, timeout=self.timeout)
            return self._recognizer.recognize_google(audio, language=self.locale)
        except (sr.WaitTimeoutError, sr.UnknownValueError, sr.RequestError) as e:
            logger.warning(f"Voice input failed: {e}")
            return None
        except OSError as e:
            # opening the input stream fails when there is no capture device
            raise VoiceUnavailableError(str(e)) from e
        finally:
            self.listening = False
