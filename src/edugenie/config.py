"""Runtime settings read from the environment (and a local .env file)."""
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = str(Path.home() / ".edugenie" / "edugenie.db")
DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_QUIZ_SIZE = 5


def _log_level(name: str) -> str:
    name = name.strip().upper()
    # getLevelName maps known names to their numeric level
    return name if isinstance(logging.getLevelName(name), int) else "WARNING"


@dataclass
class Settings:
    api_key: str = ""
    model_name: str = DEFAULT_MODEL
    db_path: str = DEFAULT_DB_PATH
    log_level: str = "WARNING"
    quiz_size: int = DEFAULT_QUIZ_SIZE

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        quiz_size = os.environ.get("EDUGENIE_QUIZ_SIZE", "")
        return cls(
            api_key=os.environ.get("GOOGLE_API_KEY", ""),
            model_name=os.environ.get("EDUGENIE_MODEL", DEFAULT_MODEL),
            db_path=os.environ.get("EDUGENIE_DB_PATH", DEFAULT_DB_PATH),
            log_level=_log_level(os.environ.get("EDUGENIE_LOG_LEVEL", "WARNING")),
            quiz_size=int(quiz_size) if quiz_size.isdigit() and int(quiz_size) > 0 else DEFAULT_QUIZ_SIZE,
        )
