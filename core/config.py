# core/config.py

"""
Application settings for the class progress tracker.

Values are read from environment variables prefixed with `GRADEBOOK_` (or a local `.env` file),
e.g. `GRADEBOOK_TEACHER_CODE=secret` or `GRADEBOOK_DATA_DIR=/tmp/marks`.
List settings accept JSON, e.g. `GRADEBOOK_CLASSES='["9","10"]'`.
"""

import os
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_data_dir() -> str:
    documents = os.path.join(os.path.expanduser("~"), "Documents")
    return os.path.join(documents, "Gradebooks", "progress")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GRADEBOOK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # placeholder gate, not a security mechanism
    teacher_code: str = "p3"

    data_dir: str = _default_data_dir()

    classes: list[str] = ["9", "10", "11", "12"]
    subjects: list[str] = ["Maths", "English"]
    default_class: str = "9"
    default_subject: str = "Maths"

    pass_threshold: float = 33.0

    log_level: str = "WARNING"

    @property
    def resolved_data_dir(self) -> str:
        return os.path.abspath(os.path.expanduser(self.data_dir))


@lru_cache
def get_settings() -> Settings:
    return Settings()
