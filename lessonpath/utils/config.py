"""
Settings loader for lessonpath.

Loads YAML settings (unlock threshold, progress database, courses directory).
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from lessonpath.classroom.engine import UNLOCK_THRESHOLD
from lessonpath.classroom.progress import DEFAULT_PROGRESS_DB


# Default settings file (relative to the working directory)
DEFAULT_CONFIG_PATH = Path("lessonpath.yaml")


class Settings(BaseModel):
    unlock_threshold: float = Field(default=UNLOCK_THRESHOLD, gt=0, le=1)
    progress_db: Path = DEFAULT_PROGRESS_DB
    courses_dir: Path = Path("courses")


def load_settings(path: Path | None = None) -> Settings:
    """
    Load settings from a YAML file.

    Args:
        path: Settings file. When omitted, lessonpath.yaml in the working
            directory is used if present, otherwise defaults.

    Returns:
        Validated Settings

    Raises:
        FileNotFoundError: If an explicit path doesn't exist
        ValueError: If a value is out of range
        yaml.YAMLError: If YAML parsing fails
    """
    if path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return Settings()
        path = DEFAULT_CONFIG_PATH

    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"Settings file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return Settings.model_validate(data)
