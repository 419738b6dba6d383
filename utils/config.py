import os
from pathlib import Path
from typing import Literal, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from models.errors import ConfigError, TimelogNotFoundError

TIMELOG_ENV_VAR = "TIMELOG"
LOG_LEVEL_ENV_VAR = "LOG_LEVEL"

# Where Emacs records timeclock-in/out entries, relative to the home directory
DEFAULT_TIMELOG_PATH = Path(".emacs.d/.local/etc/timelog")


class Settings(BaseModel):
    log_path_override: Optional[Path] = None
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


def load_settings() -> Settings:
    load_dotenv()
    override = os.getenv(TIMELOG_ENV_VAR)
    log_level = os.getenv(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    try:
        return Settings(
            log_path_override=Path(override) if override else None,
            log_level=log_level,
        )
    except ValidationError as exc:
        raise ConfigError(f"invalid {LOG_LEVEL_ENV_VAR} [{log_level}]") from exc


def default_log_path() -> Path:
    return Path.home() / DEFAULT_TIMELOG_PATH


def resolve_log_path(settings: Settings, override: Optional[Path] = None) -> Path:
    path = override or settings.log_path_override or default_log_path()
    path = path.expanduser()
    if not path.exists():
        raise TimelogNotFoundError(f"time log file [{path}] does not exist")
    return path
