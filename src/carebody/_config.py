# Area: Shared
"""
carebody._config — Core configuration
=====================================

Constants shared by the lifecycle and timing modules, plus
environment-driven settings loading.

Settings can be provided via a ``.env`` file or the process environment:

    CAREBODY_TICK_SECONDS=1
    CAREBODY_CONSULTATION_MINUTES=30
    CAREBODY_LOG_LEVEL=INFO
    CAREBODY_LOG_FILE=carebody.log
"""

import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger("carebody")

# Countdown cadence
TICK_INTERVAL_SECONDS = 1.0

# Consultations without scheduledEnd last this long
DEFAULT_CONSULTATION_MINUTES = 30

ROLES = ("patient", "doctor", "health_worker", "ngo", "admin", "user")

# Roles a consultation can be assigned to
PROVIDER_ROLES = ("doctor", "health_worker")

# Consultation types that go through the meeting provider
CALL_TYPES = ("video", "audio")

DEFAULT_SETTINGS: Dict[str, Any] = {
    "tick_seconds": TICK_INTERVAL_SECONDS,
    "consultation_minutes": DEFAULT_CONSULTATION_MINUTES,
    "log_level": "INFO",
    "log_file": "carebody.log",
}

ENV_MAPPINGS = {
    "CAREBODY_TICK_SECONDS": "tick_seconds",
    "CAREBODY_CONSULTATION_MINUTES": "consultation_minutes",
    "CAREBODY_LOG_LEVEL": "log_level",
    "CAREBODY_LOG_FILE": "log_file",
}


def load_settings(env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load settings from defaults, an optional .env file and the environment.

    Args:
        env_file: Path to a .env file. When None, python-dotenv searches
                  for a .env file starting from the working directory.

    Returns:
        Validated settings dict

    Raises:
        ValueError: If a numeric setting cannot be parsed or is out of range
    """
    load_dotenv(dotenv_path=env_file)
    settings = dict(DEFAULT_SETTINGS)

    for env_key, settings_key in ENV_MAPPINGS.items():
        if env_key not in os.environ:
            continue
        value: Any = os.environ[env_key]
        try:
            if settings_key == "tick_seconds":
                value = float(value)
            elif settings_key == "consultation_minutes":
                value = int(value)
        except ValueError:
            raise ValueError(f"Invalid value for {env_key}: {value!r}") from None
        settings[settings_key] = value

    validate_settings(settings)
    return settings


def validate_settings(settings: Dict[str, Any]) -> None:
    """
    Validate a settings dict.

    Raises:
        ValueError: If keys are missing or values are out of range
    """
    missing = [k for k in DEFAULT_SETTINGS if k not in settings]
    if missing:
        raise ValueError(f"Missing required settings: {missing}")
    if settings["tick_seconds"] <= 0:
        raise ValueError("tick_seconds must be positive")
    if settings["consultation_minutes"] <= 0:
        raise ValueError("consultation_minutes must be positive")
    level = str(settings["log_level"]).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"Unknown log level: {settings['log_level']}")
