"""Application configuration: loads .env, then overrides from settings.json."""

import json
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

from field_logistics.utils.constants import (
    DEFAULT_LOGISTICS_JOB_TYPE_NAME,
    REPORT_FORMATS,
)

logger = logging.getLogger(__name__)

# Repository root; .env and data/ live here
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
load_dotenv(_PROJECT_ROOT / ".env")

# Logistics and report settings saved by update_* calls
_SETTINGS_FILE = _PROJECT_ROOT / "data" / "settings.json"


def _load_settings() -> dict:
    """Saved settings overrides, or {} when there is no usable file."""
    if not _SETTINGS_FILE.exists():
        return {}
    try:
        settings = json.loads(_SETTINGS_FILE.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable settings file {_SETTINGS_FILE}: {e}")
        return {}
    if not isinstance(settings, dict):
        logger.warning(f"Ignoring settings file {_SETTINGS_FILE}: not an object")
        return {}
    return settings


def _save_settings(settings: dict):
    """Write the full settings dict back to data/settings.json."""
    _SETTINGS_FILE.parent.mkdir(parents=True, exist_ok=True)
    _SETTINGS_FILE.write_text(
        json.dumps(settings, indent=2), encoding="utf-8"
    )


# Overrides read once; Config attributes below fall back to .env
_runtime = _load_settings()


class Config:
    """Central configuration: .env defaults, settings.json overrides."""

    # Paths
    PROJECT_ROOT: Path = _PROJECT_ROOT
    DATA_DIRECTORY: Path = Path(
        os.getenv("DATA_DIRECTORY", str(_PROJECT_ROOT / "data"))
    )

    # Logistics (settings.json overrides .env)
    LOGISTICS_JOB_TYPE_NAME: str = _runtime.get(
        "logistics_job_type_name",
        os.getenv("LOGISTICS_JOB_TYPE_NAME", DEFAULT_LOGISTICS_JOB_TYPE_NAME),
    )
    LOGISTICS_NUMBER_PREFIX: str = _runtime.get(
        "logistics_number_prefix",
        os.getenv("LOGISTICS_NUMBER_PREFIX", "LOG"),
    )

    # Reports
    REPORT_FORMAT: str = _runtime.get(
        "report_format",
        os.getenv("REPORT_FORMAT", "csv"),
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def update_logistics_settings(cls, job_type_name: str,
                                  number_prefix: str):
        """Update logistics job settings at runtime and persist to disk."""
        cls.LOGISTICS_JOB_TYPE_NAME = job_type_name
        cls.LOGISTICS_NUMBER_PREFIX = number_prefix

        settings = _load_settings()
        settings["logistics_job_type_name"] = job_type_name
        settings["logistics_number_prefix"] = number_prefix
        _save_settings(settings)

    @classmethod
    def update_report_format(cls, fmt: str):
        """Update the default report format and persist."""
        fmt = fmt.lower()
        if fmt not in REPORT_FORMATS:
            raise ValueError(
                f"Unknown report format: {fmt}. "
                f"Use one of {', '.join(REPORT_FORMATS)}."
            )
        cls.REPORT_FORMAT = fmt

        settings = _load_settings()
        settings["report_format"] = fmt
        _save_settings(settings)
