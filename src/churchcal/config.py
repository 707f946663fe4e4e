"""Configuration management for churchcal."""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

logger = logging.getLogger(__name__)

CHURCHCAL_HOME = Path(os.environ.get("CHURCHCAL_HOME", Path.home() / "churchcal"))
CONFIG_FILE = CHURCHCAL_HOME / "config" / "churchcal.conf"
DATA_DIR = CHURCHCAL_HOME / "data"

BACKENDS = ("file", "supabase")


@dataclass
class Config:
    """churchcal configuration."""

    backend: str = "file"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_access_token: str = ""
    data_file: str = ""
    week_start: str = "Sunday"
    calendar_year: int = field(default_factory=lambda: date.today().year)
    fallback_color: str = "#999999"
    calendar_title: str = "Church Calendar"

    def data_path(self) -> Path:
        """Where the file backend keeps its events."""
        if self.data_file:
            return Path(self.data_file).expanduser()
        return DATA_DIR / "events.json"


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value.startswith('"') or value.startswith("'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        if end_quote != -1:
            return value[1:end_quote]
        return value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config() -> Config:
    """Load configuration from churchcal.conf, then apply environment overrides."""
    config = Config()

    if CONFIG_FILE.exists():
        for line in CONFIG_FILE.read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            if "=" not in line:
                continue

            key, _, value = line.partition("=")
            key = key.strip().lower()
            value = _unquote(value.strip())

            match key:
                case "backend":
                    if value.lower() in BACKENDS:
                        config.backend = value.lower()
                    else:
                        logger.warning(f"Unknown BACKEND {value!r}, using {config.backend!r}")
                case "supabase_url":
                    config.supabase_url = value.rstrip("/")
                case "supabase_key":
                    config.supabase_key = value
                case "supabase_access_token":
                    config.supabase_access_token = value
                case "data_file":
                    config.data_file = value
                case "week_start":
                    config.week_start = value
                case "calendar_year":
                    try:
                        config.calendar_year = int(value)
                    except ValueError:
                        logger.warning(f"Invalid CALENDAR_YEAR {value!r}, using {config.calendar_year}")
                case "fallback_color":
                    config.fallback_color = value
                case "calendar_title":
                    config.calendar_title = value

    if os.environ.get("SUPABASE_URL"):
        config.supabase_url = os.environ["SUPABASE_URL"].rstrip("/")
    if os.environ.get("SUPABASE_KEY"):
        config.supabase_key = os.environ["SUPABASE_KEY"]

    return config
