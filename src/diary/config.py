"""Configuration management for diary."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

DIARY_HOME = Path(os.environ.get("DIARY_HOME", Path.home() / ".diary"))
CONFIG_FILE = DIARY_HOME / "diary.conf"
ENTRIES_FILE = DIARY_HOME / "diary_entries.json"


@dataclass
class Config:
    """Diary configuration."""

    entries_file: str = ""
    assistant_url: str = "http://localhost:11434/api/chat"
    assistant_model: str = "llama3.2"
    assistant_timeout: int = 120
    date_format: str = "%Y-%m-%d %H:%M"

    @property
    def entries_path(self) -> Path:
        """Resolved location of the state file."""
        if self.entries_file:
            return Path(self.entries_file).expanduser()
        return ENTRIES_FILE


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def load_config(path: Path | None = None) -> Config:
    """Load configuration from diary.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "entries_file":
                config.entries_file = value
            case "assistant_url":
                config.assistant_url = value
            case "assistant_model":
                config.assistant_model = value
            case "assistant_timeout":
                try:
                    config.assistant_timeout = int(value)
                except ValueError:
                    logger.warning(f"Ignoring invalid ASSISTANT_TIMEOUT: {value}")
            case "date_format":
                config.date_format = value

    return config
