"""Configuration management for orgcheck."""

import json
import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from .core.classify import WindowConfig
from .core.rules import FilterConfig
from .core.timestamps import is_valid_time_of_day

logger = logging.getLogger(__name__)

ORGCHECK_HOME = Path(os.environ.get("ORGCHECK_HOME", Path.home() / "orgcheck"))
CONFIG_FILE = ORGCHECK_HOME / "config" / "orgcheck.conf"
REPORT_DIR = ORGCHECK_HOME / "reports"

TRUE_VALUES = {"1", "true", "yes", "on"}


class ConfigError(ValueError):
    """Raised when a setting can't be used."""

    pass


@dataclass
class Config:
    """orgcheck configuration."""

    org_files: list[str] = field(default_factory=list)
    included_tags: list[str] = field(default_factory=list)
    excluded_tags: list[str] = field(default_factory=list)
    included_keywords: list[str] = field(default_factory=list)
    excluded_keywords: list[str] = field(default_factory=list)
    included_files: list[str] = field(default_factory=list)
    excluded_files: list[str] = field(default_factory=list)
    included_properties: list[tuple[str, str]] = field(default_factory=list)
    excluded_properties: list[tuple[str, str]] = field(default_factory=list)
    use_tag_inheritance: bool = True
    # Windows, in minutes
    schedule_lead_minutes: int = 60
    deadline_lead_minutes: int = 1440
    schedule_grace_minutes: int = 600
    deadline_grace_minutes: int = 1440
    default_schedule_time: str = "09:00"
    default_deadline_time: str = "23:59"
    # Report
    report_name: str = "tasks-report"
    report_dir: str = str(REPORT_DIR)
    use_links: bool = False
    # Watch mode
    scan_interval_minutes: int = 30
    check_interval_minutes: int = 5

    def validate(self) -> None:
        """Raise ConfigError for settings the core can't work with."""
        for name in ("default_schedule_time", "default_deadline_time"):
            value = getattr(self, name)
            if not is_valid_time_of_day(value):
                raise ConfigError(f"{name.upper()} must be HH:MM, got {value!r}")
        for name in (
            "schedule_lead_minutes",
            "deadline_lead_minutes",
            "schedule_grace_minutes",
            "deadline_grace_minutes",
        ):
            if getattr(self, name) < 0:
                raise ConfigError(f"{name.upper()} must be non-negative")
        for name in ("scan_interval_minutes", "check_interval_minutes"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name.upper()} must be at least 1")

    def filter_config(self) -> FilterConfig:
        return FilterConfig(
            included_tags=tuple(self.included_tags),
            excluded_tags=tuple(self.excluded_tags),
            included_keywords=tuple(self.included_keywords),
            excluded_keywords=tuple(self.excluded_keywords),
            included_properties=tuple(self.included_properties),
            excluded_properties=tuple(self.excluded_properties),
            included_files=tuple(self.included_files),
            excluded_files=tuple(self.excluded_files),
            use_tag_inheritance=self.use_tag_inheritance,
        )

    def window_config(self) -> WindowConfig:
        return WindowConfig(
            schedule_lead=self.schedule_lead_minutes,
            deadline_lead=self.deadline_lead_minutes,
            schedule_grace=self.schedule_grace_minutes,
            deadline_grace=self.deadline_grace_minutes,
        )

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _split_list(value: str) -> list[str]:
    return [v.strip() for v in value.split(",") if v.strip()]


def parse_properties(value: str) -> list[tuple[str, str]]:
    """
    Parse property rules.

    JSON format: [["KEY", "VALUE"], {"key": "KEY", "value": "VALUE"}]
    Simple format: "KEY:VALUE,KEY2:VALUE2"
    Keys are upper-cased to match Org's case-insensitive property names.
    """
    pairs = []
    if value.startswith("["):
        try:
            for item in json.loads(value):
                if isinstance(item, dict):
                    pairs.append((str(item["key"]).upper(), str(item["value"])))
                else:
                    key, val = item
                    pairs.append((str(key).upper(), str(val)))
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            logger.warning(f"Failed to parse property list JSON: {e}")
            return []
        return pairs

    for entry in _split_list(value):
        if ":" not in entry:
            logger.warning(f"Ignoring property rule without ':' separator: {entry}")
            continue
        key, val = entry.split(":", 1)
        pairs.append((key.strip().upper(), val.strip()))
    return pairs


def _parse_int(key: str, value: str, default: int) -> int:
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid integer for {key.upper()}: {value!r}, keeping {default}")
        return default


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in TRUE_VALUES


def _unquote(value: str) -> str:
    # Handle quoted values with inline comments: "value" # comment
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    # Unquoted: strip inline comments
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


LIST_KEYS = {
    "org_files",
    "included_tags",
    "excluded_tags",
    "included_keywords",
    "excluded_keywords",
    "included_files",
    "excluded_files",
}
PROPERTY_KEYS = {"included_properties", "excluded_properties"}
INT_KEYS = {
    "schedule_lead_minutes",
    "deadline_lead_minutes",
    "schedule_grace_minutes",
    "deadline_grace_minutes",
    "scan_interval_minutes",
    "check_interval_minutes",
}
BOOL_KEYS = {"use_tag_inheritance", "use_links"}
STRING_KEYS = {"default_schedule_time", "default_deadline_time", "report_name", "report_dir"}


def load_config(path: Path | None = None) -> Config:
    """Load configuration from orgcheck.conf file."""
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

        if key in LIST_KEYS:
            setattr(config, key, _split_list(value))
        elif key in PROPERTY_KEYS:
            setattr(config, key, parse_properties(value))
        elif key in INT_KEYS:
            setattr(config, key, _parse_int(key, value, getattr(config, key)))
        elif key in BOOL_KEYS:
            setattr(config, key, _parse_bool(value))
        elif key in STRING_KEYS:
            setattr(config, key, value)
        else:
            logger.debug(f"Ignoring unknown setting {key.upper()}")

    return config
