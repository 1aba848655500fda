"""Configuration for the browser guard, loaded from a YAML file."""

from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Any

import yaml


class ConfigError(ValueError):
    """Raised when a configuration document is malformed or incomplete."""


@dataclass
class BrowserConfig:
    executable: str = "firefox"
    url: str = "https://www.google.com"
    process_name: str = "firefox"


@dataclass
class MonitoringConfig:
    check_frequency_seconds: int = 60


@dataclass
class TimeoutConfig:
    blacklist_timeout_minutes: int = 10
    bathroom_break_minutes: int = 10
    bathroom_break_interval_hours: int = 3


@dataclass
class BackgroundConfig:
    normal: str = "/home/user/backgrounds/normal.jpg"
    blocked: str = "/home/user/backgrounds/blocked.jpg"
    bathroom_break: str = "/home/user/backgrounds/bathroom.jpg"


@dataclass
class FileConfig:
    blacklist: str = "blacklist.txt"
    whitelist: str = "whitelist.txt"
    state_file: str = "/tmp/ivh_state.json"


@dataclass
class Config:
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    monitoring: MonitoringConfig = field(default_factory=MonitoringConfig)
    timeouts: TimeoutConfig = field(default_factory=TimeoutConfig)
    backgrounds: BackgroundConfig = field(default_factory=BackgroundConfig)
    files: FileConfig = field(default_factory=FileConfig)

    @classmethod
    def load(cls, path: str | Path) -> "Config":
        """Read and validate a YAML configuration file; every field is required."""
        content = Path(path).read_text(encoding="utf-8")
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {path}: {exc}") from exc
        return _build(cls, data, "")

    def to_yaml(self) -> str:
        """Serialise the configuration as a YAML document."""
        return yaml.safe_dump(asdict(self), sort_keys=False)


def _build(cls: type, data: Any, where: str) -> Any:
    if not isinstance(data, dict):
        raise ConfigError(f"{where or 'config'}: expected a mapping")
    values = {}
    for f in fields(cls):
        key = f"{where}.{f.name}" if where else f.name
        if f.name not in data:
            raise ConfigError(f"missing field '{key}'")
        raw = data[f.name]
        if is_dataclass(f.type):
            values[f.name] = _build(f.type, raw, key)
        elif f.type is int:
            if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
                raise ConfigError(f"{key}: expected a non-negative integer, got {raw!r}")
            values[f.name] = raw
        elif f.type is str:
            if not isinstance(raw, str):
                raise ConfigError(f"{key}: expected a string, got {raw!r}")
            values[f.name] = raw
        else:
            values[f.name] = raw
    return cls(**values)