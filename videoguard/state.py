"""Persistent application state: blocks and scheduled bathroom breaks."""

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DEFAULT_BREAK_INTERVAL = timedelta(hours=3)

_TIMESTAMP = re.compile(
    r"^(?P<base>\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<frac>\d+))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})$"
)


class StateError(ValueError):
    """Raised when a state file cannot be understood."""


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(value: datetime | None) -> str | None:
    if value is None:
        return None
    text = value.astimezone(timezone.utc).isoformat()
    return text.replace("+00:00", "Z")


def _parse_time(value: Any, name: str) -> datetime:
    if not isinstance(value, str):
        raise StateError(f"{name}: expected a timestamp string, got {value!r}")
    match = _TIMESTAMP.match(value)
    if not match:
        raise StateError(f"{name}: not an RFC 3339 timestamp: {value!r}")
    frac = match["frac"]
    offset = match["offset"]
    text = match["base"].replace(" ", "T").replace("t", "T")
    if frac:
        text += "." + frac[:6].ljust(6, "0")
    text += "+00:00" if offset in ("Z", "z") else offset
    try:
        return datetime.fromisoformat(text).astimezone(timezone.utc)
    except ValueError as exc:
        raise StateError(f"{name}: {exc}") from exc


def _parse_optional_time(data: dict, name: str) -> datetime | None:
    value = data.get(name)
    return None if value is None else _parse_time(value, name)


@dataclass
class AppState:
    blocked_until: datetime | None = None
    next_bathroom_break: datetime = field(default=EPOCH)
    in_bathroom_break: bool = False
    bathroom_break_until: datetime | None = None

    @classmethod
    def with_next_break(cls) -> "AppState":
        """A fresh state whose first break is due three hours from now."""
        return cls(next_bathroom_break=_now() + DEFAULT_BREAK_INTERVAL)

    @classmethod
    def load(cls, path: str | Path) -> "AppState":
        """Load state from a JSON file, or start fresh if it does not exist."""
        path = Path(path)
        if not path.exists():
            return cls.with_next_break()
        content = path.read_text(encoding="utf-8")
        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise StateError(f"invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise StateError(f"{path}: expected a JSON object")
        if "next_bathroom_break" not in data:
            raise StateError("missing field 'next_bathroom_break'")
        if "in_bathroom_break" not in data:
            raise StateError("missing field 'in_bathroom_break'")
        in_break = data["in_bathroom_break"]
        if not isinstance(in_break, bool):
            raise StateError(f"in_bathroom_break: expected a boolean, got {in_break!r}")
        return cls(
            blocked_until=_parse_optional_time(data, "blocked_until"),
            next_bathroom_break=_parse_time(data["next_bathroom_break"], "next_bathroom_break"),
            in_bathroom_break=in_break,
            bathroom_break_until=_parse_optional_time(data, "bathroom_break_until"),
        )

    def save(self, path: str | Path) -> None:
        """Write the state as pretty-printed JSON."""
        document = {
            "blocked_until": _format_time(self.blocked_until),
            "next_bathroom_break": _format_time(self.next_bathroom_break),
            "in_bathroom_break": self.in_bathroom_break,
            "bathroom_break_until": _format_time(self.bathroom_break_until),
        }
        Path(path).write_text(json.dumps(document, indent=2), encoding="utf-8")

    def is_blocked(self) -> bool:
        return self.blocked_until is not None and _now() < self.blocked_until

    def is_bathroom_break_time(self, interval_hours: int) -> bool:
        """True while a break is running, or once the next break is due."""
        if self.in_bathroom_break and self.bathroom_break_until is not None:
            return _now() < self.bathroom_break_until
        return _now() >= self.next_bathroom_break

    def block_browser(self, timeout_minutes: int) -> None:
        self.blocked_until = _now() + timedelta(minutes=timeout_minutes)

    def start_bathroom_break(self, duration_minutes: int, interval_hours: int) -> None:
        self.in_bathroom_break = True
        self.bathroom_break_until = _now() + timedelta(minutes=duration_minutes)
        self.next_bathroom_break = _now() + timedelta(hours=interval_hours)

    def end_bathroom_break(self) -> None:
        self.in_bathroom_break = False
        self.bathroom_break_until = None