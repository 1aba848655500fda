"""Match window titles against blacklist and whitelist regular expressions."""

import re
import sys
from collections.abc import Iterable
from pathlib import Path


def _load_patterns(path: str | Path) -> list[re.Pattern[str]]:
    """Compile one pattern per non-blank, non-comment line of a file.

    A missing file yields no patterns; invalid patterns are reported and skipped.
    """
    path = Path(path)
    if not path.exists():
        return []
    patterns = []
    for raw in path.read_text(encoding="utf-8").split("\n"):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        try:
            patterns.append(re.compile(line))
        except re.error as exc:
            print(f"Invalid regex pattern '{line}': {exc}", file=sys.stderr)
    return patterns


class Filter:
    """Decides whether titles are blacklisted, with whitelist matches taking priority."""

    def __init__(self, blacklist_path: str | Path, whitelist_path: str | Path) -> None:
        self.blacklist = _load_patterns(blacklist_path)
        self.whitelist = _load_patterns(whitelist_path)

    def is_blacklisted(self, title: str) -> bool:
        """True if the title matches a blacklist pattern and no whitelist pattern."""
        return any(p.search(title) for p in self.blacklist) and not self.is_whitelisted(title)

    def is_whitelisted(self, title: str) -> bool:
        return any(p.search(title) for p in self.whitelist)

    def check_titles(self, titles: Iterable[str]) -> bool:
        """True if any of the titles is blacklisted."""
        return any(self.is_blacklisted(title) for title in titles)