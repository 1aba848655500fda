"""Set the desktop background with feh."""

import subprocess
import sys
from pathlib import Path


def set_background(image_path: str | Path) -> None:
    """Scale the image onto the desktop background.

    A failing feh run is reported on stderr; failing to start feh raises OSError.
    """
    result = subprocess.run(
        ["feh", "--bg-scale", str(image_path)],
        capture_output=True,
        check=False,
    )
    if result.returncode != 0:
        message = result.stderr.decode("utf-8", errors="replace")
        print(f"Failed to set background: {message}", file=sys.stderr)


def set_normal_background(image_path: str | Path) -> None:
    set_background(image_path)


def set_blocked_background(image_path: str | Path) -> None:
    set_background(image_path)


def set_bathroom_break_background(image_path: str | Path) -> None:
    set_background(image_path)