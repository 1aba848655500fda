"""Start the configured browser and terminate its running processes."""

import os
import signal
import subprocess
import sys
import time

TERMINATE_GRACE_SECONDS = 2


class BrowserManager:
    """Launches a browser executable and finds or kills processes matching its name."""

    def __init__(self, executable: str, process_name: str) -> None:
        self.executable = executable
        self.process_name = process_name

    def start_browser(self, url: str) -> subprocess.Popen:
        """Launch the browser on the URL; raises OSError if it cannot be started."""
        return subprocess.Popen([self.executable, url])

    def find_browser_pids(self) -> list[int]:
        """Process ids whose command line matches the process name.

        An empty process name matches nothing. Raises OSError if pgrep cannot run.
        """
        if not self.process_name:
            return []
        result = subprocess.run(
            ["pgrep", "-f", self.process_name],
            capture_output=True,
            check=False,
        )
        if result.returncode != 0:
            return []
        pids = []
        for line in result.stdout.decode("utf-8", errors="replace").splitlines():
            try:
                pids.append(int(line.strip()))
            except ValueError:
                continue
        return pids

    def kill_browser_processes(self) -> None:
        """Ask matching processes to terminate, then kill those still running."""
        self._signal_all(signal.SIGTERM, "Terminated", "terminate")
        time.sleep(TERMINATE_GRACE_SECONDS)
        self._signal_all(signal.SIGKILL, "Killed", "kill")

    def has_running_processes(self) -> bool:
        try:
            return bool(self.find_browser_pids())
        except OSError:
            return False

    def _signal_all(self, signum: int, done: str, verb: str) -> None:
        for pid in self.find_browser_pids():
            try:
                os.kill(pid, signum)
            except OSError as exc:
                print(f"Failed to {verb} process {pid}: {exc}", file=sys.stderr)
            else:
                print(f"{done} process {pid}")