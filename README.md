# videoguard

videoguard keeps an eye on open window titles. When a title matches a
blacklist pattern and no whitelist pattern, it closes the browser, blocks it
for a while and switches the desktop background. It also schedules regular
breaks, during which the browser is closed and stays closed.

It is meant for Linux desktops running X. It calls these programs:

- `feh` to set the desktop background,
- `pgrep` to find the browser's processes,
- `xwininfo` to list window titles in daemon mode.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Usage

Start the browser. While a block or a break is in effect, it is not started
and the matching background is shown instead. If a break is due, starting the
browser begins the break:

```
videoguard --start-browser
```

Run the monitor, which checks window titles and the break schedule every
`check_frequency_seconds`:

```
videoguard --daemon
```

In daemon mode the titles of the top-level windows (the direct children of
the X root window) are read with `xwininfo -root -children`. The `DISPLAY`
environment variable must be set. When blacklisted content is found, the
browser's processes get SIGTERM, and two seconds later any still running get
SIGKILL; the block then lasts `blacklist_timeout_minutes`. When a break is
due, the browser is closed the same way and the break lasts
`bathroom_break_minutes`; the next one is scheduled
`bathroom_break_interval_hours` later.

Use a configuration file other than `config.yaml`:

```
videoguard --config /path/to/config.yaml --daemon
```

If the configuration file cannot be read or is invalid, the built-in defaults
(shown below) are used. With neither `--start-browser` nor `--daemon`, the
command prints a hint and exits. `videoguard --version` prints the version.

## Configuration

```yaml
browser:
  executable: "firefox"
  url: "https://www.google.com"
  process_name: "firefox"

monitoring:
  check_frequency_seconds: 60

timeouts:
  blacklist_timeout_minutes: 10
  bathroom_break_minutes: 10
  bathroom_break_interval_hours: 3

backgrounds:
  normal: "/home/user/backgrounds/normal.jpg"
  blocked: "/home/user/backgrounds/blocked.jpg"
  bathroom_break: "/home/user/backgrounds/bathroom.jpg"

files:
  blacklist: "blacklist.txt"
  whitelist: "whitelist.txt"
  state_file: "/tmp/ivh_state.json"
```

All sections and keys are required. Numbers must be non-negative integers and
the other values strings; anything else raises `videoguard.config.ConfigError`
when the file is loaded with `Config.load`. `Config.to_yaml()` writes a
configuration back out in this format.

`process_name` is matched against full command lines with `pgrep -f`. An empty
`process_name` matches no processes.

## Pattern files

The blacklist and whitelist files hold one Python regular expression per line.
Blank lines and lines starting with `#` are skipped. A pattern that does not
compile is reported on stderr and left out. Patterns match anywhere in a
title. Matching is case sensitive unless the pattern says otherwise, for
example with `(?i)`.

```
# blacklist.txt
(?i).*casino.*
.*\bspoilers\b.*
```

A title counts as blacklisted when some blacklist pattern matches it and no
whitelist pattern does. A missing pattern file counts as an empty list.

## State

The block deadline and break schedule are kept as pretty-printed JSON in the
configured `state_file`, with UTC timestamps, so they still hold after a
restart. If the file does not exist, a fresh state is used whose first break
is due three hours from now. A file that cannot be parsed raises
`videoguard.state.StateError`.

## Library use

```python
from videoguard.config import Config
from videoguard.title_filter import Filter
from videoguard.state import AppState

config = Config.load("config.yaml")
title_filter = Filter(config.files.blacklist, config.files.whitelist)
if title_filter.check_titles(["Some window title"]):
    state = AppState.load(config.files.state_file)
    state.block_browser(config.timeouts.blacklist_timeout_minutes)
    state.save(config.files.state_file)
```

Other pieces:

- `videoguard.browser.BrowserManager(executable, process_name)` with
  `start_browser(url)`, `find_browser_pids()`, `kill_browser_processes()` and
  `has_running_processes()`.
- `videoguard.background` with `set_background(image_path)` and
  `set_normal_background`, `set_blocked_background` and
  `set_bathroom_break_background`. A failing `feh` run is reported on stderr,
  not raised.
- `videoguard.cli.run_daemon(config, window_titles)` runs the monitoring loop
  forever with any callable that returns the current window titles, and
  `videoguard.cli.handle_start_browser(config)` does what `--start-browser`
  does.

## What it does not do

Window titles are read only through `xwininfo` on an X display; there is no
support for Wayland or other desktops. Only top-level windows are checked,
not nested ones or browser tabs that are not the window's title. The daemon
runs in the foreground; it does not detach itself or install a service.