import json
import threading
import time
from datetime import datetime, timedelta, timezone

import pytest

from videoguard.state import AppState, StateError


def now():
    return datetime.now(timezone.utc)


def test_app_state_default():
    state = AppState()
    assert state.blocked_until is None
    assert state.in_bathroom_break is False
    assert state.bathroom_break_until is None
    assert state.next_bathroom_break == datetime(1970, 1, 1, tzinfo=timezone.utc)


def test_app_state_load_nonexistent_file():
    state = AppState.load("/nonexistent/path/state.json")
    assert state.blocked_until is None
    assert state.in_bathroom_break is False
    assert state.bathroom_break_until is None
    assert state.next_bathroom_break > now()


def test_app_state_save_and_load(tmp_path):
    path = tmp_path / "state.json"
    original = AppState()
    original.blocked_until = now() + timedelta(minutes=10)
    original.in_bathroom_break = True
    original.bathroom_break_until = now() + timedelta(minutes=5)
    original.save(path)

    loaded = AppState.load(path)
    assert loaded.blocked_until == original.blocked_until
    assert loaded.in_bathroom_break == original.in_bathroom_break
    assert loaded.bathroom_break_until == original.bathroom_break_until
    assert loaded.next_bathroom_break == original.next_bathroom_break


def test_saved_document_layout(tmp_path):
    path = tmp_path / "state.json"
    state = AppState(next_bathroom_break=datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc))
    state.save(path)
    data = json.loads(path.read_text())
    assert data == {
        "blocked_until": None,
        "next_bathroom_break": "2024-05-01T12:30:00Z",
        "in_bathroom_break": False,
        "bathroom_break_until": None,
    }


def test_load_nanosecond_timestamp(tmp_path):
    path = tmp_path / "state.json"
    path.write_text(
        json.dumps(
            {
                "blocked_until": "2024-05-01T12:30:00.123456789Z",
                "next_bathroom_break": "2024-05-01T14:00:00+02:00",
                "in_bathroom_break": False,
                "bathroom_break_until": None,
            }
        )
    )
    state = AppState.load(path)
    assert state.blocked_until == datetime(2024, 5, 1, 12, 30, 0, 123456, tzinfo=timezone.utc)
    assert state.next_bathroom_break == datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_load_missing_optional_fields(tmp_path):
    path = tmp_path / "state.json"
    path.write_text('{"next_bathroom_break": "2030-01-01T00:00:00Z", "in_bathroom_break": true}')
    state = AppState.load(path)
    assert state.blocked_until is None
    assert state.bathroom_break_until is None
    assert state.in_bathroom_break is True


def test_load_missing_required_field(tmp_path):
    path = tmp_path / "state.json"
    path.write_text('{"in_bathroom_break": false}')
    with pytest.raises(StateError, match="next_bathroom_break"):
        AppState.load(path)


def test_load_naive_timestamp_rejected(tmp_path):
    path = tmp_path / "state.json"
    path.write_text('{"next_bathroom_break": "2030-01-01T00:00:00", "in_bathroom_break": false}')
    with pytest.raises(StateError):
        AppState.load(path)


def test_app_state_load_invalid_json(tmp_path):
    path = tmp_path / "state.json"
    path.write_text("invalid json content")
    with pytest.raises(StateError):
        AppState.load(path)


def test_is_blocked_when_not_blocked():
    assert AppState().is_blocked() is False


def test_is_blocked_when_blocked_future():
    state = AppState(blocked_until=now() + timedelta(minutes=10))
    assert state.is_blocked() is True


def test_is_blocked_when_blocked_past():
    state = AppState(blocked_until=now() - timedelta(minutes=10))
    assert state.is_blocked() is False


def test_block_browser():
    state = AppState()
    assert not state.is_blocked()
    state.block_browser(15)
    assert state.is_blocked()
    expected = now() + timedelta(minutes=15)
    assert abs((state.blocked_until - expected).total_seconds()) < 2


def test_is_bathroom_break_time_not_in_break():
    state = AppState(next_bathroom_break=now() - timedelta(minutes=1), in_bathroom_break=False)
    assert state.is_bathroom_break_time(3) is True


def test_is_bathroom_break_time_future():
    state = AppState(next_bathroom_break=now() + timedelta(minutes=10), in_bathroom_break=False)
    assert state.is_bathroom_break_time(3) is False


def test_is_bathroom_break_time_currently_in_break():
    state = AppState(in_bathroom_break=True, bathroom_break_until=now() + timedelta(minutes=5))
    assert state.is_bathroom_break_time(3) is True


def test_is_bathroom_break_time_break_expired():
    state = AppState(in_bathroom_break=True, bathroom_break_until=now() - timedelta(minutes=5))
    assert state.is_bathroom_break_time(3) is False


def test_start_bathroom_break():
    state = AppState()
    assert not state.in_bathroom_break
    assert state.bathroom_break_until is None

    state.start_bathroom_break(10, 3)
    assert state.in_bathroom_break
    assert state.bathroom_break_until is not None
    assert abs((state.bathroom_break_until - (now() + timedelta(minutes=10))).total_seconds()) < 2
    assert abs((state.next_bathroom_break - (now() + timedelta(hours=3))).total_seconds()) < 2


def test_end_bathroom_break():
    state = AppState(in_bathroom_break=True, bathroom_break_until=now() + timedelta(minutes=5))
    state.end_bathroom_break()
    assert state.in_bathroom_break is False
    assert state.bathroom_break_until is None


def test_with_next_break():
    state = AppState.with_next_break()
    assert state.blocked_until is None
    assert state.in_bathroom_break is False
    assert state.bathroom_break_until is None
    assert abs((state.next_bathroom_break - (now() + timedelta(hours=3))).total_seconds()) < 2


def test_multiple_block_operations():
    state = AppState()
    state.block_browser(5)
    first = state.blocked_until
    state.block_browser(15)
    second = state.blocked_until
    assert second > first


def test_bathroom_break_state_transitions():
    state = AppState()
    state.start_bathroom_break(10, 3)
    assert state.in_bathroom_break
    assert state.bathroom_break_until > now()

    state.end_bathroom_break()
    assert not state.in_bathroom_break
    assert state.bathroom_break_until is None

    state.start_bathroom_break(5, 2)
    assert state.in_bathroom_break
    assert state.bathroom_break_until > now()


def test_state_persistence_workflow(tmp_path):
    path = tmp_path / "test_state.json"
    state = AppState()
    assert not state.is_blocked()
    assert not state.in_bathroom_break

    state.block_browser(10)
    assert state.is_blocked()
    state.save(path)

    loaded = AppState.load(path)
    assert loaded.is_blocked()

    loaded.start_bathroom_break(5, 2)
    assert loaded.in_bathroom_break
    loaded.save(path)

    final = AppState.load(path)
    assert final.in_bathroom_break
    assert final.is_blocked()


def test_timeout_expiration_logic():
    state = AppState()
    state.block_browser(0)
    time.sleep(0.01)
    assert state.is_blocked() is False

    state.start_bathroom_break(0, 1)
    time.sleep(0.01)
    assert state.is_bathroom_break_time(1) is False


def test_concurrent_operations(tmp_path):
    path = tmp_path / "concurrent_state.json"
    lock = threading.Lock()

    def worker(minutes):
        state = AppState()
        state.block_browser(minutes)
        with lock:
            state.save(path)

    threads = [threading.Thread(target=worker, args=(i + 1,)) for i in range(5)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = AppState.load(path)
    assert final.is_blocked()


def test_time_calculations():
    state = AppState()
    start = now()
    state.block_browser(5)
    minutes = (state.blocked_until - start).total_seconds() / 60
    assert 4 <= minutes <= 6

    state.start_bathroom_break(3, 2)
    expected_next = now() + timedelta(hours=2)
    assert abs((state.next_bathroom_break - expected_next).total_seconds()) < 5