import time

from common.config import redact_sensitive
from common.logger import get_app_logger
from common.logger.logger_middleware import RequestTimer


def test_credentials_are_masked_in_log_events() -> None:
    event = redact_sensitive(None, "info", {"event": "Login", "password": "hunter2", "token": "abc"})
    assert event == {"event": "Login", "password": "****", "token": "****"}


def test_bound_logger_keeps_parent_untouched() -> None:
    parent = get_app_logger("tests.logging")
    child = parent.bind(principal_id="w-1")

    assert child is not parent
    assert child.name == parent.name
    child.info("bound event")  # must not raise once structlog is configured


def test_request_timer_accumulates_by_name() -> None:
    timer = RequestTimer()
    with timer.capture("db"):
        time.sleep(0.001)
    with timer.capture("db"):
        time.sleep(0.001)

    assert timer.get("db") >= 2.0
    assert timer.get("app") == 0.0
    assert timer.format_server_timing().startswith("db;dur=")
