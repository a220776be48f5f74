# common/logger/logger_middleware/request_timer.py
import time
from contextlib import contextmanager
from typing import Iterator


class RequestTimer:
    """Per-request accumulator of named durations, in milliseconds."""

    def __init__(self) -> None:
        self.timings: dict[str, float] = {}

    @contextmanager
    def capture(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = (time.perf_counter() - start) * 1000
            # Same name used multiple times accumulates
            self.timings[name] = self.timings.get(name, 0) + duration

    def get(self, name: str) -> float:
        return round(self.timings.get(name, 0.0), 2)

    def format_server_timing(self) -> str:
        # db;dur=10.50, app;dur=5.20
        return ", ".join(
            f"{name};dur={dur:.2f}" for name, dur in self.timings.items()
        )


__all__ = ["RequestTimer"]
