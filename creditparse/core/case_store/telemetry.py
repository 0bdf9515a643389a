import logging
import time
from typing import Any, Callable, Mapping, Optional

logger = logging.getLogger(__name__)

Emitter = Callable[[str, Mapping[str, Any]], None]

_emit: Optional[Emitter] = None


def set_emitter(fn: Optional[Emitter]) -> None:
    """Swap the global emitter for tests or integration."""
    global _emit
    _emit = fn


def emit(event: str, **fields: Any) -> None:
    """Fire-and-forget; safe if no emitter is registered."""
    if _emit:
        try:
            _emit(event, fields)
        except Exception:
            logger.debug("case_store_emit_failed event=%s", event, exc_info=True)


class timed:
    """Context manager to measure duration_ms and emit after block."""

    def __init__(self, event: str, **base_fields: Any):
        self.event = event
        self.base = base_fields

    def __enter__(self):
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb):
        dur = (time.perf_counter() - self.t0) * 1000.0
        emit(self.event, duration_ms=round(dur, 3), **self.base)
