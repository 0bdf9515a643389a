import logging
from collections import Counter

from creditparse.core.config.flags import FLAGS

log = logging.getLogger(__name__)

_COUNTERS: Counter[str] = Counter()
_GAUGES: dict[str, float] = {}


def increment(name: str, value: int = 1, tags: dict | None = None) -> None:
    """Increment a counter metric."""
    if not getattr(FLAGS, "metrics_enabled", True):
        return
    _COUNTERS[name] += value
    log.debug("METRIC increment name=%s value=%s tags=%s", name, value, tags or {})


def gauge(name: str, value: float, tags: dict | None = None) -> None:
    """Record a gauge metric."""
    if not getattr(FLAGS, "metrics_enabled", True):
        return
    _GAUGES[name] = value
    log.debug("METRIC gauge     name=%s value=%s tags=%s", name, value, tags or {})


def snapshot() -> dict[str, dict]:
    """Return a copy of the in-process counters and gauges."""
    return {"counters": dict(_COUNTERS), "gauges": dict(_GAUGES)}


def reset() -> None:
    _COUNTERS.clear()
    _GAUGES.clear()
