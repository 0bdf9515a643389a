"""JSON-line telemetry events for the parsing pipeline."""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

logger = logging.getLogger("telemetry")


def emit(event: str, payload: Mapping[str, Any] | None = None) -> None:
    """Log ``event`` and ``payload`` as one JSON line on the ``telemetry`` logger.

    Serialization problems are logged and swallowed so instrumentation never
    interrupts a parse.
    """
    record: dict[str, Any] = {
        "event": event,
        "ts": datetime.now(timezone.utc).isoformat(),
    }
    if payload:
        record.update(dict(payload))
    try:
        line = json.dumps(record, sort_keys=True, default=str)
    except (TypeError, ValueError):
        logger.exception("telemetry_emit_failed event=%s", event)
        return
    logger.info(line)
