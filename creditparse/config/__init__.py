import json
import logging
import os
from pathlib import Path

from environs import Env

from creditparse.settings import PROJECT_ROOT

env = Env()
env.read_env()

logger = logging.getLogger(__name__)


_WARNED_DEFAULT_KEYS: set[str] = set()


def _warn_default(key: str, raw: object, default: object, reason: str) -> None:
    """Emit a structured warning when falling back to a default value."""

    if key in _WARNED_DEFAULT_KEYS:
        return

    _WARNED_DEFAULT_KEYS.add(key)
    payload = {
        "key": key,
        "value": "" if raw is None else str(raw),
        "default": default,
        "reason": reason,
    }
    logger.warning("PARSER_CONFIG_DEFAULT %s", json.dumps(payload, sort_keys=True))


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    lowered = val.strip().lower()
    if lowered in {"1", "true", "yes", "on"}:
        return True
    if lowered in {"0", "false", "no", "off"}:
        return False
    _warn_default(name, val, default, "invalid_bool")
    return default


def env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    """Parse an int environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    try:
        value = int(val.strip())
    except ValueError:
        _warn_default(name, val, default, "invalid_int")
        return default
    if min_value is not None and value < min_value:
        _warn_default(name, val, default, f"min_{min_value}")
        return default
    return value


def env_list(name: str, default: list[str]) -> list[str]:
    """Parse a comma-separated list environment variable."""
    val = os.getenv(name)
    if val is None:
        return default
    parts = [p.strip() for p in val.split(",") if p.strip()]
    return parts or default


def _default_casestore_dir() -> str:
    """Determine the Case Store directory.

    ``CASESTORE_DIR`` wins when set; otherwise a project-relative
    ``.cases`` directory is used. The directory is created on demand by the
    storage layer, not here.
    """

    env_dir = os.getenv("CASESTORE_DIR")
    if env_dir:
        return Path(env_dir).as_posix()
    return (PROJECT_ROOT / ".cases").as_posix()


# Case Store configuration
CASESTORE_DIR = _default_casestore_dir()
CASESTORE_ATOMIC_WRITES = env.bool("CASESTORE_ATOMIC_WRITES", True)
CASESTORE_VALIDATE_ON_LOAD = env.bool("CASESTORE_VALIDATE_ON_LOAD", True)

# Parser pipeline toggles
PARSER_TEXT_PREPROCESS_ENABLED = env_bool("PARSER_TEXT_PREPROCESS_ENABLED", True)
PARSER_AUDIT_ENABLED = env_bool("PARSER_AUDIT_ENABLED", True)

# Batch orchestration
BATCH_DELAY_MS = env_int("BATCH_DELAY_MS", 1000, min_value=0)


__all__ = [
    "env",
    "env_bool",
    "env_int",
    "env_list",
    "CASESTORE_DIR",
    "CASESTORE_ATOMIC_WRITES",
    "CASESTORE_VALIDATE_ON_LOAD",
    "PARSER_TEXT_PREPROCESS_ENABLED",
    "PARSER_AUDIT_ENABLED",
    "BATCH_DELAY_MS",
]
