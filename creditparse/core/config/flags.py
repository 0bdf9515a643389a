from dataclasses import dataclass

from creditparse.config import PARSER_AUDIT_ENABLED, env_bool

METRICS_ENABLED = env_bool("METRICS_ENABLED", True)
PARSER_DEBUG = env_bool("PARSER_DEBUG", False)


@dataclass(frozen=True)
class Flags:
    metrics_enabled: bool = METRICS_ENABLED
    parser_audit_enabled: bool = PARSER_AUDIT_ENABLED
    parser_debug: bool = PARSER_DEBUG


FLAGS = Flags()
