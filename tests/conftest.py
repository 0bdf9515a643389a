import pytest

from creditparse.core.case_store import telemetry as case_store_telemetry
from creditparse.core.telemetry import metrics
from creditparse.policy import rules_loader


@pytest.fixture(autouse=True)
def _fresh_parser_state():
    rules_loader.clear_cache()
    metrics.reset()
    case_store_telemetry.set_emitter(None)
    yield
    rules_loader.clear_cache()
    case_store_telemetry.set_emitter(None)
