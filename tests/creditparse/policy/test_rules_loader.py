import copy

import pytest
import yaml

from creditparse.policy import rules_loader
from creditparse.policy.rules_loader import (
    ValidationError,
    get_rulebook_version,
    load_rulebook,
    negative_status_patterns,
    soft_inquirers,
    validate_rulebook,
)


def test_default_rulebook_has_expected_keys():
    rules = load_rulebook()
    assert {
        "version",
        "quality_keywords",
        "section_anchors",
        "soft_inquirers",
        "negative_status_patterns",
        "account_types",
        "heading_words",
    } <= set(rules)
    assert rules["section_anchors"]["accounts"][0] == "account information"


def test_default_rulebook_is_cached():
    assert load_rulebook() is load_rulebook()
    rules_loader.clear_cache()
    assert load_rulebook() is not None


def test_rulebook_version_is_sha256():
    version = get_rulebook_version()
    assert len(version) == 64
    assert version == get_rulebook_version()


def test_missing_key_fails_validation():
    rules = copy.deepcopy(dict(load_rulebook()))
    del rules["soft_inquirers"]
    with pytest.raises(ValidationError):
        validate_rulebook(rules)


def test_bad_regex_fails_validation():
    rules = copy.deepcopy(dict(load_rulebook()))
    rules["negative_status_patterns"] = ["(unclosed"]
    with pytest.raises(ValidationError):
        validate_rulebook(rules)


def test_lowercase_heading_word_fails_validation():
    rules = copy.deepcopy(dict(load_rulebook()))
    rules["heading_words"] = ["Account"]
    with pytest.raises(ValidationError):
        validate_rulebook(rules)


def test_load_from_explicit_path(tmp_path):
    rules = copy.deepcopy(dict(load_rulebook()))
    rules["soft_inquirers"] = ["Acme Prequal"]
    path = tmp_path / "rules.yaml"
    path.write_text(yaml.safe_dump(rules), encoding="utf-8")

    loaded = load_rulebook(path)
    assert loaded["soft_inquirers"] == ["Acme Prequal"]
    assert soft_inquirers(loaded) == ["acme prequal"]
    assert "credit karma" in soft_inquirers()


def test_soft_inquirers_env_extension(monkeypatch):
    monkeypatch.setenv("PARSER_SOFT_INQUIRERS", "Acme Prequal, credit karma")
    names = soft_inquirers()
    assert names.count("credit karma") == 1
    assert names[-1] == "acme prequal"


def test_negative_patterns_compiled_case_insensitive():
    patterns = negative_status_patterns()
    assert any(p.search("CHARGED OFF") for p in patterns)
