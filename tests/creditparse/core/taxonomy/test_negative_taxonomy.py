import pytest

from creditparse.core.taxonomy import (
    NegativeItemType,
    classify_negative_status,
    is_negative_status,
    severity_score,
)


@pytest.mark.parametrize(
    "status,expected",
    [
        ("Collection account", NegativeItemType.collection),
        ("Charged off", NegativeItemType.charge_off),
        ("30 days late", NegativeItemType.late_payment),
        ("Delinquent", NegativeItemType.late_payment),
        ("Chapter 7 bankruptcy", NegativeItemType.bankruptcy),
        ("Foreclosure", NegativeItemType.foreclosure),
        ("Tax lien", NegativeItemType.tax_lien),
        ("Civil judgment", NegativeItemType.judgment),
        ("Something odd", NegativeItemType.collection),
        (None, NegativeItemType.collection),
    ],
)
def test_classify_negative_status(status, expected):
    assert classify_negative_status(status) is expected


@pytest.mark.parametrize(
    "status,past_due,expected",
    [
        ("Collection", None, 8),
        ("Charged off", None, 9),
        ("Charged off", 1500, 10),
        ("30 days late", None, 5),
        ("30 days late", 1000, 5),
        ("30 days late", 1001, 7),
        ("Collection charge off", 5000, 10),
    ],
)
def test_severity_score(status, past_due, expected):
    assert severity_score(status, past_due) == expected


@pytest.mark.parametrize(
    "status,expected",
    [
        ("Never late", False),
        ("Pays as agreed", False),
        ("", False),
        (None, False),
        ("Charged Off", True),
        ("120+ days past due", True),
        ("LATE 60", True),
        ("Judgement filed", True),
    ],
)
def test_is_negative_status(status, expected):
    assert is_negative_status(status) is expected
