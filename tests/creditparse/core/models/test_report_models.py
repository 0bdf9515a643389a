import pytest

from creditparse.core.models import (
    Bureau,
    CreditAccount,
    CreditScore,
    PaymentHistoryStatus,
    ScoreType,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("TU", Bureau.TransUnion),
        ("trans union", Bureau.TransUnion),
        ("EXPERIAN", Bureau.Experian),
        ("efx", Bureau.Equifax),
        (Bureau.Equifax, Bureau.Equifax),
        ("", Bureau.Unknown),
        (None, Bureau.Unknown),
        ("innovis", Bureau.Unknown),
    ],
)
def test_bureau_coerce(value, expected):
    assert Bureau.coerce(value) is expected


@pytest.mark.parametrize("value", [299, 851])
def test_score_outside_range_rejected(value):
    with pytest.raises(ValueError):
        CreditScore(score_type=ScoreType.fico, score_value=value)


def test_score_bounds_accepted():
    assert CreditScore(score_type=ScoreType.generic, score_value=300).score_value == 300
    assert CreditScore(score_type=ScoreType.generic, score_value=850).score_value == 850


def test_utilization_requires_positive_limit():
    assert CreditAccount(creditor_name="X", current_balance=100, credit_limit=0).utilization_percentage is None
    assert CreditAccount(creditor_name="X", credit_limit=1000).utilization_percentage is None
    assert CreditAccount(creditor_name="X", current_balance=333, credit_limit=1000).utilization_percentage == 33


def test_closed_by_status_or_date():
    assert CreditAccount(creditor_name="X", account_status="Closed by grantor").is_closed
    assert CreditAccount(creditor_name="X", date_closed="01/01/2020").is_closed
    assert not CreditAccount(creditor_name="X", account_status="Open").is_closed


def test_account_to_dict_adds_derived_values():
    account = CreditAccount(
        creditor_name="ABC BANK",
        current_balance=250,
        credit_limit=1000,
        payment_history={"m01": PaymentHistoryStatus.current, "m02": PaymentHistoryStatus.late_30},
        bureau_reporting=[Bureau.Experian, Bureau.TransUnion],
    )
    data = account.to_dict()
    assert data["bureau_reporting"] == ["Experian", "TransUnion"]
    assert data["utilization_percentage"] == 25
    assert data["late_counts"] == {"30": 1, "60": 0, "90": 0, "120+": 0}
