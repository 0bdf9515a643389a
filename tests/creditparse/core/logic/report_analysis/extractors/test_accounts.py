from creditparse.core.logic.report_analysis.extractors.accounts import (
    extract_accounts,
    find_creditor,
    parse_account_block,
)
from creditparse.core.logic.report_analysis.patterns import FUZZY_SEP, STRICT_SEP
from creditparse.core.models import Bureau, PaymentHistoryStatus
from creditparse.policy.rules_loader import load_rulebook

from tests.creditparse.fixtures.report_texts import (
    ACCOUNT_BLOCK,
    COLLECTION_ACCOUNT_BLOCK,
    EXPERIAN_REPORT,
)


def _headings():
    return load_rulebook()["heading_words"]


def test_caps_line_creditor_with_balance_and_limit():
    account = parse_account_block(ACCOUNT_BLOCK, sep=STRICT_SEP, heading_words=_headings())
    assert account.creditor_name == "ABC BANK"
    assert account.current_balance == 5000
    assert account.credit_limit == 10000
    assert account.utilization_percentage == 50
    assert account.account_status == "Open"
    assert account.is_negative is False


def test_collection_status_marks_account_negative():
    account = parse_account_block(COLLECTION_ACCOUNT_BLOCK, sep=STRICT_SEP, heading_words=_headings())
    assert account.is_negative is True
    assert account.utilization_percentage is None


def test_block_without_creditor_is_rejected():
    assert parse_account_block("Balance: $100\nStatus: Open", sep=STRICT_SEP) is None
    assert parse_account_block("AB\nBalance: $100", sep=STRICT_SEP) is None


def test_heading_lines_are_not_creditors():
    block = "ACCOUNT INFORMATION\nCreditor: WELLS FARGO\nBalance: $10"
    assert find_creditor(block, STRICT_SEP, heading_words=_headings()) == "WELLS FARGO"


def test_money_fields_are_disambiguated_by_label():
    block = (
        "Creditor: CITI\n"
        "High Credit: $7,500\n"
        "Balance: $2,000\n"
        "Credit Limit: $8,000\n"
        "Monthly Payment: $75\n"
        "Past Due: $150\n"
        "Date Opened: 03/12/2015\n"
        "Date Closed: 04/01/2022\n"
        "Last Payment Date: 03/01/2022"
    )
    account = parse_account_block(block, sep=STRICT_SEP)
    assert account.high_credit == 7500
    assert account.current_balance == 2000
    assert account.credit_limit == 8000
    assert account.monthly_payment == 75
    assert account.past_due_amount == 150
    assert account.date_opened == "03/12/2015"
    assert account.date_closed == "04/01/2022"
    assert account.last_payment_date == "03/01/2022"
    assert account.is_closed is True


def test_fuzzy_fallbacks_pick_up_unlabeled_tokens():
    block = "DISCOVER CARD\nBalance $2,500\nCredit Limit $5,000\nAccount ending ****4321 open"
    account = parse_account_block(
        block,
        sep=FUZZY_SEP,
        keyword_fallbacks=True,
        heading_words=_headings(),
        account_types=load_rulebook()["account_types"],
    )
    assert account.creditor_name == "DISCOVER CARD"
    assert account.current_balance == 2500
    assert account.credit_limit == 5000
    assert account.account_number == "****4321"
    assert account.account_status == "open"


def test_report_accounts_with_payment_history():
    accounts = extract_accounts(
        EXPERIAN_REPORT.split("ACCOUNT INFORMATION")[1].split("CREDIT INQUIRIES")[0],
        Bureau.Experian,
        sep=STRICT_SEP,
        heading_words=_headings(),
    )
    assert [a.creditor_name for a in accounts] == ["ABC BANK", "LVNV FUNDING"]
    abc, lvnv = accounts
    assert abc.account_number == "****1234"
    assert abc.account_type == "Credit Card"
    assert abc.payment_history["m03"] is PaymentHistoryStatus.late_30
    assert abc.late_counts["30"] == 1
    assert abc.bureau_reporting == [Bureau.Experian]
    assert lvnv.is_negative is True
    assert lvnv.past_due_amount == 1200


def test_late_history_alone_does_not_make_account_negative():
    block = "Creditor: ALLY AUTO\nAccount Status: Open\nPayment History: 30 60 OK"
    account = parse_account_block(block, sep=STRICT_SEP)
    assert account.late_counts["30"] == 1
    assert account.late_counts["60"] == 1
    assert account.is_negative is False
