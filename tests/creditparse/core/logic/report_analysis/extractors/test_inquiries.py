from creditparse.core.logic.report_analysis.extractors.inquiries import (
    classify_inquiry,
    extract_inquiries,
)
from creditparse.core.logic.report_analysis.patterns import (
    INQUIRY_LABELED_RE,
    INQUIRY_LINE_RE,
    INQUIRY_MIXED_CASE_RE,
)
from creditparse.core.models import Bureau, InquiryType
from creditparse.policy.rules_loader import soft_inquirers

from tests.creditparse.fixtures.report_texts import INQUIRIES_TEXT


def test_name_date_lines_become_inquiries():
    inquiries = extract_inquiries(
        INQUIRIES_TEXT, patterns=(INQUIRY_LINE_RE,), soft_inquirers=soft_inquirers()
    )
    assert [(i.inquirer_name, i.inquiry_date) for i in inquiries] == [
        ("CHASE BANK", "02/10/2024"),
        ("CREDIT KARMA", "01/05/2024"),
    ]
    assert inquiries[0].inquiry_type is InquiryType.hard
    assert inquiries[1].inquiry_type is InquiryType.soft


def test_purpose_and_bureau_are_attached():
    inquiries = extract_inquiries(
        "CAPITAL ONE 11/02/2023 Credit Card\n",
        patterns=(INQUIRY_LINE_RE,),
        soft_inquirers=[],
        bureau=Bureau.Equifax,
    )
    assert inquiries[0].purpose == "Credit Card"
    assert inquiries[0].bureau is Bureau.Equifax


def test_repeated_pairs_reported_once():
    text = "CHASE BANK 02/10/2024\nInquirer: CHASE BANK Date: 02/10/2024\n"
    inquiries = extract_inquiries(
        text, patterns=(INQUIRY_LINE_RE, INQUIRY_LABELED_RE), soft_inquirers=[]
    )
    assert len(inquiries) == 1


def test_mixed_case_names_need_the_loose_pattern():
    text = "Chase Bank 02/10/2024"
    assert extract_inquiries(text, patterns=(INQUIRY_LINE_RE,), soft_inquirers=[]) == []
    loose = extract_inquiries(text, patterns=(INQUIRY_MIXED_CASE_RE,), soft_inquirers=[])
    assert loose[0].inquirer_name == "Chase Bank"


def test_soft_inquirers_extendable_from_env(monkeypatch):
    monkeypatch.setenv("PARSER_SOFT_INQUIRERS", "Acme Prequal")
    assert classify_inquiry("ACME PREQUAL SERVICES", soft_inquirers()) is InquiryType.soft
    assert classify_inquiry("ACME BANK", soft_inquirers()) is InquiryType.hard
