import pytest

from creditparse.core.logic.report_analysis.extractors.personal_info import (
    extract_personal_info,
    parse_address,
    split_name,
)
from creditparse.core.logic.report_analysis.patterns import FUZZY_SEP, STRICT_SEP
from creditparse.core.models import PersonalInfo
from creditparse.policy.rules_loader import load_rulebook

from tests.creditparse.fixtures.report_texts import EXPERIAN_REPORT, PERSONAL_BLOCK


def _headings():
    return load_rulebook()["heading_words"]


def test_labeled_name_and_birth_date():
    info = extract_personal_info(PERSONAL_BLOCK, sep=STRICT_SEP)
    assert info.full_name == "JOHN SMITH"
    assert info.first_name == "JOHN"
    assert info.last_name == "SMITH"
    assert info.date_of_birth == "01/15/1980"


def test_full_personal_block():
    info = extract_personal_info(EXPERIAN_REPORT, sep=STRICT_SEP, heading_words=_headings())
    assert info.full_name == "JOHN A SMITH"
    assert info.middle_name == "A"
    assert info.suffix == "JR"
    assert info.ssn_partial == "***-**-1234"
    assert info.current_address.city == "SPRINGFIELD"
    assert info.current_address.state == "IL"
    assert info.current_address.zip_code == "62701"
    assert [a.full_address for a in info.previous_addresses] == ["45 OAK AVE, CHICAGO, IL 60601"]
    assert info.phone_numbers == ["(555) 123-4567"]
    assert info.employment_current.employer == "ACME CORP"


def test_strict_tier_needs_a_colon():
    info = extract_personal_info("Name JOHN SMITH\nDOB 01/15/1980", sep=STRICT_SEP)
    assert info.full_name is None
    assert info.date_of_birth is None


def test_fuzzy_tier_reads_unlabeled_name_and_address():
    text = "PERSONAL INFORMATION\nJANE DOE\n123 ELM ST, AUSTIN, TX 78701\n"
    info = extract_personal_info(
        text,
        sep=FUZZY_SEP,
        caps_name_line=True,
        unlabeled_address=True,
        heading_words=_headings(),
    )
    assert info.full_name == "JANE DOE"
    assert info.current_address.city == "AUSTIN"
    assert info.current_address.zip_code == "78701"


def test_only_last_four_ssn_digits_kept():
    info = extract_personal_info("SSN: 123-45-6789", sep=STRICT_SEP)
    assert info.ssn_partial == "***-**-6789"
    assert "123" not in info.ssn_partial


def test_duplicate_phone_numbers_collapse():
    text = "Phone: (555) 123-4567\nHome Phone: 555-123-4567\nWork Phone: 555-987-6543"
    info = extract_personal_info(text, sep=STRICT_SEP)
    assert info.phone_numbers == ["(555) 123-4567", "555-987-6543"]


def test_missing_fields_stay_none():
    info = extract_personal_info("nothing useful here", sep=STRICT_SEP)
    assert info == PersonalInfo()
    assert info.current_address is None
    assert info.phone_numbers == []


@pytest.mark.parametrize(
    "raw,first,middle,last,suffix",
    [
        ("JOHN SMITH", "JOHN", None, "SMITH", None),
        ("MARY ANN LEE III", "MARY", "ANN", "LEE", "III"),
        ("CHER", "CHER", None, None, None),
    ],
)
def test_split_name(raw, first, middle, last, suffix):
    parts = split_name(raw)
    assert parts["first_name"] == first
    assert parts["middle_name"] == middle
    assert parts["last_name"] == last
    assert parts["suffix"] == suffix


def test_parse_address_without_city_comma():
    address = parse_address("9 PINE RD, DALLAS TX 75201")
    assert address.street == "9 PINE RD"
    assert address.city == "DALLAS"
    assert address.state == "TX"


@pytest.mark.parametrize(
    "text",
    [
        "Name: JOHN SMITH Date of Birth: 01/15/1980",
        "Name: JOHN SMITH Social Security Number: ***-**-1234",
        "Name: JOHN SMITH Home Phone: (555) 123-4567",
        "Name: JOHN SMITH Current Address: 1 MAIN ST",
    ],
)
def test_name_stops_at_next_label_on_same_line(text):
    info = extract_personal_info(text, sep=STRICT_SEP)
    assert info.full_name == "JOHN SMITH"
    assert info.last_name == "SMITH"


def test_one_line_layout_without_colons():
    info = extract_personal_info("Name JOHN A SMITH DOB 01/15/1980", sep=FUZZY_SEP)
    assert info.full_name == "JOHN A SMITH"
    assert info.date_of_birth == "01/15/1980"


def test_email_and_creditor_addresses_are_not_the_consumer_address():
    text = "Email Address: jsmith@example.com\nCreditor Address: PO BOX 1, DALLAS, TX 75201"
    assert extract_personal_info(text, sep=STRICT_SEP).current_address is None

    text += "\nAddress: 123 MAIN ST, SPRINGFIELD, IL 62701"
    info = extract_personal_info(text, sep=STRICT_SEP)
    assert info.current_address.city == "SPRINGFIELD"
