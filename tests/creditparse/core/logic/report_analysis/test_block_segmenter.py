from creditparse.core.logic.report_analysis.block_segmenter import split_account_blocks
from creditparse.core.models import Bureau

PAD = "Balance: $1,000 Credit Limit: $5,000 Status: Open Date Opened: 01/01/2019 Payment History: OK OK OK"


def test_experian_splits_on_blank_lines():
    text = f"Creditor: ABC BANK\n{PAD}\n\nCreditor: XYZ CARD\n{PAD}\n"
    blocks = split_account_blocks(text, Bureau.Experian)
    assert len(blocks) == 2
    assert blocks[1].startswith("Creditor: XYZ CARD")


def test_equifax_splits_before_caps_creditor_lines():
    text = f"CAPITAL ONE BANK\n{PAD}\nDISCOVER CARD\n{PAD}"
    blocks = split_account_blocks(text, Bureau.Equifax)
    assert [b.splitlines()[0] for b in blocks] == ["CAPITAL ONE BANK", "DISCOVER CARD"]


def test_default_rule_splits_before_account_number_label():
    text = f"Account Number: 1111\n{PAD}\nAccount Number: 2222\n{PAD}"
    assert len(split_account_blocks(text, Bureau.TransUnion)) == 2
    assert len(split_account_blocks(text, "unknown")) == 2
    assert len(split_account_blocks(text, Bureau.Experian)) == 1


def test_short_blocks_are_dropped():
    text = f"tiny\n\nCreditor: ABC BANK\n{PAD}"
    blocks = split_account_blocks(text, Bureau.Experian)
    assert len(blocks) == 1


def test_minimum_block_size_configurable(monkeypatch):
    monkeypatch.setenv("PARSER_ACCOUNT_BLOCK_MIN_CHARS", "3")
    assert len(split_account_blocks("tiny\n\nsmall", Bureau.Experian)) == 2
