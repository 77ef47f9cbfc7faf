import pytest

from doc_extract.detector import UNKNOWN_BANK, detect_bank, match_template_key
from doc_extract.templates import all_templates


@pytest.mark.parametrize(
    "key,pattern,name",
    [(key, p, t.name) for key, t in all_templates() for p in t.detection_patterns],
)
def test_detects_each_pattern_case_insensitively(key, pattern, name):
    text = f"Account statement issued by {pattern.upper()} for the period"
    assert detect_bank(text) == name
    assert match_template_key(text) == key


def test_unknown_when_nothing_matches():
    assert detect_bank("Statement from Some Credit Union") == UNKNOWN_BANK
    assert match_template_key("Statement from Some Credit Union") is None
    assert detect_bank("") == UNKNOWN_BANK


def test_first_template_in_registry_wins():
    text = "HDFC Bank statement. Memo: transfer from ICICI account"
    assert match_template_key(text) == "hdfc"
    assert detect_bank(text) == "HDFC Bank"

    text = "State Bank of India ... HDFC cheque deposit"
    assert detect_bank(text) == "State Bank of India (SBI)"


def test_substring_match_inside_words():
    # "axis" inside another token still counts
    assert match_template_key("TAXISERVICE PAYMENT") == "axis"
