import re

import pytest

from parsers.description import (
    DEFAULT_LABEL,
    clean_fixed_column_description,
    clean_labelled_description,
    clean_merchant_name,
    fallback_label,
    format_name,
)


@pytest.mark.parametrize("raw,expected", [
    ("Money received from ALI KHAN", "Received from Ali Khan"),
    ("money sent to Sara Ahmed", "Sent to Sara Ahmed"),
    ("Outgoing fund transfer to Meezan Bank Ltd", "Transfer to Meezan Bank Ltd"),
    ("Incoming fund transfer from John Michael Smith Jr", "Transfer from John Michael Smith"),
    ("Paid to FOODPANDA.COM BY card", "Foodpanda"),
    ("Paid to Careem Rides", "Careem"),
    ("Reversed: Paid to DARAZ Karachi PK", "Daraz Refund"),
    ("Cash Withdrawal at branch", "ATM Withdrawal"),
    ("ATM 1234 Gulberg", "ATM Withdrawal"),
    ("Mobile Top-up Jazz", "Mobile Top-up"),
])
def test_rewrite_rules(raw, expected):
    assert clean_labelled_description(raw) == expected


def test_first_matching_rule_wins():
    # "Money sent to" comes before the ATM catch-all
    assert clean_labelled_description("Money sent to ATM SERVICES") == "Sent to Atm Services"


def test_email_parenthetical_is_stripped():
    assert clean_labelled_description("Money sent to Ali (ali@example.com)") == "Sent to Ali"


def test_masked_tokens_are_stripped():
    masked = [re.compile(r"nayapay\s+xxxx\d+", re.IGNORECASE)]
    out = clean_labelled_description("Money received from NayaPay xxxx1234 Zara", masked_tokens=masked)
    assert out == "Received from Zara"


def test_fallback_drops_codes_and_numbers():
    assert fallback_label("Netflix 123456 ABCDEFGHIJ12 Subscription") == "Netflix Subscription"


def test_fallback_keeps_first_five_words_and_truncates():
    assert fallback_label("alpha bravo charlie delta echo foxtrot") == "alpha bravo charlie delta echo"
    long = " ".join(["Supercalifragilistic"] * 5)
    out = fallback_label(long)
    assert out.endswith("...")
    assert len(out) == 53


@pytest.mark.parametrize("raw", ["", "   ", "12 34", "(a@b.c)"])
def test_empty_results_become_default_label(raw):
    assert clean_labelled_description(raw) == DEFAULT_LABEL


def test_name_helpers():
    assert format_name("JOHN DOE") == "John Doe"
    assert format_name("ABC") == "ABC"
    assert format_name("McDonald") == "McDonald"
    assert clean_merchant_name("DARAZ.COM") == "Daraz"
    assert clean_merchant_name("KFC Pakistan") == "KFC"
    assert clean_merchant_name("") == ""


def test_fixed_column_cleanup():
    out = clean_fixed_column_description(
        "01-03-2024 01-03-2024 Payment PKR 3,000 to Ahmed 3,000.00 9,000.00 1.00 2.00",
        "01-03-2024",
    )
    assert out == "Payment to Ahmed"


def test_fixed_column_cleanup_defaults_to_label():
    assert clean_fixed_column_description("01-03-2024 10.00 20.00", "01-03-2024") == DEFAULT_LABEL
