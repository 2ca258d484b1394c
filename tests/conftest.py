import random

import pytest

from classes import GlyphRun

HBL_TEXT = """HBL Mobile
Account Activity generated through HBL Mobile
Account Number 1234567890123
CNIC Number 12345-1234567-1
IBAN: PK36HABB0000001234567890
Transaction Details
Date Value Date Description Debit Credit Balance
01-03-2024 01-03-2024 Transfer fr John Doe 1,000.00 5,000.00
02-03-2024 02-03-2024 Bill Payment SSGC 2,500.50 2,499.50
Ref SM30150819D502A1
03-03-2024 03-03-2024 Received Raast Ali Khan 300.00 2,799.50

Closing Balance 2,799.50
"""

NAYAPAY_TEXT = """NayaPay
Statement of Account
support@nayapay.com
TIME TYPE DESCRIPTION AMOUNT BALANCE
05 Mar 2024
10:15 AM
Raast In
Money received from ALI KHAN
Transaction ID 9f8e7d
Meezan Bank-1234
+Rs. 2,000Rs. 12,000
06 Mar 2024
09:00 PM
Peer to Peer
Money sent to SARA AHMED
Fees and Government Taxes Rs. 10
-Rs. 500Rs. 11,490
07 Mar 2024
11:30 AM
Online Transaction
Paid to FOODPANDA.COM BY card
Visa xxxx1234
-Rs. 1,250Rs. 10,240
CARRIED FORWARD
(021) 111-222-729
"""


def text_to_runs(text: str, top: float = 800.0, leading: float = 12.0, seed: int = 7) -> list:
    """Lay text out as word-level glyph runs (one row per line) and shuffle them."""
    runs = []
    for i, line in enumerate(text.split("\n")):
        for j, word in enumerate(line.split()):
            runs.append(GlyphRun(text=word, x=10.0 + j * 40.0, y=top - i * leading))
    random.Random(seed).shuffle(runs)
    return runs


@pytest.fixture
def hbl_text():
    return HBL_TEXT


@pytest.fixture
def nayapay_text():
    return NAYAPAY_TEXT
