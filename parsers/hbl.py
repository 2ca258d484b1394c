# hbl.py
# HBL (Habib Bank Limited) account activity parser
#
# - layout: fixed columns "Date | Value Date | Description | Debit | Credit | Balance"
# - a transaction starts on a line beginning with DD-MM-YYYY and may wrap onto
#   the following lines until a blank line or the next dated line
# - amount + balance are the last two decimals on the FIRST line only; only one of
#   the Debit/Credit columns is ever filled, so direction comes from narrative keywords
# - output: [ParsedTransaction(original_date, date, debit, credit, description), ...]

from __future__ import annotations

import enum
import logging
import re
from typing import List, Optional

from classes import ParsedTransaction
from constants import (
    CURRENCY_CODES,
    HBL_CREDIT_KEYWORDS,
    HBL_INDICATORS,
    HBL_MIN_HITS,
    HBL_SECTION_END_MARKERS,
)
from lang import HEADER_KEYWORDS
from parsers.description import clean_fixed_column_description
from utils import count_indicator_hits, dmy_to_iso, parse_amount

logger = logging.getLogger(__name__)

# ---------- Regex helpers ----------
RE_TXN_START = re.compile(r"^(\d{2}-\d{2}-\d{4})\s+")
RE_LEAD_DATE = re.compile(r"^(\d{2}-\d{2}-\d{4})")
RE_AMOUNT_BALANCE = re.compile(r"\s+([\d,]+\.\d+)\s+([\d,]+\.\d+)\s*$")

ACCOUNT_PATTERNS = (
    re.compile(r"\bPK\d+\b"),                           # IBAN fragments
    re.compile(r"\bIBAN\s+[A-Z0-9-]+\b", re.IGNORECASE),  # IBAN XXXX-5128
)
NOISE_PATTERNS = tuple(
    re.compile(rf"\b{w}\b", re.IGNORECASE)
    for w in (r"HBL", r"Habib Bank", r"Mobile", r"Transfer", r"Transaction", r"Thru Raast", r"fr")
)


def detect(text: str) -> bool:
    return count_indicator_hits(text, HBL_INDICATORS) >= HBL_MIN_HITS


# ---------- Line classification ----------
def is_header_line(line: str) -> bool:
    return all(k in line for k in HEADER_KEYWORDS["hbl"])


def is_section_start(line: str) -> bool:
    return "Transaction" in line or is_header_line(line)


def is_section_end(line: str) -> bool:
    return any(line.startswith(m) for m in HBL_SECTION_END_MARKERS)


# ---------- Block → transaction ----------
def parse_block(lines: List[str]) -> Optional[ParsedTransaction]:
    """One accumulated block -> transaction, or None when nothing usable is there."""
    if not lines:
        return None

    first = lines[0]
    m = RE_LEAD_DATE.match(first)
    if not m:
        return None
    date_str = m.group(1)

    debit = credit = 0.0
    am = RE_AMOUNT_BALANCE.search(first)
    if am:
        amount = parse_amount(am.group(1)) or 0.0   # group(2) is the running balance
        joined = " " + " ".join(lines).lower() + " "
        if any(k in joined for k in HBL_CREDIT_KEYWORDS):
            credit = amount
        else:
            debit = amount

    description = clean_fixed_column_description(
        " ".join(lines),
        date_str,
        currency_codes=sorted(CURRENCY_CODES),
        account_patterns=ACCOUNT_PATTERNS,
        noise_patterns=NOISE_PATTERNS,
    )
    if debit == 0 and credit == 0:
        return None

    return ParsedTransaction(
        original_date=date_str,
        date=dmy_to_iso(date_str),
        debit=debit,
        credit=credit,
        description=description,
    )


# ---------- State machine ----------
class State(enum.Enum):
    PREAMBLE = "preamble"
    IN_SECTION = "in_section"


class HBLStatementParser:
    """
    Two states, three triggers inside a section:
      dated line  -> flush the open block, open a new one
      header line -> skipped, state unchanged
      blank line  -> flush the open block, nothing new opened
    Section-start lines move PREAMBLE -> IN_SECTION (and are skipped inside a section),
    section-end markers move back.
    """

    def __init__(self):
        self.state = State.PREAMBLE
        self.block: List[str] = []
        self.transactions: List[ParsedTransaction] = []

    def flush(self) -> None:
        if self.block:
            txn = parse_block(self.block)
            if txn:
                self.transactions.append(txn)
            else:
                logger.debug("HBL: dropped block starting %r", self.block[0][:60])
        self.block = []

    def feed(self, raw_line: str) -> None:
        line = raw_line.strip()

        if not line:
            self.flush()
            return

        if self.state is State.IN_SECTION and is_header_line(line):
            return

        if is_section_end(line):
            self.flush()
            self.state = State.PREAMBLE
            return

        if is_section_start(line) and not RE_TXN_START.match(line):
            self.state = State.IN_SECTION
            return

        if self.state is not State.IN_SECTION:
            return

        if RE_TXN_START.match(line):
            self.flush()
            self.block = [line]
        elif self.block:
            self.block.append(line)

    def finish(self) -> List[ParsedTransaction]:
        self.flush()
        return self.transactions


def parse_text(text: str) -> List[ParsedTransaction]:
    p = HBLStatementParser()
    for line in (text or "").split("\n"):
        p.feed(line)
    transactions = p.finish()
    logger.debug("Parsed %d HBL transactions", len(transactions))
    return transactions
