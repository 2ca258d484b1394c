# nayapay.py
# NayaPay wallet statement parser
#
# - headers: "TIME TYPE DESCRIPTION AMOUNT BALANCE"
# - one transaction spans a variable number of lines (date, time, type, narrative,
#   transaction id, counterparty account ...) and ends on the line carrying the
#   signed amount: "-Rs. 500" or "-Rs. 500Rs. 12,000" (amount + running balance)
# - sections end at "CARRIED FORWARD" or the support phone number in the page footer
# - a fee line ("Fees and Government Taxes Rs. 10") on an outgoing transaction adds to the debit

from __future__ import annotations

import logging
import re
from typing import List, Optional

from classes import DEFAULT_SETTINGS, ParsedTransaction
from constants import (
    NAYAPAY_CARRIED_FORWARD,
    NAYAPAY_INDICATORS,
    NAYAPAY_MIN_HITS,
    NAYAPAY_SUPPORT_PHONE,
)
from lang import HEADER_KEYWORDS, MONTH_ABBREVIATIONS
from parsers.description import clean_labelled_description
from utils import count_indicator_hits, day_month_name_to_iso, parse_amount

logger = logging.getLogger(__name__)

# ---------- Regex helpers ----------
_MONTHS = "|".join(MONTH_ABBREVIATIONS)
RE_DATE = re.compile(rf"(\d{{1,2}}\s+(?:{_MONTHS})\s+\d{{4}})")
RE_FEE = re.compile(r"Fees and Government Taxes Rs\.\s*([\d,]+\.?\d*)")
RE_AMOUNT = re.compile(r"[-+]?Rs\.\s+([\d,]+\.?\d*)")
RE_BLOCK_END = (
    re.compile(r"Rs\.\s+[\d,]+\.?\d*$"),
    re.compile(r"-?Rs\.\s+[\d,]+\.?\d*Rs\.\s+[\d,]+\.?\d*$"),
)
RE_INLINE_AMOUNT = re.compile(r"[-+]?Rs\.\s+[\d,]+\.?\d*")
RE_INLINE_TIME = re.compile(r"\b\d{1,2}:\d{2}\s+(?:AM|PM)\b")
# lines ending in "Rs. <n>" that are not the transaction amount
RE_NOT_AMOUNT_LINE = re.compile(r"^(?:Fees and Government Taxes|Service Charges)")

MASKED_TOKENS = (re.compile(r"nayapay\s+xxxx\d+", re.IGNORECASE),)

# Structural lines that never belong to the description
SKIP_PATTERNS = [re.compile(p) for p in (
    rf"^\d{{1,2}}\s+(?:{_MONTHS})\s+\d{{4}}$",
    r"^\d{1,2}:\d{2}\s+(AM|PM)$",
    r"^Transaction ID [a-f0-9]+$",
    r"^United Bank-\d+$",
    r"^Meezan Bank-\d+$",
    r"^easypaisa Bank-\d+$",
    r"^Bank.*-\d+$",
    r"^Visa xxxx\d+$",
    r"^USD \d+$",
    r"^EUR \d+$",
    r"^PKR \d+$",
    r"^Raast (In|Out)$",
    r"^Online Transaction$",
    r"^Online$",
    r"^IBFT (In|Out)$",
    r"^Peer to Peer$",
    r"^Mobile Top-up$",
    r"^VISA Refund Transaction$",
    r"^Reversal$",
    r"^Service Charges Rs\. 0$",
    r"^[-+]?Rs\.\s+[\d,]+\.?\d*$",
    r"^Fees and Government Taxes",
    r"^Transaction$",
)]


def detect(text: str) -> bool:
    return count_indicator_hits(text, NAYAPAY_INDICATORS) >= NAYAPAY_MIN_HITS


# ---------- Sections ----------
def is_header_line(line: str) -> bool:
    return all(k in line for k in HEADER_KEYWORDS["nayapay"])


def is_section_end(line: str) -> bool:
    return line == NAYAPAY_CARRIED_FORWARD or NAYAPAY_SUPPORT_PHONE in line


def split_sections(text: str) -> List[List[str]]:
    """Non-empty lines between each header row and the next footer marker."""
    sections: List[List[str]] = []
    current: List[str] = []
    inside = False

    for raw in (text or "").split("\n"):
        line = raw.strip()
        if is_header_line(line):
            inside = True
            continue
        if is_section_end(line):
            if current:
                sections.append(current)
                current = []
            inside = False
            continue
        if inside and line:
            current.append(line)

    if current:
        sections.append(current)
    return sections


def group_blocks(lines: List[str], max_block_lines: int | None = None) -> List[List[str]]:
    """
    Cut a section into blocks, each closed by its amount line (or the length cap).
    Fee and service-charge lines also end in "Rs. <n>" but stay inside the block;
    one printed after the amount line is closed on its own (dateless, so it is dropped).
    """
    cap = DEFAULT_SETTINGS.max_block_lines if max_block_lines is None else max_block_lines
    blocks: List[List[str]] = []
    block: List[str] = []
    for line in lines:
        opens = not block
        block.append(line)
        if RE_NOT_AMOUNT_LINE.match(line):
            closes = opens
        else:
            closes = any(p.search(line) for p in RE_BLOCK_END)
        if closes or len(block) >= cap:
            blocks.append(block)
            block = []
    if block:
        blocks.append(block)
    return blocks


# ---------- Field extraction ----------
def extract_date(lines: List[str]) -> str:
    for line in lines:
        m = RE_DATE.search(line)
        if m:
            return m.group(1)
    return ""


def extract_fee(lines: List[str]) -> float:
    for line in lines:
        m = RE_FEE.search(line)
        if m:
            return parse_amount(m.group(1)) or 0.0
    return 0.0


def extract_amount(lines: List[str]) -> float:
    """First currency amount in the block, negative when printed as '-Rs.'."""
    for line in lines:
        if RE_NOT_AMOUNT_LINE.match(line):
            continue
        m = RE_AMOUNT.search(line)
        if m:
            value = parse_amount(m.group(1)) or 0.0
            return -value if m.group(0).startswith("-") else value
    return 0.0


def build_description(lines: List[str]) -> str:
    parts = []
    for line in lines:
        if not line or any(p.search(line) for p in SKIP_PATTERNS):
            continue
        clean = RE_INLINE_TIME.sub("", RE_DATE.sub("", RE_INLINE_AMOUNT.sub("", line)))
        clean = re.sub(r"\s+", " ", clean).strip()
        if clean:
            parts.append(clean)
    return " ".join(parts)


def parse_block(lines: List[str]) -> Optional[ParsedTransaction]:
    date_str = extract_date(lines)
    fee = extract_fee(lines)
    amount = extract_amount(lines)

    if fee > 0 and amount < 0:
        amount -= fee

    if not date_str or amount == 0:
        return None

    iso = day_month_name_to_iso(date_str)
    if iso is None:
        return None

    return ParsedTransaction(
        original_date=date_str,
        date=iso,
        debit=abs(amount) if amount < 0 else 0.0,
        credit=max(amount, 0.0),
        description=clean_labelled_description(build_description(lines), masked_tokens=MASKED_TOKENS),
    )


def parse_text(text: str, max_block_lines: int | None = None) -> List[ParsedTransaction]:
    sections = split_sections(text)
    logger.debug("NayaPay: %d transaction section(s)", len(sections))

    transactions: List[ParsedTransaction] = []
    for section in sections:
        for block in group_blocks(section, max_block_lines):
            txn = parse_block(block)
            if txn:
                transactions.append(txn)
            else:
                logger.debug("NayaPay: dropped block of %d line(s)", len(block))
    logger.debug("Parsed %d NayaPay transactions", len(transactions))
    return transactions
