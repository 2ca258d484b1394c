# parsers/description.py
# Description cleanup shared by the statement dialects.
#
# Two flavours:
#   - clean_labelled_description: ordered rewrite rules (first match wins) + token fallback,
#     for wallets that print "Money sent to X" style narratives (NayaPay)
#   - clean_fixed_column_description: subtractive cleanup of a flattened table row,
#     for fixed-column statements where the description sits between dates and amounts (HBL)
#
# Each rule is a pure function (str) -> str | None so the rule list stays data-like.

from __future__ import annotations

import re
from typing import Callable, Iterable, Optional, Sequence

DEFAULT_LABEL = "Transaction"

RE_EMAIL_PAREN = re.compile(r"\([^@()]+@[^)]+\)")
RE_LONG_CODE = re.compile(r"^[A-Z0-9]{10,}$")
RE_DIGITS = re.compile(r"^\d+$")

Rule = Callable[[str], Optional[str]]


# ---------- Name helpers ----------
def format_name(name: str) -> str:
    """'JOHN DOE' -> 'John Doe'. Mixed case and short tokens (<= 3 chars) are kept as-is."""
    if name == name.upper() and len(name) > 3:
        return " ".join(w[:1].upper() + w[1:].lower() for w in name.split())
    return name


def clean_merchant_name(merchant: str) -> str:
    merchant = re.sub(r"\.com$", "", merchant.strip(), flags=re.IGNORECASE)
    parts = merchant.split()
    return format_name(parts[0]) if parts else ""


# ---------- Rewrite rules ----------
def money_received(s: str) -> Optional[str]:
    m = re.search(r"Money\s+received\s+from\s+(.+)", s, re.IGNORECASE)
    return f"Received from {format_name(m.group(1).strip())}" if m else None


def money_sent(s: str) -> Optional[str]:
    m = re.search(r"Money\s+sent\s+to\s+(.+)", s, re.IGNORECASE)
    return f"Sent to {format_name(m.group(1).strip())}" if m else None


def outgoing_transfer(s: str) -> Optional[str]:
    m = re.search(r"Outgoing\s+fund\s+transfer\s+to\s+(.+)", s, re.IGNORECASE)
    return f"Transfer to {m.group(1).strip()}" if m else None


def incoming_transfer(s: str) -> Optional[str]:
    m = re.search(r"Incoming\s+fund\s+transfer\s+from\s+(.+)", s, re.IGNORECASE)
    if not m:
        return None
    sender = " ".join(m.group(1).split()[:3])
    return f"Transfer from {sender}"


def paid_to(s: str) -> Optional[str]:
    # "Reversed: Paid to ..." is a refund, not a purchase
    if re.match(r"Reversed:", s, re.IGNORECASE):
        return None
    m = re.search(r"Paid\s+to\s+([A-Z0-9.\s]+?)(?:\s+BY\s+|\s*$)", s, re.IGNORECASE)
    if not m:
        return None
    return clean_merchant_name(m.group(1)) or None


def reversal(s: str) -> Optional[str]:
    m = re.search(r"Reversed:\s+Paid\s+to\s+([A-Z0-9.\s]+?)(?:\s+[A-Z][a-z]+\s+[A-Z]{2}|\s*$)", s, re.IGNORECASE)
    if not m:
        return None
    merchant = clean_merchant_name(m.group(1))
    return f"{merchant} Refund" if merchant else None


def special_cases(s: str) -> Optional[str]:
    lower = s.lower()
    if "atm" in lower or "cash withdrawal" in lower:
        return "ATM Withdrawal"
    if "mobile" in lower and "top" in lower:
        return "Mobile Top-up"
    return None


DEFAULT_RULES: Sequence[Rule] = (
    money_received,
    money_sent,
    outgoing_transfer,
    incoming_transfer,
    paid_to,
    reversal,
    special_cases,
)


def fallback_label(s: str, max_words: int = 5, max_len: int = 50) -> str:
    words = [w for w in s.split() if len(w) > 2 and not RE_DIGITS.match(w) and not RE_LONG_CODE.match(w)]
    if not words:
        return DEFAULT_LABEL
    label = " ".join(words[:max_words])
    return label[:max_len] + "..." if len(label) > max_len else label


def clean_labelled_description(
    desc: str,
    masked_tokens: Iterable[re.Pattern] = (),
    rules: Sequence[Rule] = DEFAULT_RULES,
) -> str:
    """Short human label for a narrative description; never empty."""
    if not desc or not desc.strip():
        return DEFAULT_LABEL

    cleaned = RE_EMAIL_PAREN.sub("", desc.strip())
    for pat in masked_tokens:
        cleaned = pat.sub("", cleaned)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not cleaned:
        return DEFAULT_LABEL

    for rule in rules:
        out = rule(cleaned)
        if out:
            return out
    return fallback_label(cleaned)


# ---------- Fixed-column cleanup ----------
_AMT = r"[\d,]+\.\d+"
TRAILING_AMOUNT_GROUPS = [
    re.compile(r"\s+" + r"\s+".join([_AMT] * n) + r"\s*$") for n in (4, 3, 2, 1)
]
RE_LEADING_DMY = re.compile(r"^\d{2}-\d{2}-\d{4}\s+")
RE_ANY_DECIMAL = re.compile(r"\b[\d,]+\.\d+\b")
RE_LONG_NUMBER = re.compile(r"\b\d{10,}\b")
RE_CARD_NUMBER = re.compile(r"\b\d{4}-\d{4}-\d{4}-\d{4}\b")
RE_LONG_TOKEN = re.compile(r"\S{10,}")


def currency_amount_pattern(codes: Iterable[str]) -> re.Pattern:
    alts = "|".join(sorted((re.escape(c) for c in codes), key=len, reverse=True))
    return re.compile(rf"\b(?:{alts})\.?\s*[\d,]+\.?\d*\b", re.IGNORECASE)


def clean_fixed_column_description(
    full_text: str,
    date_str: str,
    currency_codes: Iterable[str] = ("Rs", "PKR", "USD"),
    account_patterns: Iterable[re.Pattern] = (),
    noise_patterns: Iterable[re.Pattern] = (),
) -> str:
    cleaned = full_text.replace(date_str, "").strip() if date_str else full_text.strip()
    cleaned = RE_LEADING_DMY.sub("", cleaned).strip()

    # amount + balance (and any extra numeric columns) at the end
    for pat in TRAILING_AMOUNT_GROUPS:
        cleaned = pat.sub("", cleaned)

    cleaned = currency_amount_pattern(currency_codes).sub("", cleaned)
    cleaned = RE_ANY_DECIMAL.sub("", cleaned)

    cleaned = RE_LONG_NUMBER.sub("", cleaned)
    cleaned = RE_CARD_NUMBER.sub("", cleaned)
    for pat in account_patterns:
        cleaned = pat.sub("", cleaned)

    for pat in noise_patterns:
        cleaned = pat.sub("", cleaned)

    # reference codes like SM30150819D502A1
    cleaned = RE_LONG_TOKEN.sub("", cleaned)

    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    return cleaned or DEFAULT_LABEL
