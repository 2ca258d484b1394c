# csv_export.py
# Generic "date,debit,credit,description..." export
#
# - first line is the header and is skipped
# - description is everything after the third comma (it may itself contain commas),
#   with surrounding quotes removed
# - DD-MM-YYYY dates are converted to ISO; anything else is passed through as-is
# - unparseable debit/credit cells count as 0; rows with fewer than 3 fields are skipped
# - every row ends up on exactly one side: negative cells flip sides, two-sided rows are netted

from __future__ import annotations

import logging
import re
from typing import List, Tuple

from classes import ParsedTransaction
from utils import dmy_to_iso

logger = logging.getLogger(__name__)

CSV_DEFAULT_DESCRIPTION = "Imported from CSV"

RE_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


def parse_cell_amount(cell: str) -> float:
    """Leading number of a cell ('100', ' 12.5 ', '7abc' -> 7.0); 0.0 when there is none."""
    m = RE_LEADING_NUMBER.match(cell or "")
    return float(m.group(1)) if m else 0.0


def normalize_sides(debit: float, credit: float, lineno: int = 0) -> Tuple[float, float]:
    """
    Net a row into one non-negative side.
    A negative debit is money in, a negative credit is money out; a row with
    both sides filled keeps only the difference.
    """
    if debit and credit:
        logger.warning("CSV line %d carries both a debit and a credit; netted", lineno)
    net = credit - debit
    if net == 0 and (debit or credit):
        logger.warning("CSV line %d nets to zero, skipped", lineno)
    return (-net, 0.0) if net < 0 else (0.0, net)


def parse_csv_rows(csv_content: str) -> List[ParsedTransaction]:
    lines = (csv_content or "").strip().split("\n")
    if len(lines) < 2:
        return []

    transactions: List[ParsedTransaction] = []
    for lineno, raw in enumerate(lines[1:], start=2):
        parts = raw.rstrip("\r").split(",")
        if len(parts) < 3:
            continue

        date_str, debit_str, credit_str, *desc_parts = parts
        date_str = date_str.strip()
        debit, credit = normalize_sides(parse_cell_amount(debit_str), parse_cell_amount(credit_str), lineno)
        if debit == 0 and credit == 0:
            logger.debug("CSV line %d: no amount, skipped", lineno)
            continue

        description = ",".join(desc_parts).strip()
        description = re.sub(r'^"|"$', "", description).strip()

        transactions.append(ParsedTransaction(
            original_date=date_str,
            date=dmy_to_iso(date_str),
            debit=debit,
            credit=credit,
            description=description or CSV_DEFAULT_DESCRIPTION,
        ))

    logger.debug("Parsed %d CSV rows", len(transactions))
    return transactions
