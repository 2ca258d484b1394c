# validator.py
from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

from classes import DEFAULT_SETTINGS, EngineSettings, ParsedTransaction, StatementSummary
from errors import EmptyDocumentError, NoTransactionsFoundError, TooManyInvalidDatesError
from utils import RE_ISO_DATE

logger = logging.getLogger(__name__)


def transactions_frame(transactions: Sequence[ParsedTransaction]) -> pd.DataFrame:
    return pd.DataFrame(
        [t.to_dict() for t in transactions],
        columns=["original_date", "date", "debit", "credit", "description"],
    )


def validate_text_not_empty(text: str) -> None:
    if not text or not text.strip():
        raise EmptyDocumentError()


def count_invalid_dates(transactions: Sequence[ParsedTransaction]) -> int:
    if not transactions:
        return 0
    dates = transactions_frame(transactions)["date"].fillna("").astype(str)
    valid = dates.str.match(RE_ISO_DATE.pattern)
    return int((~valid).sum())


def validate_transactions(
    transactions: Sequence[ParsedTransaction],
    bank_name: str,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> List[str]:
    """
    Raise on an empty result or a broken date path; return non-fatal warnings.
    """
    if not transactions:
        raise NoTransactionsFoundError(bank_name)

    warnings: List[str] = []
    total = len(transactions)
    if total > settings.high_count_warning:
        msg = f"High transaction count: {total} transactions found."
        logger.warning(msg)
        warnings.append(msg)

    invalid = count_invalid_dates(transactions)
    if invalid > total * settings.invalid_date_ratio:
        raise TooManyInvalidDatesError(invalid, total)
    if invalid:
        logger.warning("%d/%d transactions carry a non-ISO date", invalid, total)

    return warnings


def summarize(transactions: Sequence[ParsedTransaction]) -> StatementSummary:
    df = transactions_frame(transactions)
    total_income = float(df["credit"].sum()) if not df.empty else 0.0
    total_expenses = float(df["debit"].sum()) if not df.empty else 0.0
    return StatementSummary(
        total_income=total_income,
        total_expenses=total_expenses,
        net=total_income - total_expenses,
        transaction_count=len(df),
    )
