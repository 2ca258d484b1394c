# statement.py
# Public entry points: glyph runs / PDF / CSV -> ParseResult
#
#   pages ──► extract.unified_lines ──► text ──► extract.detect_bank ──► dialect.parse
#                                                                         │
#   csv ────► parsers.csv_export ─────────────────────────────────────────┤
#                                                                         ▼
#                                                validator (checks) ──► summary ──► ParseResult

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from classes import (
    DEFAULT_SETTINGS,
    BankDetectionResult,
    BankDialect,
    EngineSettings,
    ImportTransaction,
    ParsedTransaction,
    ParseResult,
)
from errors import UnsupportedFormatError
from extract.detect_bank import find_dialect, supported_bank_names
from extract.pdf_text import pdf_to_glyph_runs
from extract.unified_lines import pages_to_text
from parsers.csv_export import parse_csv_rows
from validator import summarize, validate_text_not_empty, validate_transactions

logger = logging.getLogger(__name__)

CSV_BANK = BankDetectionResult(dialect_id="csv", dialect_name="CSV Import")
PDF_DEFAULT_DESCRIPTION = "Imported from PDF"


def _finish(
    bank: BankDetectionResult,
    transactions: List[ParsedTransaction],
    settings: EngineSettings,
) -> ParseResult:
    warnings = validate_transactions(transactions, bank.dialect_name, settings)
    return ParseResult(
        bank=bank,
        transactions=tuple(transactions),
        summary=summarize(transactions),
        warnings=tuple(warnings),
    )


def parse_statement(
    text: str,
    settings: EngineSettings = DEFAULT_SETTINGS,
    dialects: Optional[Sequence[BankDialect]] = None,
) -> ParseResult:
    """Reconstructed statement text -> validated ParseResult."""
    validate_text_not_empty(text)

    dialect = find_dialect(text, dialects)
    if dialect is None:
        raise UnsupportedFormatError(supported_bank_names(dialects))

    logger.info("Parsing %s statement...", dialect.display_name)
    transactions = list(dialect.parse(text))
    logger.info("Parsed %d transactions", len(transactions))

    bank = BankDetectionResult(dialect_id=dialect.id, dialect_name=dialect.display_name)
    return _finish(bank, transactions, settings)


def parse_pages(
    pages: Iterable[Sequence[Any]],
    settings: EngineSettings = DEFAULT_SETTINGS,
    dialects: Optional[Sequence[BankDialect]] = None,
) -> ParseResult:
    """Per-page glyph runs (in page order) -> ParseResult."""
    text = pages_to_text(pages, settings.row_tolerance)
    logger.debug("Reconstructed text (first 2000 chars): %s", text[:2000])
    return parse_statement(text, settings, dialects)


def parse_pdf(
    source: Union[str, Path, bytes],
    password: Optional[str] = None,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> ParseResult:
    return parse_pages(pdf_to_glyph_runs(source, password=password), settings)


def parse_bank_pdf(source: Union[str, Path, bytes], password: Optional[str] = None) -> List[ParsedTransaction]:
    """Transactions only, for callers that do not need the bank or summary."""
    return list(parse_pdf(source, password=password).transactions)


def parse_csv(csv_content: str, settings: EngineSettings = DEFAULT_SETTINGS) -> ParseResult:
    transactions = parse_csv_rows(csv_content)
    logger.info("Parsed %d CSV transactions", len(transactions))
    return _finish(CSV_BANK, transactions, settings)


def parse_csv_file(path: Union[str, Path], settings: EngineSettings = DEFAULT_SETTINGS) -> ParseResult:
    return parse_csv(Path(path).read_text(encoding="utf-8-sig"), settings)


# ---------- Hand-off shapes ----------
def convert_to_import_format(transactions: Iterable[ParsedTransaction]) -> List[ImportTransaction]:
    return [
        ImportTransaction(
            date=t.date,
            amount=t.amount,
            type=t.kind,
            description=t.description or PDF_DEFAULT_DESCRIPTION,
            category_id=None,
        )
        for t in transactions
    ]
