# extract/detect_bank.py
from __future__ import annotations

import logging
from typing import Optional, Sequence

from classes import BankDetectionResult, BankDialect
from mapping import BANK_DIALECTS

logger = logging.getLogger(__name__)


def supported_bank_names(dialects: Sequence[BankDialect] | None = None) -> list[str]:
    return [d.display_name for d in (BANK_DIALECTS if dialects is None else dialects)]


def find_dialect(text: str, dialects: Sequence[BankDialect] | None = None) -> Optional[BankDialect]:
    """First registered dialect whose detector accepts the text, or None."""
    if not text or not isinstance(text, str):
        return None
    for dialect in BANK_DIALECTS if dialects is None else dialects:
        if dialect.detect(text):
            logger.info("Detected bank: %s", dialect.display_name)
            return dialect
    logger.info("No registered dialect matched")
    return None


def detect_bank(text: str, dialects: Sequence[BankDialect] | None = None) -> Optional[BankDetectionResult]:
    dialect = find_dialect(text, dialects)
    if dialect is None:
        return None
    return BankDetectionResult(dialect_id=dialect.id, dialect_name=dialect.display_name)
