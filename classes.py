from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Callable, List, Optional, Tuple


@dataclass(frozen=True)
class EngineSettings:
    # Reconstructor: runs closer than this (vertical units) share a row
    row_tolerance: float = 5.0

    # Block-grouped dialects: runaway guard for one transaction block
    max_block_lines: int = 40

    # Validation
    invalid_date_ratio: float = 0.5      # fail when invalid/total is strictly above this
    high_count_warning: int = 1000       # warn (never fail) when the count is above this


DEFAULT_SETTINGS = EngineSettings()


@dataclass(frozen=True)
class GlyphRun:
    """One positioned fragment of page text. `y` grows towards the top of the page."""
    text: str
    x: float
    y: float


@dataclass(frozen=True)
class ParsedTransaction:
    original_date: str
    date: str             # YYYY-MM-DD
    debit: float
    credit: float
    description: str

    @property
    def amount(self) -> float:
        return self.debit if self.debit > 0 else self.credit

    @property
    def kind(self) -> str:
        return "expense" if self.debit > 0 else "income"

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ImportTransaction:
    date: str
    amount: float
    type: str             # "expense" | "income"
    description: str
    category_id: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BankDialect:
    """
    A self-contained statement format.

    `detect` answers whether reconstructed text belongs to this bank,
    `parse` turns that text into transactions. Dialects never call each other.
    """
    id: str
    display_name: str
    detect: Callable[[str], bool]
    parse: Callable[[str], List[ParsedTransaction]]


@dataclass(frozen=True)
class BankDetectionResult:
    dialect_id: str
    dialect_name: str


@dataclass(frozen=True)
class StatementSummary:
    total_income: float
    total_expenses: float
    net: float
    transaction_count: int


@dataclass(frozen=True)
class ParseResult:
    bank: BankDetectionResult
    transactions: Tuple[ParsedTransaction, ...]
    summary: StatementSummary
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "bank": {"id": self.bank.dialect_id, "name": self.bank.dialect_name},
            "transactions": [t.to_dict() for t in self.transactions],
            "summary": asdict(self.summary),
            "warnings": list(self.warnings),
        }
