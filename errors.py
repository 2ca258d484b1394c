"""Statement parsing errors.

Every error here is terminal for a parse call: nothing inside the engine
catches or retries them. Callers decide what to show the user.
"""

from typing import Sequence


class StatementParseError(Exception):
    """Base statement parsing error."""

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(detail)


class EmptyDocumentError(StatementParseError):
    """No text could be recovered from the document."""

    def __init__(self, detail: str = ""):
        super().__init__(
            detail
            or "Document appears to be empty or corrupted. "
            "Could not extract any text from the file. "
            "Please ensure the PDF is not password-protected or corrupted."
        )


class UnsupportedFormatError(StatementParseError):
    """No registered dialect recognised the statement."""

    def __init__(self, supported: Sequence[str]):
        self.supported = list(supported)
        super().__init__(
            "Unsupported bank statement format. "
            "Could not detect which bank this statement belongs to. "
            f"Currently supported banks: {', '.join(self.supported)}"
        )


class NoTransactionsFoundError(StatementParseError):
    """A dialect matched but produced nothing."""

    def __init__(self, bank_name: str):
        self.bank_name = bank_name
        super().__init__(
            f"No transactions found in the {bank_name} statement. "
            "The statement format may have changed or the file may be invalid. "
            f"Please ensure you're uploading a valid {bank_name} account statement."
        )


class TooManyInvalidDatesError(StatementParseError):
    """More than the allowed share of transactions carry a non-ISO date."""

    def __init__(self, invalid: int, total: int):
        self.invalid = invalid
        self.total = total
        super().__init__(
            f"Too many invalid transactions ({invalid}/{total}). "
            "The statement format may not be compatible or the file may be corrupted."
        )
