"""Custom exceptions for frontiercrawl."""
from typing import Optional


class RowFormatError(Exception):
    """Raised when a stored row cannot be decoded into a request."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Malformed request row: {reason}")


class ContractViolation(AssertionError):
    """Raised when a caller breaks a precondition of the request record.

    Signals a programming defect, not a recoverable runtime condition.
    """


class ParserError(Exception):
    """Raised when fetched content cannot be decompressed or parsed."""

    def __init__(self, message: str, location: Optional[str] = None):
        self.message = message
        self.location = location
        if location:
            super().__init__(f"{message} (location: {location})")
        else:
            super().__init__(message)


class ParseCancelledError(Exception):
    """Raised when a parse is interrupted through its stop event."""

    def __init__(self, location: Optional[str] = None):
        self.location = location
        super().__init__(f"Parsing cancelled for {location}" if location else "Parsing cancelled")
