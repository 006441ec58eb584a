"""
Custom exception classes for python_smartnav package.

Navigation itself never raises for expected situations (no table, no further
content, stale cursor); these exceptions cover loading documents, reading
configuration and misusing a closed session.
"""


class SmartNavError(Exception):
    """Base exception for all python_smartnav errors."""

    pass


class ConfigurationError(SmartNavError):
    """Raised when navigation settings cannot be loaded or are invalid.

    Attributes:
        errors: List of specific problems found in the configuration (optional)
        source: Path or description of the configuration source (optional)
    """

    def __init__(
        self, message: str, errors: list[str] | None = None, source: str | None = None
    ) -> None:
        self.errors = errors or []
        self.source = source
        super().__init__(self._format_message(message))

    def _format_message(self, message: str) -> str:
        """Format the message with its source and individual problems."""
        msg = message
        if self.source:
            msg += f" (in {self.source})"
        if self.errors:
            msg += "\n\nProblems:\n"
            for error in self.errors:
                msg += f"  • {error}\n"
        return msg


class DocumentLoadError(SmartNavError):
    """Raised when a document cannot be read or parsed.

    Attributes:
        source: The path or description of the document
        reason: Explanation of why loading failed
    """

    def __init__(self, source: str, reason: str | None = None) -> None:
        self.source = source
        self.reason = reason
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format an error message with the failure reason."""
        msg = f"Could not load document '{self.source}'"
        if self.reason:
            msg += f": {self.reason}"
        return msg


class SessionClosedError(SmartNavError):
    """Raised when a navigation session is used after close()."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(f"Cannot call {operation}() on a closed navigation session")
