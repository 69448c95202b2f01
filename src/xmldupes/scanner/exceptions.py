"""Scanner-specific exceptions."""


class ScanError(Exception):
    """Base exception for scan errors."""


class ParseError(ScanError):
    """Input is not well-formed XML."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        """Initialize parse error.

        Args:
            message: Error message
            line: Line reported by the XML parser, if available
            column: Column reported by the XML parser, if available
        """
        super().__init__(message)
        self.line = line
        self.column = column


class UnsupportedFileError(ScanError):
    """Input file is not an XML file."""
