"""XML duplicate scanning module."""

from xmldupes.scanner.exceptions import ParseError, ScanError, UnsupportedFileError
from xmldupes.scanner.parsing import parse_document
from xmldupes.scanner.rules import ThresholdRules
from xmldupes.scanner.scanner import DuplicateScanner, scan

__all__ = [
    "DuplicateScanner",
    "ParseError",
    "ScanError",
    "ThresholdRules",
    "UnsupportedFileError",
    "parse_document",
    "scan",
]
