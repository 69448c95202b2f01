"""File-level analysis workflow for xmldupes."""

import logging
from pathlib import Path

from xmldupes.config import XmlDupesConfig
from xmldupes.models import AnalysisReport
from xmldupes.scanner import DuplicateScanner, ParseError, UnsupportedFileError

logger = logging.getLogger(__name__)

PARSE_FAILURE_MESSAGE = "Failed to parse XML file. Please check the file format."


class DuplicateAnalyzer:
    """Runs the duplicate scan on files and reports the outcome."""

    def __init__(self, config: XmlDupesConfig) -> None:
        """Initialize analyzer.

        Args:
            config: Application configuration
        """
        self.config = config
        self.scanner = DuplicateScanner.from_config(config)

    def analyze_file(self, file_path: str | Path) -> AnalysisReport:
        """Analyze an XML file.

        Args:
            file_path: Path to the XML file

        Returns:
            Report of the analysis; parse failures give an unsuccessful report

        Raises:
            UnsupportedFileError: If the file does not have an .xml extension
            FileNotFoundError: If the file does not exist
        """
        path = Path(file_path)
        self._validate_file(path)

        logger.debug(f"Reading {path}")
        return self.analyze_text(path.read_bytes(), file_name=path.name)

    def analyze_text(self, xml_text: str | bytes, file_name: str = "<input>") -> AnalysisReport:
        """Analyze XML text already in memory.

        Args:
            xml_text: Raw XML document
            file_name: Name reported back in the result

        Returns:
            Report of the analysis
        """
        try:
            duplicates = self.scanner.scan(xml_text)
        except ParseError as e:
            logger.warning(f"Could not parse {file_name}: {e}")
            return AnalysisReport(
                success=False,
                file_name=file_name,
                error=f"{PARSE_FAILURE_MESSAGE} ({e})",
            )

        logger.info(f"Found {len(duplicates)} duplicated ids in {file_name}")
        return AnalysisReport(success=True, file_name=file_name, duplicates=duplicates)

    def _validate_file(self, path: Path) -> None:
        """Check that the input looks like an XML file.

        Args:
            path: Input file path

        Raises:
            UnsupportedFileError: If the extension is required and is not .xml
        """
        if self.config.require_xml_extension and path.suffix.lower() != ".xml":
            raise UnsupportedFileError(f"Please select XML files only: {path.name}")
