"""Tests for top-level models."""

import json

import pytest
from pydantic import ValidationError

from xmldupes.models import AnalysisReport, DuplicateResult


class TestDuplicateResult:
    """Tests for DuplicateResult model."""

    def test_create_by_field_name(self) -> None:
        """Test creating a result with field names."""
        item = DuplicateResult(object_id="A", count=3, class_name="Widget")

        assert item.object_id == "A"
        assert item.count == 3
        assert item.class_name == "Widget"

    def test_create_by_alias(self) -> None:
        """Test creating a result with the camelCase aliases."""
        item = DuplicateResult(objectId="A", count=3, className="Widget")

        assert item == DuplicateResult(object_id="A", count=3, class_name="Widget")

    def test_default_values(self) -> None:
        """Test default values for optional fields."""
        item = DuplicateResult(object_id="A")

        assert item.count == 1
        assert item.class_name == ""

    def test_frozen(self) -> None:
        """Test results cannot be modified."""
        item = DuplicateResult(object_id="A")

        with pytest.raises(ValidationError):
            item.count = 5  # type: ignore[misc]

    def test_dump_by_alias(self) -> None:
        """Test JSON output uses the camelCase names."""
        item = DuplicateResult(object_id="A", count=2, class_name="Widget")

        assert json.loads(item.model_dump_json(by_alias=True)) == {
            "objectId": "A",
            "count": 2,
            "className": "Widget",
        }


class TestAnalysisReport:
    """Tests for AnalysisReport model."""

    def test_successful_report(self) -> None:
        """Test a report with duplicates."""
        report = AnalysisReport(
            success=True,
            file_name="model.xml",
            duplicates=[DuplicateResult(object_id="A", count=2)],
        )

        assert report.has_duplicates is True
        assert report.error is None

    def test_empty_report_is_not_failure(self) -> None:
        """Test zero duplicates is distinct from a failure."""
        report = AnalysisReport(success=True, file_name="model.xml")

        assert report.success is True
        assert report.has_duplicates is False

    def test_failed_report(self) -> None:
        """Test a failed report carries the error."""
        report = AnalysisReport(success=False, file_name="model.xml", error="boom")

        assert report.success is False
        assert report.duplicates == []
        assert report.error == "boom"
