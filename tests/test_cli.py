"""Tests for CLI commands."""

from pathlib import Path

import pytest
from pytest_mock import MockerFixture
from typer.testing import CliRunner

from xmldupes import __version__
from xmldupes.cli import app
from xmldupes.config import InvalidConfigurationError
from xmldupes.models import DuplicateResult
from xmldupes.progress import ProgressSnapshot, load, save

runner = CliRunner()

MODEL_XML = """<Model>
  <ViewObject classname="Widget"><PROPERTY name="ObjectId" value="ABC"/></ViewObject>
  <ViewObject classname="Widget"><PROPERTY name="ObjectId" value="ABC"/></ViewObject>
  <ViewObject classname="Gadget"><PROPERTY name="ObjectId" value="XYZ"/></ViewObject>
  <ViewObject classname="Gadget"><PROPERTY name="ObjectId" value="XYZ"/></ViewObject>
  <ViewObject classname="Gadget"><PROPERTY name="ObjectId" value="XYZ"/></ViewObject>
</Model>
"""


def dup(object_id: str, count: int = 2, class_name: str = "Widget") -> DuplicateResult:
    """Helper to create test results."""
    return DuplicateResult(object_id=object_id, count=count, class_name=class_name)


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory with a model file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "model.xml").write_text(MODEL_XML, encoding="utf-8")
    return tmp_path


class TestScanCommand:
    """Tests for scan command."""

    def test_scan_basic(self, workdir: Path) -> None:
        """Test scanning a file lists its duplicates."""
        result = runner.invoke(app, ["scan", "model.xml"])

        assert result.exit_code == 0
        assert "File analyzed successfully" in result.output
        assert "ABC" in result.output
        assert "XYZ" in result.output

    def test_scan_no_duplicates(self, workdir: Path) -> None:
        """Test a clean file is reported as such."""
        (workdir / "clean.xml").write_text("<Model/>", encoding="utf-8")

        result = runner.invoke(app, ["scan", "clean.xml"])

        assert result.exit_code == 0
        assert "No duplicates found" in result.output

    def test_scan_json(self, workdir: Path) -> None:
        """Test JSON output uses the camelCase field names."""
        result = runner.invoke(app, ["scan", "model.xml", "--json"])

        assert result.exit_code == 0
        assert '"objectId": "ABC"' in result.output
        assert '"className": "Gadget"' in result.output
        assert '"success": true' in result.output

    def test_scan_save_progress(self, workdir: Path) -> None:
        """Test a snapshot with all duplicates pending is written."""
        result = runner.invoke(app, ["scan", "model.xml", "--save-progress", "progress.xml"])

        assert result.exit_code == 0
        snapshot = load(workdir / "progress.xml")
        assert snapshot.completed == []
        assert snapshot.pending == [dup("ABC"), dup("XYZ", 3, "Gadget")]

    def test_scan_malformed(self, workdir: Path) -> None:
        """Test malformed files exit with an error."""
        (workdir / "broken.xml").write_text("<ViewObject><PROPERTY</ViewObject>", encoding="utf-8")

        result = runner.invoke(app, ["scan", "broken.xml"])

        assert result.exit_code == 1
        assert "Failed to parse XML file" in result.output

    def test_scan_unsupported_file(self, workdir: Path) -> None:
        """Test non-XML files exit with an error."""
        (workdir / "notes.txt").write_text(MODEL_XML, encoding="utf-8")

        result = runner.invoke(app, ["scan", "notes.txt"])

        assert result.exit_code == 1
        assert "XML files only" in result.output

    def test_scan_missing_file(self, workdir: Path) -> None:
        """Test a missing file exits with an error."""
        result = runner.invoke(app, ["scan", "missing.xml"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_scan_config_error(self, mocker: MockerFixture, workdir: Path) -> None:
        """Test configuration errors exit with an error."""
        mocker.patch("xmldupes.cli.XmlDupesConfig", side_effect=InvalidConfigurationError("bad threshold"))

        result = runner.invoke(app, ["scan", "model.xml"])

        assert result.exit_code == 1
        assert "Configuration error: bad threshold" in result.output

    def test_scan_unexpected_error(self, mocker: MockerFixture, workdir: Path) -> None:
        """Test unexpected errors are reported with the generic prefix."""
        mock_analyzer_class = mocker.patch("xmldupes.cli.DuplicateAnalyzer")
        mock_analyzer_class.return_value.analyze_file.side_effect = RuntimeError("disk on fire")

        result = runner.invoke(app, ["scan", "model.xml"])

        assert result.exit_code == 1
        assert "Error: disk on fire" in result.output
        mock_analyzer_class.return_value.analyze_file.assert_called_once_with("model.xml")


class TestProgressCommands:
    """Tests for status, complete, reopen and resume commands."""

    @pytest.fixture
    def snapshot_path(self, workdir: Path) -> Path:
        """Snapshot with one completed and two pending items."""
        path = workdir / "progress.xml"
        save(path, ProgressSnapshot(completed=[dup("A")], pending=[dup("B"), dup("C")]))
        return path

    def test_status(self, snapshot_path: Path) -> None:
        """Test status shows the progress."""
        result = runner.invoke(app, ["status", str(snapshot_path)])

        assert result.exit_code == 0
        assert "1 of 3" in result.output
        assert "33% completed" in result.output

    def test_status_malformed_snapshot(self, workdir: Path) -> None:
        """Test a malformed snapshot exits with an error."""
        path = workdir / "bad.xml"
        path.write_text("<ProgressData>", encoding="utf-8")

        result = runner.invoke(app, ["status", str(path)])

        assert result.exit_code == 1
        assert "Invalid XML format" in result.output

    def test_complete(self, snapshot_path: Path) -> None:
        """Test completing ids moves them to the completed section."""
        result = runner.invoke(app, ["complete", str(snapshot_path), "B", "C"])

        assert result.exit_code == 0
        snapshot = load(snapshot_path)
        assert [item.object_id for item in snapshot.completed] == ["A", "B", "C"]
        assert snapshot.pending == []
        assert "No pending items" in result.output

    def test_complete_unknown_id(self, snapshot_path: Path) -> None:
        """Test completing an unknown id fails and leaves the file alone."""
        before = snapshot_path.read_text(encoding="utf-8")

        result = runner.invoke(app, ["complete", str(snapshot_path), "NOPE"])

        assert result.exit_code == 1
        assert "Unknown ObjectId" in result.output
        assert snapshot_path.read_text(encoding="utf-8") == before

    def test_reopen(self, snapshot_path: Path) -> None:
        """Test reopening ids moves them back to pending."""
        result = runner.invoke(app, ["reopen", str(snapshot_path), "A"])

        assert result.exit_code == 0
        snapshot = load(snapshot_path)
        assert snapshot.completed == []
        assert [item.object_id for item in snapshot.pending] == ["A", "B", "C"]

    def test_resume(self, workdir: Path) -> None:
        """Test resuming carries ticks over to a fresh scan."""
        old = workdir / "old.xml"
        save(old, ProgressSnapshot(completed=[dup("ABC"), dup("GONE")], pending=[]))

        result = runner.invoke(app, ["resume", "model.xml", str(old), "--output", "new.xml"])

        assert result.exit_code == 0
        assert "No longer duplicated: GONE" in result.output
        snapshot = load(workdir / "new.xml")
        assert snapshot.completed == [dup("ABC")]
        assert snapshot.pending == [dup("XYZ", 3, "Gadget")]


class TestOtherCommands:
    """Tests for config and version commands."""

    def test_config(self, workdir: Path) -> None:
        """Test config shows thresholds."""
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert "DistanceSensor: count > 3" in result.output
        assert "Default: count > 1" in result.output

    def test_config_missing_env_file(self, workdir: Path) -> None:
        """Test a missing custom env file is reported."""
        result = runner.invoke(app, ["config", "--env-file", "nope.env"])

        assert result.exit_code == 1
        assert "Environment file not found" in result.output

    def test_version(self) -> None:
        """Test version output."""
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
