"""Review session tracking which reported duplicates have been handled."""

import logging

from xmldupes.models import AnalysisReport, DuplicateResult
from xmldupes.progress.exceptions import UnknownObjectIdError
from xmldupes.progress.models import ProgressSnapshot

logger = logging.getLogger(__name__)


class ReviewSession:
    """Holds a result list and the set of ids already reviewed.

    Pending and completed items are derived from the result list on demand,
    so both keep the order of the scan output.
    """

    def __init__(self, results: list[DuplicateResult] | None = None) -> None:
        """Initialize the session.

        Args:
            results: Duplicates to review
        """
        self._results: list[DuplicateResult] = list(results or [])
        self._completed_ids: set[str] = set()

    @property
    def results(self) -> list[DuplicateResult]:
        """All duplicates under review."""
        return list(self._results)

    @property
    def pending(self) -> list[DuplicateResult]:
        """Duplicates not reviewed yet."""
        return [item for item in self._results if item.object_id not in self._completed_ids]

    @property
    def completed(self) -> list[DuplicateResult]:
        """Duplicates already reviewed."""
        return [item for item in self._results if item.object_id in self._completed_ids]

    @property
    def total_items(self) -> int:
        """Number of duplicates under review."""
        return len(self._results)

    @property
    def completed_count(self) -> int:
        """Number of duplicates already reviewed."""
        return len(self._completed_ids)

    @property
    def progress_percentage(self) -> float:
        """Calculate the share of reviewed items.

        Returns:
            Percentage (0-100), 0 when there is nothing to review
        """
        if self.total_items == 0:
            return 0.0
        return (self.completed_count / self.total_items) * 100

    def is_completed(self, object_id: str) -> bool:
        """Check whether an id has been reviewed.

        Args:
            object_id: Id to check

        Returns:
            True if the id is ticked
        """
        return object_id in self._completed_ids

    def set_completed(self, object_id: str, completed: bool = True) -> None:
        """Tick or untick an id.

        Args:
            object_id: Id of a duplicate in the result list
            completed: True to mark as reviewed, False to move back to pending

        Raises:
            UnknownObjectIdError: If the id is not in the result list
        """
        if not any(item.object_id == object_id for item in self._results):
            raise UnknownObjectIdError(object_id)

        if completed:
            self._completed_ids.add(object_id)
        else:
            self._completed_ids.discard(object_id)

    def load_report(self, report: AnalysisReport) -> bool:
        """Replace the results with those of a new analysis.

        A failed analysis leaves the current results and ticks untouched.

        Args:
            report: Analysis outcome

        Returns:
            True if the session was updated
        """
        if not report.success:
            logger.debug(f"Keeping previous results, analysis of {report.file_name} failed")
            return False

        self._results = list(report.duplicates)
        self._completed_ids.clear()
        return True

    def to_snapshot(self) -> ProgressSnapshot:
        """Split the results into completed and pending sections.

        Returns:
            Snapshot of the current progress
        """
        return ProgressSnapshot(completed=self.completed, pending=self.pending)

    @classmethod
    def from_snapshot(cls, snapshot: ProgressSnapshot) -> "ReviewSession":
        """Rebuild a session from saved progress.

        Results are ordered by id, like fresh scan output. An id listed more
        than once is kept once, and the first entry wins with the completed
        section read before the pending one.

        Args:
            snapshot: Saved progress

        Returns:
            Session with the completed section ticked
        """
        unique: dict[str, DuplicateResult] = {}
        for item in [*snapshot.completed, *snapshot.pending]:
            unique.setdefault(item.object_id, item)

        results = sorted(unique.values(), key=lambda item: item.object_id)
        session = cls(results)
        session._completed_ids = {item.object_id for item in snapshot.completed}
        return session

    def apply_snapshot(self, snapshot: ProgressSnapshot) -> list[str]:
        """Carry ticks from saved progress over to the current results.

        Args:
            snapshot: Progress saved from an earlier scan

        Returns:
            Completed ids from the snapshot that are no longer reported
        """
        current_ids = {item.object_id for item in self._results}
        missing: list[str] = []

        for item in snapshot.completed:
            if item.object_id in current_ids:
                self._completed_ids.add(item.object_id)
            else:
                missing.append(item.object_id)

        if missing:
            logger.debug(f"{len(missing)} completed ids are no longer reported: {missing}")

        return missing
