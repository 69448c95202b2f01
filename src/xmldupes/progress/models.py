"""Models for saved review progress."""

from pydantic import BaseModel, Field

from xmldupes.models import DuplicateResult


class ProgressSnapshot(BaseModel):
    """Review progress split into completed and pending items.

    The two lists are kept as given; an id appearing in both is not rejected.
    """

    completed: list[DuplicateResult] = Field(default_factory=list, description="Reviewed items")
    pending: list[DuplicateResult] = Field(default_factory=list, description="Items still to review")

    @property
    def total_items(self) -> int:
        """Number of items in both sections."""
        return len(self.completed) + len(self.pending)

    @property
    def completed_count(self) -> int:
        """Number of reviewed items."""
        return len(self.completed)

    @property
    def progress_percentage(self) -> float:
        """Calculate the share of reviewed items.

        Returns:
            Percentage (0-100), 0 when there are no items
        """
        if self.total_items == 0:
            return 0.0
        return (self.completed_count / self.total_items) * 100
