"""Review progress exceptions."""


class ProgressError(Exception):
    """Base exception for review progress errors."""


class UnknownObjectIdError(ProgressError):
    """An id is not part of the current result list."""

    def __init__(self, object_id: str) -> None:
        """Initialize error.

        Args:
            object_id: The id that was not found
        """
        super().__init__(f"Unknown ObjectId: {object_id!r}")
        self.object_id = object_id
