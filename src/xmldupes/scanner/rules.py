"""Per-class rules deciding when a repeated id is reported."""

from collections.abc import Mapping

from pydantic import BaseModel, Field

DEFAULT_THRESHOLD = 1

# These classes are expected to share an id across a few view objects
DEFAULT_CLASS_THRESHOLDS: dict[str, int] = {
    "DistanceSensor": 3,
    "ConveyorGroup": 3,
}


class ThresholdRules(BaseModel):
    """Decision table mapping class names to an exclusive minimum count.

    An id is reported only when its count is strictly greater than the
    threshold of its class. Class names are matched exactly and case-sensitively;
    classes without an override use the default threshold.
    """

    model_config = {"frozen": True}

    default: int = Field(default=DEFAULT_THRESHOLD, ge=0, description="Threshold for unlisted classes")
    overrides: Mapping[str, int] = Field(
        default_factory=lambda: dict(DEFAULT_CLASS_THRESHOLDS),
        description="Threshold per class name",
    )

    def threshold_for(self, class_name: str) -> int:
        """Get the threshold applying to a class.

        Args:
            class_name: Class name recorded for the id (may be empty)

        Returns:
            Count that must be exceeded for the id to be reported
        """
        return self.overrides.get(class_name, self.default)

    def is_reported(self, class_name: str, count: int) -> bool:
        """Check whether an id with this class and count is a duplicate.

        Args:
            class_name: Class name recorded for the id
            count: Number of occurrences

        Returns:
            True if count exceeds the class threshold
        """
        return count > self.threshold_for(class_name)
