"""Top-level models for xmldupes."""

from pydantic import BaseModel, Field


class DuplicateResult(BaseModel):
    """An ObjectId value that occurs more often than its class allows."""

    model_config = {"frozen": True, "populate_by_name": True}

    object_id: str = Field(alias="objectId", description="Value of the ObjectId property")
    count: int = Field(default=1, description="Number of view objects carrying this id")
    class_name: str = Field(
        default="",
        alias="className",
        description="Class name of the first view object carrying this id",
    )


class AnalysisReport(BaseModel):
    """Outcome of analyzing one XML document.

    A failed parse is reported with ``success=False`` and an error message, which
    keeps it distinct from a successful analysis that found no duplicates.
    """

    model_config = {"populate_by_name": True}

    success: bool = Field(description="Whether the document could be parsed")
    file_name: str = Field(alias="fileName", description="Name of the analyzed file")
    duplicates: list[DuplicateResult] = Field(default_factory=list, description="Reported duplicates")
    error: str | None = Field(default=None, description="Error message when the analysis failed")

    @property
    def has_duplicates(self) -> bool:
        """Check if the analysis reported any duplicates.

        Returns:
            True if at least one duplicate was found
        """
        return len(self.duplicates) > 0
