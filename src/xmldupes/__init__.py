"""xmldupes - find duplicated ObjectId values in ViewObject XML exports."""

__version__ = "0.1.0"
