"""Review progress tracking and snapshot persistence."""

from xmldupes.progress.codec import load, parse, save, serialize
from xmldupes.progress.exceptions import ProgressError, UnknownObjectIdError
from xmldupes.progress.models import ProgressSnapshot
from xmldupes.progress.session import ReviewSession

__all__ = [
    "ProgressError",
    "ProgressSnapshot",
    "ReviewSession",
    "UnknownObjectIdError",
    "load",
    "parse",
    "save",
    "serialize",
]
