"""Reading and writing review progress snapshots.

A snapshot is a small XML document::

    <?xml version='1.0' encoding='UTF-8'?>
    <ProgressData>
      <CompletedItems>
        <Item objectId="A1" count="2" className="Widget"/>
      </CompletedItems>
      <PendingItems>
        <Item objectId="B7" count="5" className="ConveyorGroup"/>
      </PendingItems>
    </ProgressData>
"""

import logging
import re
from collections.abc import Iterable
from pathlib import Path

from lxml import etree

from xmldupes.models import DuplicateResult
from xmldupes.progress.exceptions import ProgressError
from xmldupes.progress.models import ProgressSnapshot
from xmldupes.scanner.parsing import parse_document

logger = logging.getLogger(__name__)

ROOT_TAG = "ProgressData"
COMPLETED_TAG = "CompletedItems"
PENDING_TAG = "PendingItems"
ITEM_TAG = "Item"

DEFAULT_COUNT = 1
# ASCII digits only, optionally signed
COUNT_PATTERN = re.compile(r"[+-]?[0-9]+")


def serialize(completed: Iterable[DuplicateResult], pending: Iterable[DuplicateResult]) -> str:
    """Serialize review progress to a snapshot document.

    Attribute values are escaped, so ids and class names containing XML
    special characters survive a round trip.

    Args:
        completed: Reviewed items, in display order
        pending: Items still to review, in display order

    Returns:
        Snapshot XML text

    Raises:
        ProgressError: If a value contains characters XML cannot represent
    """
    root = etree.Element(ROOT_TAG)

    for tag, items in ((COMPLETED_TAG, completed), (PENDING_TAG, pending)):
        section = etree.SubElement(root, tag)
        for item in items:
            # Attribute order is part of the format
            attrib = {
                "objectId": item.object_id,
                "count": str(item.count),
                "className": item.class_name,
            }
            try:
                etree.SubElement(section, ITEM_TAG, attrib=attrib)
            except ValueError as e:
                raise ProgressError(f"Cannot write item {item.object_id!r} to a snapshot: {e}") from e

    return etree.tostring(root, pretty_print=True, xml_declaration=True, encoding="UTF-8").decode("utf-8")


def parse(xml_text: str | bytes) -> ProgressSnapshot:
    """Parse a snapshot document.

    Missing sections read as empty. Missing ``objectId`` and ``className``
    attributes read as empty strings; a missing or non-numeric ``count``
    reads as 1.

    Args:
        xml_text: Snapshot XML text

    Returns:
        Parsed snapshot

    Raises:
        ParseError: If the document is not well-formed
    """
    root = parse_document(xml_text)
    snapshot = ProgressSnapshot(
        completed=_read_section(root, COMPLETED_TAG),
        pending=_read_section(root, PENDING_TAG),
    )
    logger.debug(f"Parsed snapshot: {snapshot.completed_count} completed, {len(snapshot.pending)} pending")
    return snapshot


def save(path: str | Path, snapshot: ProgressSnapshot) -> None:
    """Write a snapshot file.

    Args:
        path: Destination file
        snapshot: Progress to save
    """
    Path(path).write_text(serialize(snapshot.completed, snapshot.pending), encoding="utf-8")
    logger.info(f"Saved progress to {path}")


def load(path: str | Path) -> ProgressSnapshot:
    """Read a snapshot file.

    Args:
        path: Snapshot file

    Returns:
        Parsed snapshot

    Raises:
        ParseError: If the file is not well-formed XML
    """
    return parse(Path(path).read_bytes())


def _read_section(root: etree._Element, tag: str) -> list[DuplicateResult]:
    section = next(root.iter(tag), None)
    if section is None:
        return []

    return [
        DuplicateResult(
            object_id=item.get("objectId", ""),
            count=_parse_count(item.get("count")),
            class_name=item.get("className", ""),
        )
        for item in section.iterdescendants(ITEM_TAG)
    ]


def _parse_count(raw: str | None) -> int:
    if raw is not None and COUNT_PATTERN.fullmatch(raw.strip()):
        return int(raw.strip())
    logger.debug(f"Invalid count {raw!r}, using {DEFAULT_COUNT}")
    return DEFAULT_COUNT
