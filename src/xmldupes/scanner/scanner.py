"""Duplicate ObjectId scanner for ViewObject documents."""

import logging
from collections import Counter
from collections.abc import Iterator
from typing import TYPE_CHECKING

from lxml import etree

from xmldupes.models import DuplicateResult
from xmldupes.scanner.parsing import parse_document
from xmldupes.scanner.rules import ThresholdRules

if TYPE_CHECKING:
    from xmldupes.config import XmlDupesConfig

logger = logging.getLogger(__name__)


def _unprefixed(elements: Iterator[etree._Element]) -> Iterator[etree._Element]:
    """Keep elements written without a prefix.

    The local name was already matched with a ``{*}`` wildcard, so elements in a
    default namespace are kept while ``ns:ViewObject`` style names are dropped.

    Args:
        elements: Elements matched by local name

    Yields:
        Elements whose qualified name equals their local name
    """
    for element in elements:
        if element.prefix is None:
            yield element


class DuplicateScanner:
    """Finds ids shared by more view objects than their class allows.

    Every view object contributes the value of its first ``ObjectId`` property.
    Occurrences are tallied per id, each id keeps the class name of the first
    view object it was seen on, and ids whose count exceeds the threshold of
    that class are returned sorted by id.
    """

    def __init__(
        self,
        rules: ThresholdRules | None = None,
        view_object_tag: str = "ViewObject",
        property_tag: str = "PROPERTY",
        id_property: str = "ObjectId",
        classname_attribute: str = "classname",
    ) -> None:
        """Initialize the scanner.

        Args:
            rules: Reporting thresholds (defaults to the built-in table)
            view_object_tag: Tag of the elements whose ids are tallied
            property_tag: Tag of the nested property elements
            id_property: Property name holding the id
            classname_attribute: View object attribute holding the class name
        """
        self.rules = rules or ThresholdRules()
        self.view_object_tag = view_object_tag
        self.property_tag = property_tag
        self.id_property = id_property
        self.classname_attribute = classname_attribute

    @classmethod
    def from_config(cls, config: "XmlDupesConfig") -> "DuplicateScanner":
        """Create a scanner from application configuration.

        Args:
            config: Configuration object

        Returns:
            Configured scanner
        """
        return cls(
            rules=config.threshold_rules,
            view_object_tag=config.view_object_tag,
            property_tag=config.property_tag,
            id_property=config.id_property,
            classname_attribute=config.classname_attribute,
        )

    def scan(self, xml_text: str | bytes) -> list[DuplicateResult]:
        """Scan a document for duplicated ids.

        Args:
            xml_text: Raw XML document

        Returns:
            Reported duplicates sorted by id

        Raises:
            ParseError: If the document is not well-formed
        """
        root = parse_document(xml_text)
        counts, class_names = self._tally(root)

        duplicates = [
            DuplicateResult(object_id=object_id, count=count, class_name=class_names[object_id])
            for object_id, count in counts.items()
            if self.rules.is_reported(class_names[object_id], count)
        ]

        logger.debug(f"{len(duplicates)}/{len(counts)} distinct ids exceed their threshold")

        # Plain code point order so output does not depend on the locale
        return sorted(duplicates, key=lambda result: result.object_id)

    def _tally(self, root: etree._Element) -> tuple[Counter[str], dict[str, str]]:
        """Count ids over all view objects in document order.

        Args:
            root: Root element of the document

        Returns:
            Tuple of (count per id, class name of first occurrence per id)
        """
        counts: Counter[str] = Counter()
        class_names: dict[str, str] = {}
        view_objects = 0

        for view_object in _unprefixed(root.iter(f"{{*}}{self.view_object_tag}")):
            view_objects += 1
            object_id = self._find_object_id(view_object)
            if object_id is None:
                continue

            counts[object_id] += 1
            if object_id not in class_names:
                class_names[object_id] = view_object.get(self.classname_attribute, "")

        logger.debug(f"Scanned {view_objects} view objects, found {len(counts)} distinct ids")
        return counts, class_names

    def _find_object_id(self, view_object: etree._Element) -> str | None:
        """Get the id carried by a view object.

        Only the first matching property counts, even if it is empty.

        Args:
            view_object: View object element

        Returns:
            The untrimmed id, or None if there is no id property or its value is blank
        """
        for prop in _unprefixed(view_object.iterdescendants(f"{{*}}{self.property_tag}")):
            if prop.get("name") == self.id_property:
                value = prop.get("value", "")
                return value if value.strip() else None
        return None


def scan(xml_text: str | bytes) -> list[DuplicateResult]:
    """Scan a document for duplicated ids using the default rules.

    Args:
        xml_text: Raw XML document

    Returns:
        Reported duplicates sorted by id

    Raises:
        ParseError: If the document is not well-formed
    """
    return DuplicateScanner().scan(xml_text)
