"""XML parsing shared by the scanner and the progress codec."""

from lxml import etree

from xmldupes.scanner.exceptions import ParseError


def _make_parser() -> etree.XMLParser:
    # Entities are left unexpanded and nothing is fetched over the network
    return etree.XMLParser(resolve_entities=False, no_network=True, huge_tree=True)


def parse_document(xml_text: str | bytes) -> etree._Element:
    """Parse a whole XML document into memory.

    Text is encoded as UTF-8 before parsing so documents that carry an XML
    declaration are accepted; bytes are handed to the parser unchanged.

    Args:
        xml_text: Raw XML document

    Returns:
        Root element of the parsed document

    Raises:
        ParseError: If the document is not well-formed
    """
    data = xml_text.encode("utf-8") if isinstance(xml_text, str) else xml_text
    if not data.strip():
        raise ParseError("Invalid XML format: document is empty")

    try:
        root = etree.fromstring(data, _make_parser())
    except etree.XMLSyntaxError as e:
        line, column = e.position if e.position else (None, None)
        raise ParseError(f"Invalid XML format: {e.msg or e}", line=line, column=column) from e

    if root is None:
        raise ParseError("Invalid XML format: document is empty")

    return root
