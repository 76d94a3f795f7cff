# matrixalg/inout/xml_backend.py
import xml.etree.ElementTree as ET

from matrixalg.core.exceptions import DocumentParseError
from matrixalg.inout.document import DocumentBackend, DocumentNode
from matrixalg.utils.logging_config import get_logger

logger = get_logger(__name__)


def _convert(elem: ET.Element, strip: bool) -> DocumentNode:
    text = elem.text
    if text is not None and strip:
        text = text.strip() or None
    return DocumentNode(
        name=elem.tag,
        attributes=dict(elem.attrib),
        text=text,
        children=tuple(_convert(child, strip) for child in elem),
    )


class XmlBackend(DocumentBackend):
    name = "xml"
    doc = ("XML documents via xml.etree.ElementTree. Elements map one-to-one "
           "onto nodes (tag, attributes, text, children).")
    options_schema = {
        "strip_whitespace": {"type": "boolean", "default": True},
    }

    def parse(self, filename: str) -> DocumentNode:
        with open(filename, "rb") as f:
            try:
                root = ET.parse(f).getroot()
            except ET.ParseError as exc:
                logger.error("XML parse error in '%s': %s", filename, exc)
                raise DocumentParseError(f"Malformed XML in '{filename}': {exc}") from exc
        return _convert(root, self.options["strip_whitespace"])


BACKEND = XmlBackend
