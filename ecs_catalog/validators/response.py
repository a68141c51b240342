"""
Minimal sanity check on parsed catalog documents.
Not schema validation: any document with one titled item passes.
"""
from typing import Optional, Tuple
from xml.etree.ElementTree import Element

from ecs_catalog.errors import ConnectionError, InvalidResponseError
from ecs_catalog.logger import logger

TITLE_PATH = "Items/Item/ItemAttributes/Title"

ERROR_PATHS = (
    "Items/Request/Errors/Error",
    "OperationRequest/Errors/Error",
    "Errors/Error",
    "Error",
)


def find_error(document: Element) -> Optional[Tuple[Optional[str], Optional[str]]]:
    """Return (code, message) of the first service error in the document."""
    if document.tag == "Error":
        return document.findtext("Code"), document.findtext("Message")

    for path in ERROR_PATHS:
        error = document.find(path)
        if error is not None:
            return error.findtext("Code"), error.findtext("Message")

    return None


def validate(document: Optional[Element]) -> Element:
    """
    Pass a document through if it holds at least one titled item.

    Raises:
        ConnectionError: If no document was obtained
        InvalidResponseError: If the document has no item title
    """
    if document is None:
        logger.error("Catalog API error: could not connect to the service")
        raise ConnectionError("Catalog API error: could not connect to the service")

    if document.find(TITLE_PATH) is not None:
        return document

    error = find_error(document)
    if error:
        code, message = error
        logger.error(f"Catalog API returned error {code}: {message}")
        raise InvalidResponseError(
            f"Catalog API error: invalid XML response ({code}: {message})",
            code=code,
            error_message=message
        )

    logger.error(f"Catalog API returned no titled item (root <{document.tag}>)")
    raise InvalidResponseError("Catalog API error: invalid XML response")
