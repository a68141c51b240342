"""
Response validator tests.
"""
import pytest
from xml.etree import ElementTree

from conftest import error_xml, items_xml
from ecs_catalog.errors import CatalogError, ConnectionError, InvalidResponseError
from ecs_catalog.services.ecs_service import parse_document
from ecs_catalog.validators.response import find_error, validate


def test_validate_single_titled_item(lookup_document):
    """A document with one titled item passes through unchanged."""
    assert validate(lookup_document) is lookup_document


def test_validate_many_items():
    document = parse_document(items_xml(["B000000001", "B000000002"]))
    
    assert validate(document) is document


def test_validate_zero_items():
    """No item nodes means an invalid response."""
    document = parse_document(items_xml([]))
    
    with pytest.raises(InvalidResponseError) as exc_info:
        validate(document)
    
    assert exc_info.value.code is None
    assert "invalid XML response" in str(exc_info.value)


def test_validate_item_without_title():
    document = ElementTree.fromstring(
        "<ItemLookupResponse><Items><Item><ASIN>B000000001</ASIN></Item></Items></ItemLookupResponse>"
    )
    
    with pytest.raises(InvalidResponseError):
        validate(document)


def test_validate_missing_document():
    """An absent document is a transport failure."""
    with pytest.raises(ConnectionError) as exc_info:
        validate(None)
    
    assert isinstance(exc_info.value, CatalogError)


def test_validate_service_error_details():
    """Service error code and message travel with the exception."""
    document = parse_document(error_xml("AWS.ECommerceService.NoExactMatches", "No results"))
    
    with pytest.raises(InvalidResponseError) as exc_info:
        validate(document)
    
    assert exc_info.value.code == "AWS.ECommerceService.NoExactMatches"
    assert exc_info.value.error_message == "No results"


def test_find_error_on_error_root():
    """Signature failures come back as a bare ItemLookupErrorResponse."""
    document = ElementTree.fromstring(
        "<ItemLookupErrorResponse><Error><Code>SignatureDoesNotMatch</Code>"
        "<Message>Bad signature</Message></Error></ItemLookupErrorResponse>"
    )
    
    assert find_error(document) == ("SignatureDoesNotMatch", "Bad signature")


def test_find_error_none(lookup_document):
    assert find_error(lookup_document) is None
