"""
Shared fixtures: credentials and canned catalog responses.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock

from ecs_catalog.models.credentials import Credentials
from ecs_catalog.services.ecs_service import parse_document

NAMESPACE = "http://webservices.amazon.com/AWSECommerceService/2011-08-01"


def items_xml(asins, root="ItemLookupResponse"):
    """Build a namespaced response body with one titled item per ASIN."""
    items = "".join(
        f"<Item><ASIN>{asin}</ASIN>"
        f"<ItemAttributes><Title>Title {asin}</Title></ItemAttributes></Item>"
        for asin in asins
    )
    return (
        f'<?xml version="1.0" encoding="UTF-8"?>'
        f'<{root} xmlns="{NAMESPACE}">'
        f"<OperationRequest><RequestId>abc</RequestId></OperationRequest>"
        f"<Items><Request><IsValid>True</IsValid></Request>{items}</Items>"
        f"</{root}>"
    ).encode("utf-8")


def error_xml(code="AWS.InvalidParameterValue", message="ItemId is not valid"):
    """Build a response body whose request failed on the service side."""
    return (
        f'<ItemLookupResponse xmlns="{NAMESPACE}">'
        f"<Items><Request><IsValid>False</IsValid><Errors><Error>"
        f"<Code>{code}</Code><Message>{message}</Message>"
        f"</Error></Errors></Request></Items>"
        f"</ItemLookupResponse>"
    ).encode("utf-8")


def create_mock_response(status=200, body=b""):
    """Helper to create a mocked aiohttp response."""
    mock_response = MagicMock()
    mock_response.status = status
    mock_response.read = AsyncMock(return_value=body)
    return mock_response


def create_mock_session(*responses, side_effect=None):
    """Helper to create an open session whose get() yields the given responses."""
    mock_session = MagicMock()
    mock_session.closed = False
    mock_session.close = AsyncMock()
    if side_effect is not None:
        mock_session.get = AsyncMock(side_effect=side_effect)
    else:
        mock_session.get = AsyncMock(side_effect=list(responses))
    return mock_session


@pytest.fixture
def credentials():
    return Credentials(
        access_key="AKIAEXAMPLEKEY",
        secret_key="secret/key+with~chars",
        associate_tag="example-20"
    )


@pytest.fixture
def lookup_document():
    return parse_document(items_xml(["B000000001"]))
