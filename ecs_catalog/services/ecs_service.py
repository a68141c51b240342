"""
Wrapper for the product advertising XML endpoint.
Adds the fixed request parameters, signs, fetches once and parses.
All network logic is isolated here.
"""
import aiohttp
import asyncio
import yarl
from typing import Any, Dict, Optional
from xml.etree import ElementTree
from xml.etree.ElementTree import Element

from ecs_catalog.config import config
from ecs_catalog.errors import ConnectionError, ParseError
from ecs_catalog.logger import logger
from ecs_catalog.models.credentials import Credentials
from ecs_catalog.signing import SignedRequest, build_signed_request, request_timestamp

SERVICE_NAME = "AWSECommerceService"
API_VERSION = "2011-08-01"

REGION_ALIASES = {
    "us": "com",
    "uk": "co.uk",
}
SUPPORTED_REGIONS = {"com", "co.uk", "ca", "de", "fr", "jp"}


def resolve_host(region: str) -> str:
    """Map a region or locale alias to the ECS host name."""
    tld = REGION_ALIASES.get(region, region)
    if tld not in SUPPORTED_REGIONS:
        raise ValueError(f"Unsupported catalog region: {region}")
    return f"ecs.amazonaws.{tld}"


def parse_document(body: bytes) -> Element:
    """Parse an XML body and drop namespaces so plain paths resolve."""
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as e:
        raise ParseError(f"Malformed XML response: {e}") from e

    for element in root.iter():
        if isinstance(element.tag, str) and element.tag.startswith("{"):
            element.tag = element.tag.split("}", 1)[1]
    return root


class EcsService:
    """
    Signed query executor.
    One GET per call; no retry, no cache.
    """

    def __init__(self, credentials: Credentials, region: Optional[str] = None,
                 timeout: Optional[int] = None, verify_ssl: Optional[bool] = None):
        self.credentials = credentials
        self.region = region or config.ECS_REGION
        self.host = resolve_host(self.region)
        self.timeout = timeout or config.REQUEST_TIMEOUT
        self.verify_ssl = config.VERIFY_SSL if verify_ssl is None else verify_ssl
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """Open the HTTP session."""
        if self.session is not None and not self.session.closed:
            return

        if not self.verify_ssl:
            logger.warning("Certificate verification disabled for catalog requests")

        self.session = aiohttp.ClientSession(
            timeout=aiohttp.ClientTimeout(total=self.timeout),
            connector=aiohttp.TCPConnector(ssl=self.verify_ssl)
        )
        logger.info(f"Catalog service initialized for host: {self.host}")

    async def close(self):
        """Close HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def __aenter__(self) -> "EcsService":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def build_request(self, parameters: Dict[str, Any],
                      timestamp: Optional[str] = None) -> SignedRequest:
        """Add the fixed parameters and sign the request."""
        parameters = dict(parameters)
        parameters["Service"] = SERVICE_NAME
        parameters["AWSAccessKeyId"] = self.credentials.access_key
        parameters["AssociateTag"] = self.credentials.associate_tag
        parameters["Timestamp"] = timestamp or request_timestamp()
        parameters["Version"] = API_VERSION

        return build_signed_request(parameters, self.credentials.secret_key, self.host)

    async def execute(self, parameters: Dict[str, Any]) -> Element:
        """
        Sign and send one catalog query.

        Args:
            parameters: Operation-specific parameters

        Returns:
            Parsed response root element

        Raises:
            ConnectionError: If no response body was obtained
            ParseError: If the body is not well-formed XML
        """
        await self.initialize()
        request = self.build_request(parameters)
        operation = parameters.get("Operation", "unknown")

        logger.info(f"Querying catalog: {operation}")
        logger.debug(f"Catalog request: {request.unsigned_url}")

        try:
            # Already percent-encoded; send the bytes that were signed
            response = await self.session.get(yarl.URL(request.url, encoded=True))
            body = await response.read()
        except aiohttp.ClientError as e:
            logger.error(f"Network error calling catalog: {str(e)}")
            raise ConnectionError(f"Network error calling catalog: {str(e)}") from e
        except asyncio.TimeoutError as e:
            logger.error(f"Timeout calling catalog after {self.timeout}s")
            raise ConnectionError(f"Timeout calling catalog after {self.timeout}s") from e

        if not body:
            logger.error(f"Empty response from catalog (status {response.status})")
            raise ConnectionError(f"Empty response from catalog (status {response.status})")

        try:
            document = parse_document(body)
        except ParseError as e:
            if response.status != 200:
                # Non-XML error page: treat as a transport failure
                logger.error(f"Catalog HTTP error {response.status}: {body[:200]!r}")
                raise ConnectionError(f"Catalog HTTP error {response.status}") from e
            logger.error(f"Malformed XML from catalog: {body[:200]!r}")
            raise

        if response.status != 200:
            logger.warning(f"Catalog returned status {response.status} with XML body")

        return document
