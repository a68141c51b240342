"""
Public catalog lookups.
Each operation builds its parameters, runs one signed query per request,
validates the document and returns it or raises a CatalogError.
"""
import asyncio
import functools
from typing import Any, Callable, Dict, List, Optional, Sequence
from xml.etree.ElementTree import Element

from ecs_catalog.config import config
from ecs_catalog.errors import CatalogError
from ecs_catalog.logger import logger
from ecs_catalog.models.credentials import Credentials
from ecs_catalog.models.lookup import BatchedLookup, ChunkResult, LookupResult, SingleLookup
from ecs_catalog.sentry import capture_lookup_failure
from ecs_catalog.services.ecs_service import EcsService
from ecs_catalog.utils.chunking import chunk_identifiers
from ecs_catalog.validators.response import validate

# Identifiers accepted per ItemLookup request. Fixed by the service.
BATCH_LIMIT = 10

SEARCH_TYPES = ("UPC", "TITLE")


def reported(operation: str) -> Callable:
    """Forward CatalogErrors escaping a public operation to error tracking."""
    def decorator(func: Callable):
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except CatalogError as e:
                capture_lookup_failure(operation, e, {"args": [str(arg) for arg in args]})
                raise
        return wrapper
    return decorator


class CatalogClient:
    """
    Product lookups against the advertising catalog.

    Usage:
        async with CatalogClient(credentials) as client:
            document = await client.get_by_keyword("harry potter", "Books")
    """

    def __init__(self, credentials: Credentials, region: Optional[str] = None,
                 timeout: Optional[int] = None, verify_ssl: Optional[bool] = None,
                 max_concurrent_chunks: Optional[int] = None,
                 service: Optional[EcsService] = None):
        self.credentials = credentials
        self.service = service or EcsService(
            credentials, region=region, timeout=timeout, verify_ssl=verify_ssl
        )
        self.max_concurrent_chunks = max(1, max_concurrent_chunks or config.MAX_CONCURRENT_CHUNKS)

    @classmethod
    def from_config(cls, **kwargs) -> "CatalogClient":
        """Build a client from environment configuration."""
        return cls(config.credentials(), **kwargs)

    async def initialize(self):
        await self.service.initialize()

    async def close(self):
        await self.service.close()

    async def __aenter__(self) -> "CatalogClient":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _query(self, parameters: Dict[str, Any]) -> Element:
        document = await self.service.execute(parameters)
        return validate(document)

    @reported("search_by_code")
    async def search_by_code(self, code: str, category: str,
                             id_type: str = "UPC", page: int = 1) -> Element:
        """
        Look up a product by UPC, or search by title.

        Args:
            code: UPC code, or title text when id_type is "TITLE"
            category: Search index, e.g. "Books"
            id_type: "UPC" or "TITLE"
            page: Result page, title searches only

        Returns:
            Validated response document
        """
        if id_type == "UPC":
            parameters = {
                "Operation": "ItemLookup",
                "ItemId": code,
                "SearchIndex": category,
                "IdType": "UPC",
                "ResponseGroup": "Medium"
            }
        elif id_type == "TITLE":
            parameters = {
                "Operation": "ItemSearch",
                "Title": code,
                "SearchIndex": category,
                "ItemPage": page,
                "ResponseGroup": "Medium"
            }
        else:
            raise ValueError(f"Unsupported search type: {id_type} (expected one of {SEARCH_TYPES})")

        return await self._query(parameters)

    @reported("get_by_code")
    async def get_by_code(self, code: str, category: str) -> Element:
        """Look up a product by UPC within a search index."""
        return await self._query({
            "Operation": "ItemLookup",
            "ItemId": code,
            "SearchIndex": category,
            "IdType": "UPC",
            "ResponseGroup": "Medium"
        })

    @reported("get_by_identifier")
    async def get_by_identifier(self, asin: str) -> Element:
        """Look up a single ASIN."""
        return await self._query({
            "Operation": "ItemLookup",
            "ItemId": asin,
            "ResponseGroup": "Medium"
        })

    @reported("get_by_keyword")
    async def get_by_keyword(self, keyword: str, category: str) -> Element:
        """Search a category by free-text keyword."""
        return await self._query({
            "Operation": "ItemSearch",
            "Keywords": keyword,
            "SearchIndex": category
        })

    async def _lookup_chunk(self, asins: Sequence[str]) -> Element:
        document = await self._query({
            "Operation": "ItemLookup",
            "IdType": "ASIN",
            "ItemId": ",".join(str(asin) for asin in asins),
            "ResponseGroup": "Medium"
        })
        return document.find("Items")

    @reported("get_by_identifiers")
    async def get_by_identifiers(self, asins: Sequence[str]) -> LookupResult:
        """
        Look up any number of ASINs.

        Up to BATCH_LIMIT identifiers go out in one request and yield a
        SingleLookup. Larger lists are split into chunks of BATCH_LIMIT,
        fetched with at most max_concurrent_chunks in flight, and yield a
        BatchedLookup in input order.

        Raises:
            ValueError: If no identifiers are given, or a bare string is passed
            CatalogError: From the first failing chunk; unsent chunks are skipped
        """
        if isinstance(asins, str):
            raise ValueError("Identifiers must be a sequence of ASINs, not a single string")

        asins = [str(asin) for asin in asins]
        if not asins:
            raise ValueError("At least one identifier is required")

        if len(asins) <= BATCH_LIMIT:
            items = await self._lookup_chunk(asins)
            return SingleLookup(items=items, identifiers=tuple(asins))

        chunks = chunk_identifiers(asins, BATCH_LIMIT)
        logger.info(f"Splitting {len(asins)} identifiers into {len(chunks)} lookups")

        semaphore = asyncio.Semaphore(self.max_concurrent_chunks)
        aborted = asyncio.Event()

        async def fetch(index: int, chunk: List[str]) -> Optional[ChunkResult]:
            async with semaphore:
                # Chunks not yet sent are skipped once any chunk has failed
                if aborted.is_set():
                    return None
                try:
                    items = await self._lookup_chunk(chunk)
                except CatalogError as e:
                    e.chunk_index = index
                    aborted.set()
                    raise
            return ChunkResult(index=index, identifiers=tuple(chunk), items=items)

        results = await asyncio.gather(
            *(fetch(index, chunk) for index, chunk in enumerate(chunks)),
            return_exceptions=True
        )

        # Surface the earliest failing chunk, not the first to finish
        for result in results:
            if isinstance(result, BaseException):
                skipped = results.count(None)
                logger.error(
                    f"Batch lookup aborted at chunk {getattr(result, 'chunk_index', '?')}, "
                    f"{skipped} chunks not sent: {result}"
                )
                raise result

        return BatchedLookup(chunks=tuple(results))
