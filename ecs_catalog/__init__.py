"""
ECS Catalog - signed product lookups against the Amazon advertising XML API.
"""

__version__ = "1.0.0"
__author__ = "Engineering Team"

# Export main components for easy import
from ecs_catalog.config import config
from ecs_catalog.logger import logger
from ecs_catalog.errors import (
    ConfigError,
    CatalogError,
    ConnectionError,
    ParseError,
    InvalidResponseError
)
from ecs_catalog.models.credentials import Credentials
from ecs_catalog.models.lookup import SingleLookup, BatchedLookup, ChunkResult
from ecs_catalog.client import CatalogClient, BATCH_LIMIT

__all__ = [
    'config',
    'logger',
    'ConfigError',
    'CatalogError',
    'ConnectionError',
    'ParseError',
    'InvalidResponseError',
    'Credentials',
    'SingleLookup',
    'BatchedLookup',
    'ChunkResult',
    'CatalogClient',
    'BATCH_LIMIT'
]
