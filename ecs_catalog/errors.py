"""
Domain exceptions for catalog lookups.
Every failure has a name, never a falsy return value.
"""
import builtins
from typing import Optional


class ConfigError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


class CatalogError(Exception):
    """Base class for every failed catalog operation."""

    def __init__(self, message: str, chunk_index: Optional[int] = None):
        super().__init__(message)
        self.chunk_index = chunk_index


class ConnectionError(CatalogError, builtins.ConnectionError):
    """Raised when no response body could be obtained from the service."""
    pass


class ParseError(CatalogError):
    """Raised when the response body is not well-formed XML."""
    pass


class InvalidResponseError(CatalogError):
    """Raised when a parsed document holds no titled item."""

    def __init__(self, message: str, code: Optional[str] = None,
                 error_message: Optional[str] = None, chunk_index: Optional[int] = None):
        super().__init__(message, chunk_index=chunk_index)
        self.code = code
        self.error_message = error_message
