"""
Services package initialization.
Centralizes service imports.
"""

from ecs_catalog.services.ecs_service import EcsService, resolve_host, parse_document

__all__ = [
    'EcsService',
    'resolve_host',
    'parse_document'
]
