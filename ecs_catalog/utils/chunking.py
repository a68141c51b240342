"""
Identifier partitioning for rate-limited lookups.
"""
from typing import List, Sequence


def chunk_identifiers(identifiers: Sequence[str], limit: int) -> List[List[str]]:
    """
    Split identifiers into consecutive chunks of at most `limit` entries.
    
    Args:
        identifiers: Identifiers in caller order
        limit: Maximum chunk size, must be positive
        
    Returns:
        Chunks in order; only the last may be shorter than `limit`
    """
    if limit < 1:
        raise ValueError(f"Chunk limit must be positive, got {limit}")
    
    return [
        list(identifiers[start:start + limit])
        for start in range(0, len(identifiers), limit)
    ]
