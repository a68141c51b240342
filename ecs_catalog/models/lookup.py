"""
Result contracts for identifier lookups.
A batch of ten or fewer identifiers yields a SingleLookup, a larger one a
BatchedLookup. Both expose the same iteration helpers.
"""
from dataclasses import dataclass, field
from typing import Iterator, Tuple, Union
from xml.etree.ElementTree import Element


@dataclass(frozen=True)
class SingleLookup:
    """Items element of a single ItemLookup response."""
    items: Element
    identifiers: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def is_batched(self) -> bool:
        return False

    def item_collections(self) -> Iterator[Element]:
        yield self.items

    def items_found(self) -> Iterator[Element]:
        yield from self.items.findall("Item")


@dataclass(frozen=True)
class ChunkResult:
    """One chunk of a batched lookup, in input order."""
    index: int
    identifiers: Tuple[str, ...]
    items: Element


@dataclass(frozen=True)
class BatchedLookup:
    """Ordered chunk results of a lookup split across several requests."""
    chunks: Tuple[ChunkResult, ...]

    @property
    def is_batched(self) -> bool:
        return True

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return tuple(asin for chunk in self.chunks for asin in chunk.identifiers)

    def item_collections(self) -> Iterator[Element]:
        for chunk in self.chunks:
            yield chunk.items

    def items_found(self) -> Iterator[Element]:
        for collection in self.item_collections():
            yield from collection.findall("Item")

    def __len__(self) -> int:
        return len(self.chunks)

    def __getitem__(self, index: int) -> ChunkResult:
        return self.chunks[index]


LookupResult = Union[SingleLookup, BatchedLookup]
