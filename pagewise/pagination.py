"""
Page envelope for Pagewise.

This module provides the data structure returned by fetch clients: one bounded
batch of records together with the pagination metadata reported by the source.
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class PageEnvelope(Generic[T]):
    """
    Represents a single page of records fetched from the data source.

    Attributes:
        records: Records of this page, in source order
        result_count: Number of records the source claims to have returned
        page_number: Ordinal of this page as reported by the source
    """

    records: list[T]
    result_count: int
    page_number: int

    @property
    def is_empty(self) -> bool:
        """
        Returns True if the page carries no records.

        Derived from the records themselves; ``result_count`` is not trusted.
        """
        return len(self.records) == 0
