"""
Pagination DTOs.

PageRequest carries the paging parameters of a list query; PageResponse
is the page shape returned to callers.
"""

import math
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

DEFAULT_PAGE_NUM = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100


class PageRequest(BaseModel):
    """
    Paging and sorting parameters.

    Out-of-range values are accepted here and clamped by normalize(), so a
    request for page 0 or 500 rows per page still yields a valid page.

    Attributes:
        page_num: 1-based page number
        page_size: Rows per page, clamped to [1, 100]
        sort_field: Field to sort by (not applied by the in-memory path)
        sort_direction: ASC or DESC

    Example:
        >>> PageRequest(page_num=0, page_size=500).normalize()
        PageRequest(page_num=1, page_size=100, sort_field=None, sort_direction='DESC')
    """

    page_num: Optional[int] = Field(default=DEFAULT_PAGE_NUM, description="Page number (from 1)")
    page_size: Optional[int] = Field(default=DEFAULT_PAGE_SIZE, description="Page size (1-100)")
    sort_field: Optional[str] = Field(default=None, description="Sort field")
    sort_direction: Literal["ASC", "DESC"] = Field(default="DESC", description="Sort direction")

    def normalize(self) -> "PageRequest":
        """Return a copy with page_num >= 1 and page_size in [1, MAX_PAGE_SIZE]."""
        page_num = self.page_num
        if page_num is None or page_num < 1:
            page_num = DEFAULT_PAGE_NUM

        page_size = self.page_size
        if page_size is None or page_size < 1:
            page_size = DEFAULT_PAGE_SIZE
        if page_size > MAX_PAGE_SIZE:
            page_size = MAX_PAGE_SIZE

        return self.model_copy(update={"page_num": page_num, "page_size": page_size})

    @property
    def offset(self) -> int:
        """Index of the first row of this page."""
        return (self.page_num - 1) * self.page_size


class PageResponse(BaseModel, Generic[T]):
    """
    One page of results.

    Attributes:
        page_num: Page number that was served
        page_size: Page size that was applied
        total: Total number of records
        total_pages: ceil(total / page_size)
        records: Records on this page
    """

    page_num: int = Field(description="Current page number")
    page_size: int = Field(description="Page size")
    total: int = Field(description="Total number of records")
    total_pages: int = Field(description="Total number of pages")
    records: List[T] = Field(default_factory=list, description="Records on this page")

    @classmethod
    def of(cls, page_request: PageRequest, records: List[T], total: int) -> "PageResponse[T]":
        """Build a page from a normalized request, its records and the total count."""
        return cls(
            page_num=page_request.page_num,
            page_size=page_request.page_size,
            total=total,
            total_pages=math.ceil(total / page_request.page_size),
            records=records,
        )

    @classmethod
    def empty(cls, page_request: PageRequest) -> "PageResponse[T]":
        """Build a page with no records and a zero total."""
        return cls(
            page_num=page_request.page_num,
            page_size=page_request.page_size,
            total=0,
            total_pages=0,
            records=[],
        )
