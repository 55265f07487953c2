# core/pagination.py
from dataclasses import dataclass, field
from typing import Callable, Generic, Iterable, List, Optional, TypeVar
import math

from core.exceptions import InvalidArgument

T = TypeVar("T")


@dataclass
class PageResult(Generic[T]):
    """One page of an already filtered and ordered sequence."""

    items: List[T] = field(default_factory=list)
    total_count: int = 0
    total_pages: int = 0
    page: int = 0
    size: int = 0
    offset: int = 0

    @property
    def has_next(self) -> bool:
        return self.page + 1 < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 0 and self.total_pages > 0


def paginate(
    candidates: Iterable[T],
    page_index: int,
    page_size: int,
    predicate: Optional[Callable[[T], bool]] = None,
) -> PageResult[T]:
    """
    Filter ``candidates`` with ``predicate`` (keeping their order) and slice out
    page ``page_index``.

    A page past the end is returned empty with ``offset`` 0 and the real
    ``total_count``; only a non-positive size or a negative index is an error.
    """
    if page_size <= 0:
        raise InvalidArgument("Page size must be greater than zero", {"size": page_size})
    if page_index < 0:
        raise InvalidArgument("Page index must not be negative", {"page": page_index})

    if predicate is None:
        filtered = list(candidates)
    else:
        filtered = [item for item in candidates if predicate(item)]

    total = len(filtered)
    start = page_index * page_size
    if start > total:
        start = 0
        items: List[T] = []
    else:
        end = min(start + page_size, total)
        items = filtered[start:end]

    return PageResult(
        items=items,
        total_count=total,
        total_pages=math.ceil(total / page_size),
        page=page_index,
        size=page_size,
        offset=start,
    )
