"""
Length-aware pagination over SQLAlchemy queries.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, Optional, TypeVar

from sqlalchemy.orm import Query

T = TypeVar("T")


@dataclass
class LengthAwarePage(Generic[T]):
    """One page of results plus the total match count."""

    items: List[T]
    total: int
    page: int
    per_page: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))

    @property
    def from_item(self) -> Optional[int]:
        """1-based position of the first item on this page."""
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + 1

    @property
    def to_item(self) -> Optional[int]:
        if not self.items:
            return None
        return (self.page - 1) * self.per_page + len(self.items)

    @property
    def has_more_pages(self) -> bool:
        return self.page < self.last_page


def paginate(query: Query, page: int, per_page: int) -> LengthAwarePage:
    """Count all matches, then fetch the requested slice."""
    # Count without ORDER BY; it does not change the total
    total = query.order_by(None).count()
    items = query.offset((page - 1) * per_page).limit(per_page).all()
    return LengthAwarePage(items=items, total=total, page=page, per_page=per_page)
