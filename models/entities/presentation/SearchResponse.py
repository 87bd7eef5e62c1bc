import math
from typing import List

from pydantic import BaseModel, Field

from models.schemas.nodes.Reference import Reference


class SearchResponse(BaseModel):
    """One page of references plus the totals needed to paginate."""
    items: List[Reference] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 50
    total_pages: int = 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @classmethod
    def build(cls, items: List[Reference], total: int, page: int, limit: int) -> "SearchResponse":
        return cls(
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if limit else 0,
        )
