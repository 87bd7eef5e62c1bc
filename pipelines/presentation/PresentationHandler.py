"""
Presentation flow: public, read-only search over approved references.
"""

import logging
from typing import Any

from clients.mongo.ReferenceStore import ReferenceStore
from models.engines.SearchQueryBuilder import FiltersInput, SearchQueryBuilder
from models.entities.presentation.SearchResponse import SearchResponse
from utils.sanitize import sanitize_number

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 100


class PresentationHandler:
    """Handler for the public search."""

    def __init__(self, store: ReferenceStore):
        self.store = store

    async def search(self, filters: FiltersInput = None, page: Any = 1,
                     limit: Any = DEFAULT_PAGE_SIZE) -> SearchResponse:
        filters = SearchQueryBuilder.coerce_filters(filters)
        page_number = sanitize_number(page, minimum=1, default=1)
        page_size = sanitize_number(limit, minimum=1, maximum=MAX_PAGE_SIZE, default=DEFAULT_PAGE_SIZE)

        result = await self.store.search(filters, page_number, page_size)
        logger.info(
            f"Search returned {len(result.items)} of {result.total} references (page {page_number})"
        )
        return result
