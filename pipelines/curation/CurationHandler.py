"""
Curation flow: review, correction and approval of submitted references.
"""

import logging
from typing import Any, Optional

from clients.mongo.ReferenceStore import ReferenceStore
from clients.mongo.errors import ReferenceNotFoundError
from models.engines.FormMapper import FormMapper
from models.engines.ReferenceValidator import ReferenceValidator
from models.entities.curation.UpdateResult import UpdateResult
from models.entities.presentation.SearchResponse import SearchResponse
from models.schemas.nodes.Reference import Reference
from utils.sanitize import sanitize_number

logger = logging.getLogger(__name__)


def preserve_edits(stored: Reference, edited: Reference) -> Reference:
    """Overlay what a curator typed on the stored reference.

    Used to redisplay a rejected edit: fields left empty in the form fall
    back to the stored values instead of being wiped.
    """
    return Reference(
        id=stored.id,
        title=edited.title or stored.title,
        authors=edited.authors or stored.authors,
        year=edited.year if edited.year is not None else stored.year,
        abstract=edited.abstract,
        doi=edited.doi,
        status=stored.status,
        communities=edited.communities or stored.communities,
        created_at=stored.created_at,
        updated_at=stored.updated_at,
    )


class CurationHandler:
    """Handler for the curation workflow."""

    def __init__(self, store: ReferenceStore, mapper: FormMapper = None,
                 validator: ReferenceValidator = None):
        self.store = store
        self.mapper = mapper or FormMapper()
        self.validator = validator or ReferenceValidator()

    async def list_references(self, status: Optional[str] = None, sort: str = "createdAt",
                              order: str = "desc", page: Any = 1, limit: Any = 50) -> SearchResponse:
        page_number = sanitize_number(page, minimum=1, default=1)
        page_size = sanitize_number(limit, minimum=1, maximum=100, default=50)

        listing = await self.store.list_references(
            status=None if status == "all" else status,
            sort=sort, order=order, page=page_number, limit=page_size,
        )
        logger.info(f"Listing {len(listing.items)} references (status: {status or 'all'}, sort: {sort} {order})")
        return listing

    async def get_reference(self, reference_id: Any) -> Reference:
        reference = await self.store.find_by_id(reference_id)
        if reference is None:
            raise ReferenceNotFoundError(reference_id)
        return reference

    async def update_reference(self, reference_id: Any, raw: Any) -> UpdateResult:
        """Replace a reference's content with a curator's edit."""
        edited = self.mapper.normalize(raw)
        if not edited.communities:
            logger.warning(f"No communities found in edit of reference {reference_id}")

        validation = self.validator.validate(edited)
        if not validation.is_valid:
            logger.info(f"Validation failed: {len(validation.errors)} errors")
            stored = await self.get_reference(reference_id)
            return UpdateResult(
                success=False,
                reference=preserve_edits(stored, edited),
                errors=validation.errors,
            )

        updated = await self.store.replace(reference_id, edited)
        logger.info(f"Reference updated successfully: {updated.id}")
        return UpdateResult(success=True, reference=updated)

    async def set_status(self, reference_id: Any, status: Any) -> Reference:
        updated = await self.store.set_status(reference_id, status)
        logger.info(f"Reference status updated to '{updated.status}': {updated.id}")
        return updated
