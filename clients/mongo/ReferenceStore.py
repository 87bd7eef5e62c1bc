"""
Reference store: record-level operations over the MongoDB collection.

Each operation either returns the requested data or raises a
ReferenceStoreError whose message can be shown to users. Driver errors never
leak to callers; a missing reference is a ReferenceNotFoundError rather than
a silent no-op.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.errors import PyMongoError

from clients.mongo.errors import ReferenceNotFoundError, ReferenceStoreError
from models.engines.SearchQueryBuilder import FiltersInput, build_search_query
from models.entities.presentation.SearchResponse import SearchResponse
from models.entities.workflow.ReferenceStatus import ReferenceStatus
from models.schemas.nodes.Reference import Reference, utc_now
from utils.sanitize import sanitize_object_id

logger = logging.getLogger(__name__)

SortSpec = List[Tuple[str, int]]

DEFAULT_SORT: SortSpec = [("createdAt", DESCENDING)]
LIST_SORT_FIELDS = ("titulo", "autores", "ano", "status", "createdAt")
SUMMARY_PROJECTION = {
    "titulo": 1,
    "autores": 1,
    "ano": 1,
    "status": 1,
    "createdAt": 1,
    "updatedAt": 1,
}


def to_object_id(reference_id: Any) -> Optional[ObjectId]:
    if isinstance(reference_id, ObjectId):
        return reference_id
    sanitized = sanitize_object_id(reference_id)
    return ObjectId(sanitized) if sanitized else None


class ReferenceStore:
    """CRUD and search operations for reference documents."""

    def __init__(self, client):
        """
        Args:
            client: connected clients.mongo.MongoClient (anything exposing
                ``get_collection()``)
        """
        self.client = client

    @property
    def collection(self):
        return self.client.get_collection()

    async def insert(self, reference: Reference) -> Reference:
        """Insert a new reference as pending, stamping both timestamps."""
        stored = reference.with_creation_defaults()
        try:
            result = await self.collection.insert_one(stored.to_document())
        except PyMongoError as e:
            logger.error(f"Failed to insert reference: {e}")
            raise ReferenceStoreError(f"Falha ao salvar referência: {e}") from e

        stored.id = str(result.inserted_id)
        logger.info(f"Reference inserted with ID: {stored.id}")
        return stored

    async def find_by_id(self, reference_id: Any) -> Optional[Reference]:
        object_id = to_object_id(reference_id)
        if object_id is None:
            logger.debug(f"Malformed reference ID: {reference_id!r}")
            return None

        try:
            doc = await self.collection.find_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to find reference {reference_id}: {e}")
            raise ReferenceStoreError(f"Falha ao buscar referência: {e}") from e

        if doc is None:
            logger.debug(f"Reference not found with ID: {reference_id}")
            return None
        return Reference.from_document(doc)

    async def find(self, query: Optional[Dict[str, Any]] = None,
                   projection: Optional[Dict[str, int]] = None,
                   sort: Optional[SortSpec] = None,
                   skip: int = 0, limit: int = 0) -> List[Reference]:
        """Find references matching ``query``, newest first by default."""
        try:
            cursor = self.collection.find(query or {}, projection or None)
            cursor = cursor.sort(sort or DEFAULT_SORT)
            if skip > 0:
                cursor = cursor.skip(skip)
            if limit > 0:
                cursor = cursor.limit(limit)
            docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error(f"Failed to find references: {e}")
            raise ReferenceStoreError(f"Falha ao buscar referências: {e}") from e

        logger.debug(f"Found {len(docs)} references")
        return [Reference.from_document(doc) for doc in docs]

    async def count(self, query: Optional[Dict[str, Any]] = None) -> int:
        try:
            return await self.collection.count_documents(query or {})
        except PyMongoError as e:
            logger.error(f"Failed to count references: {e}")
            raise ReferenceStoreError(f"Falha ao contar referências: {e}") from e

    async def replace(self, reference_id: Any, reference: Reference) -> Reference:
        """Replace every editable field of an existing reference.

        Status and creation time are kept; communities and plants are
        replaced wholesale.
        """
        object_id = to_object_id(reference_id)
        if object_id is None:
            raise ReferenceNotFoundError(reference_id)

        update = reference.editable_document()
        update["updatedAt"] = utc_now()
        doc = await self._find_one_and_set(
            object_id, update, failure="Falha ao atualizar referência"
        )
        if doc is None:
            logger.warning(f"Reference {reference_id} not found for update")
            raise ReferenceNotFoundError(reference_id)

        logger.info(f"Reference updated with ID: {reference_id}")
        return Reference.from_document(doc)

    async def set_status(self, reference_id: Any, status: Any) -> Reference:
        """Move a reference to another workflow status."""
        new_status = ReferenceStatus.parse(status)

        object_id = to_object_id(reference_id)
        if object_id is None:
            raise ReferenceNotFoundError(reference_id)

        doc = await self._find_one_and_set(
            object_id,
            {"status": new_status.value, "updatedAt": utc_now()},
            failure="Falha ao atualizar status",
        )
        if doc is None:
            raise ReferenceNotFoundError(reference_id)

        logger.info(f"Reference status updated to '{new_status.value}' for ID: {reference_id}")
        return Reference.from_document(doc)

    async def delete(self, reference_id: Any) -> bool:
        object_id = to_object_id(reference_id)
        if object_id is None:
            raise ReferenceNotFoundError(reference_id)

        try:
            result = await self.collection.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"Failed to delete reference {reference_id}: {e}")
            raise ReferenceStoreError(f"Falha ao deletar referência: {e}") from e

        if result.deleted_count == 0:
            raise ReferenceNotFoundError(reference_id)

        logger.info(f"Reference deleted with ID: {reference_id}")
        return True

    async def search(self, filters: FiltersInput = None, page: int = 1, limit: int = 50) -> SearchResponse:
        """Paginated public search over approved references."""
        return await self._paginate(
            build_search_query(filters), page, limit, failure="Falha na busca"
        )

    async def list_references(self, status: Optional[str] = None, sort: str = "createdAt",
                              order: str = "desc", page: int = 1, limit: int = 50) -> SearchResponse:
        """Curation listing: every status, or only ``status`` when it is valid."""
        query = {}
        if status and ReferenceStatus.is_valid(status):
            query["status"] = status

        sort_field = sort if sort in LIST_SORT_FIELDS else "createdAt"
        direction = ASCENDING if order == "asc" else DESCENDING

        return await self._paginate(
            query, page, limit,
            failure="Falha ao listar referências",
            projection=SUMMARY_PROJECTION,
            sort=[(sort_field, direction)],
        )

    async def _paginate(self, query: Dict[str, Any], page: int, limit: int, failure: str,
                        projection: Optional[Dict[str, int]] = None,
                        sort: Optional[SortSpec] = None) -> SearchResponse:
        if page < 1 or limit < 1:
            raise ValueError(f"page and limit must be positive, got page={page} limit={limit}")

        skip = (page - 1) * limit
        try:
            # Count and page are independent reads; a concurrent write may skew them slightly.
            items, total = await asyncio.gather(
                self.find(query, projection=projection, sort=sort, skip=skip, limit=limit),
                self.count(query),
            )
        except ReferenceStoreError as e:
            raise ReferenceStoreError(f"{failure}: {e}") from e

        response = SearchResponse.build(items, total, page, limit)
        logger.debug(
            f"Returned {len(items)} of {total} references (page {page}/{response.total_pages})"
        )
        return response

    async def _find_one_and_set(self, object_id: ObjectId, fields: Dict[str, Any], failure: str):
        try:
            return await self.collection.find_one_and_update(
                {"_id": object_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            logger.error(f"{failure} ({object_id}): {e}")
            raise ReferenceStoreError(f"{failure}: {e}") from e
