import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from clients.mongo.ReferenceStore import ReferenceStore
from clients.mongo.errors import ReferenceStoreError
from models.entities.presentation.SearchFilters import SearchFilters
from models.entities.presentation.SearchRequest import SearchRequest
from models.entities.presentation.SearchResponse import SearchResponse
from pipelines.dependencies import get_reference_store
from pipelines.presentation.PresentationHandler import PresentationHandler

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/presentation", tags=["Presentation"])


@router.get("/search", response_model=SearchResponse)
async def search_references(
    comunidade: Optional[str] = Query(None, description="Community name (partial match)"),
    planta: Optional[str] = Query(None, description="Scientific or vernacular name (partial match)"),
    estado: Optional[str] = Query(None, description="State (exact match)"),
    municipio: Optional[str] = Query(None, description="Municipality (exact match)"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    store: ReferenceStore = Depends(get_reference_store),
):
    """Search approved references."""
    filters = SearchFilters(community=comunidade, plant=planta, state=estado, municipality=municipio)
    try:
        return await PresentationHandler(store).search(filters, page, limit)
    except ReferenceStoreError as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao realizar busca: {e}")


@router.post("/search", response_model=SearchResponse)
async def search_references_body(request: SearchRequest, store: ReferenceStore = Depends(get_reference_store)):
    """Search approved references with filters sent as a JSON body."""
    try:
        return await PresentationHandler(store).search(request.filters, request.page, request.limit)
    except ReferenceStoreError as e:
        logger.error(f"Search failed: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao realizar busca: {e}")
