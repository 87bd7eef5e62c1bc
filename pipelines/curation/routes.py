import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Query, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from clients.mongo.ReferenceStore import ReferenceStore
from clients.mongo.errors import ReferenceNotFoundError, ReferenceStoreError
from models.entities.presentation.SearchResponse import SearchResponse
from models.entities.workflow.ReferenceStatus import InvalidStatusError
from pipelines.curation.CurationHandler import CurationHandler
from pipelines.dependencies import get_reference_store, read_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/curation", tags=["Curation"])


@router.get("/references", response_model=SearchResponse)
async def list_references(
    status: Optional[str] = Query(None, description="pending, approved, rejected or all"),
    sort: str = Query("createdAt", description="titulo, autores, ano, status or createdAt"),
    order: str = Query("desc", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=100),
    store: ReferenceStore = Depends(get_reference_store),
):
    """List references for review."""
    try:
        return await CurationHandler(store).list_references(status, sort, order, page, limit)
    except ReferenceStoreError as e:
        logger.error(f"Failed to list references: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao listar referências: {e}")


@router.get("/references/{reference_id}")
async def get_reference(reference_id: str = Path(..., description="Reference ID"),
                        store: ReferenceStore = Depends(get_reference_store)):
    try:
        return await CurationHandler(store).get_reference(reference_id)
    except ReferenceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReferenceStoreError as e:
        logger.error(f"Failed to load reference {reference_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao carregar referência: {e}")


@router.put("/references/{reference_id}")
async def update_reference(request: Request, reference_id: str = Path(..., description="Reference ID"),
                           store: ReferenceStore = Depends(get_reference_store)):
    """Replace the content of a reference with an edited version."""
    payload = await read_payload(request)

    try:
        result = await CurationHandler(store).update_reference(reference_id, payload)
    except ReferenceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReferenceStoreError as e:
        logger.error(f"Failed to update reference {reference_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao atualizar: {e}")

    if not result.success:
        # The merged reference lets the client redisplay the form with the curator's input.
        return JSONResponse(
            status_code=422,
            content=jsonable_encoder({"errors": result.errors, "reference": result.reference}),
        )
    return result.reference


@router.post("/references/{reference_id}/status")
async def update_status(reference_id: str = Path(..., description="Reference ID"),
                        status: str = Body(..., embed=True),
                        store: ReferenceStore = Depends(get_reference_store)):
    """Change only the workflow status of a reference."""
    try:
        return await CurationHandler(store).set_status(reference_id, status)
    except InvalidStatusError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ReferenceNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ReferenceStoreError as e:
        logger.error(f"Failed to update status of {reference_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao atualizar status: {e}")
