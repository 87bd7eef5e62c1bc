import logging

from fastapi import APIRouter, Depends, HTTPException, Request

from clients.mongo.ReferenceStore import ReferenceStore
from clients.mongo.errors import ReferenceStoreError
from models.schemas.Constraints import COMMUNITY_TYPES
from pipelines.acquisition.AcquisitionHandler import AcquisitionHandler
from pipelines.dependencies import get_reference_store, read_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/acquisition", tags=["Acquisition"])


@router.get("/community-types")
async def list_community_types():
    """Suggested community classifications for the data-entry form."""
    return {"community_types": COMMUNITY_TYPES}


@router.post("/references", status_code=201)
async def submit_reference(request: Request, store: ReferenceStore = Depends(get_reference_store)):
    """Submit a new reference (JSON or bracket-indexed form data)."""
    payload = await read_payload(request)
    handler = AcquisitionHandler(store)

    try:
        result = await handler.submit(payload)
    except ReferenceStoreError as e:
        logger.error(f"Failed to submit reference: {e}")
        raise HTTPException(status_code=500, detail=f"Erro ao salvar: {e}")

    if not result.success:
        raise HTTPException(status_code=422, detail={"errors": result.errors})

    return {
        "success": True,
        "id": result.reference_id,
        "status": result.reference.status,
    }
