"""
Ethnobotanical reference API.

Thin HTTP shell over the record engine, one router per context:
1. Acquisition: data entry of new references (stored as pending)
2. Curation: listing, editing and approving references
3. Presentation: public search over approved references

The contexts can be served together or as separate processes sharing the
same MongoDB collection.
"""

import logging
from contextlib import asynccontextmanager
from typing import Iterable, Optional

from fastapi import FastAPI

from clients.mongo.MongoClient import MongoClient
from clients.mongo.ReferenceStore import ReferenceStore
from models.configurators.Settings import Settings
from pipelines.acquisition.routes import router as acquisition_router
from pipelines.curation.routes import router as curation_router
from pipelines.presentation.routes import router as presentation_router

logger = logging.getLogger(__name__)

CONTEXT_ROUTERS = {
    "acquisition": acquisition_router,
    "curation": curation_router,
    "presentation": presentation_router,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    client = MongoClient(settings.mongodb)
    if not await client.connect():
        await client.reconnect()

    app.state.mongo_client = client
    app.state.reference_store = ReferenceStore(client)
    try:
        yield
    finally:
        await client.close()


def create_app(contexts: Optional[Iterable[str]] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build the API with the routers of ``contexts`` (all by default)."""
    contexts = list(contexts or CONTEXT_ROUTERS)
    unknown = [context for context in contexts if context not in CONTEXT_ROUTERS]
    if unknown:
        raise ValueError(f"Unknown contexts: {', '.join(unknown)}")

    app = FastAPI(
        title="Etnodb API",
        description="Submission, curation and search of ethnobotanical references",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or Settings.from_env()

    for context in contexts:
        app.include_router(CONTEXT_ROUTERS[context])

    @app.get("/health")
    async def health():
        client = getattr(app.state, "mongo_client", None)
        return {
            "status": "ok",
            "contexts": contexts,
            "database_connected": bool(client and client.is_connected),
        }

    logger.info(f"API created with contexts: {', '.join(contexts)}")
    return app
