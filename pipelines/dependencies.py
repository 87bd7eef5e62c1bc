"""
Shared FastAPI dependencies.

The store is created by the application lifespan and looked up per request,
so tests can swap it through ``app.dependency_overrides``.
"""

from typing import Any, Dict

from fastapi import HTTPException, Request

from clients.mongo.ReferenceStore import ReferenceStore


def get_reference_store(request: Request) -> ReferenceStore:
    store = getattr(request.app.state, "reference_store", None)
    if store is None:
        raise HTTPException(status_code=503, detail="Banco de dados indisponível")
    return store


async def read_payload(request: Request) -> Dict[str, Any]:
    """Read a submission as JSON or as (flat, bracket-keyed) form data."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="JSON inválido")
        return payload if isinstance(payload, dict) else {}

    form = await request.form()
    payload = {}
    for key in form.keys():
        values = form.getlist(key)
        payload[key] = values if len(values) > 1 else values[0]
    return payload
