from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request

from api.routers.crud import as_payload, build_crud_router, error_response, get_service
from api.services.errors import EntityError

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/login")
def login(request: Request, payload: Any = Body(None)):
    """Verify credentials; no session or token is issued."""
    svc = get_service(request, "users")
    body = as_payload(payload)
    try:
        user = svc.login(body.get("user"), body.get("pwd"))
    except EntityError as exc:
        return error_response(exc)
    return {"message": "ok", "user": user}


build_crud_router("/users", "users", router=router)
