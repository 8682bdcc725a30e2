from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Request, Response
from fastapi.responses import JSONResponse

from api.services.crud_service import CrudService
from api.services.errors import EntityError


def get_service(request: Request, name: str) -> CrudService:
    services = getattr(getattr(request.app, "state", None), "services", None) or {}
    svc = services.get(name)
    if svc is None:
        raise RuntimeError(f"Servico {name} nao configurado")
    return svc


def error_response(err: EntityError) -> JSONResponse:
    return JSONResponse({"error": err.message}, status_code=err.status_code)


def as_payload(body: Any) -> dict:
    return body if isinstance(body, dict) else {}


def build_crud_router(prefix: str, service_name: str, *, tags: list[str] | None = None, router: APIRouter | None = None) -> APIRouter:
    """Attach list/get/create/update/delete endpoints for one collection."""
    router = router or APIRouter(prefix=prefix, tags=tags or [service_name])

    @router.get("")
    def list_records(request: Request):
        svc = get_service(request, service_name)
        return svc.list(dict(request.query_params))

    @router.get("/{record_id}")
    def get_record(record_id: str, request: Request):
        svc = get_service(request, service_name)
        try:
            return svc.get(record_id)
        except EntityError as exc:
            return error_response(exc)

    @router.post("", status_code=201)
    def create_record(request: Request, payload: Any = Body(None)):
        svc = get_service(request, service_name)
        try:
            return svc.create(as_payload(payload))
        except EntityError as exc:
            return error_response(exc)

    @router.put("/{record_id}")
    def update_record(record_id: str, request: Request, payload: Any = Body(None)):
        svc = get_service(request, service_name)
        try:
            return svc.update(record_id, as_payload(payload))
        except EntityError as exc:
            return error_response(exc)

    @router.delete("/{record_id}", status_code=204)
    def delete_record(record_id: str, request: Request):
        svc = get_service(request, service_name)
        try:
            svc.delete(record_id)
        except EntityError as exc:
            return error_response(exc)
        return Response(status_code=204)

    return router
