"""Application factory wiring stores, services and routers together."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.core.config import Settings, get_settings
from api.core.log import configure_logging
from api.repositories.json_storage import CollectionStore, json_stores
from api.routers import ROUTERS, campaign_alias_router
from api.services.campaign_service import CampaignService
from api.services.crud_service import CrudService
from api.services.order_service import OrderService
from api.services.product_service import ProductService
from api.services.store_service import StoreService
from api.services.supplier_service import SupplierService
from api.services.user_service import UserService

logger = logging.getLogger(__name__)

SERVICE_CLASSES: dict[str, type[CrudService]] = {
    "users": UserService,
    "suppliers": SupplierService,
    "stores": StoreService,
    "products": ProductService,
    "orders": OrderService,
    "campaigns": CampaignService,
}


def build_services(stores: Mapping[str, CollectionStore]) -> dict[str, CrudService]:
    return {name: cls(stores[name]) for name, cls in SERVICE_CLASSES.items()}


def create_app(settings: Optional[Settings] = None, stores: Optional[Mapping[str, CollectionStore]] = None) -> FastAPI:
    """Factory compativel com uvicorn (``uvicorn api.app:create_app --factory``).

    ``stores`` overrides the JSON files under ``settings.data_dir``; tests pass
    in-memory stores here.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(title="Backoffice API")
    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["content-type"],
    )

    app.state.settings = settings
    app.state.services = build_services(stores or json_stores(settings.data_dir))

    for router in ROUTERS:
        app.include_router(router)
    app.include_router(campaign_alias_router, include_in_schema=False)

    @app.get("/", include_in_schema=False)
    def index():
        return {"ok": True, "resources": [router.prefix.lstrip("/") for router in ROUTERS]}

    logger.info("API ready (env=%s, data_dir=%s)", settings.app_env, settings.data_dir)
    return app
