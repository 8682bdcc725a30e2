"""
FastAPI routers grouped por entidade.

Each module exposes an APIRouter that the app factory includes. The five
plain collections share the generic builder in crud.py; users add login.
"""

from api.routers.crud import build_crud_router
from api.routers.users import router as users_router

supplier_router = build_crud_router("/supplier", "suppliers", tags=["supplier"])
store_router = build_crud_router("/store", "stores", tags=["store"])
product_router = build_crud_router("/product", "products", tags=["product"])
order_router = build_crud_router("/order", "orders", tags=["order"])
campaign_router = build_crud_router("/campaing", "campaigns", tags=["campaign"])
# correctly spelled alias, hidden from the OpenAPI schema
campaign_alias_router = build_crud_router("/campaign", "campaigns", tags=["campaign"])

ROUTERS = (
    users_router,
    supplier_router,
    store_router,
    product_router,
    order_router,
    campaign_router,
)
