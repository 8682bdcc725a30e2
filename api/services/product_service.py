"""Product use cases."""

from __future__ import annotations

import logging
from typing import Optional

from api.domain.fields import sanitize_choice, to_money, to_non_negative_int
from api.services.crud_service import (
    CrudService,
    Payload,
    Record,
    contains,
    equals,
    require_fields,
    require_text,
)
from api.services.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)

STATUSES = ("on", "off")


def _price(value) -> float:
    price = to_money(value)
    if price is None:
        raise ValidationError("price invalido (>= 0)")
    return price


def _stock(value) -> int:
    stock = to_non_negative_int(value)
    if stock is None:
        raise ValidationError("stock_quantity invalido (inteiro >= 0)")
    return stock


class ProductService(CrudService):
    collection = "products"
    not_found_message = "Produto nao encontrado"
    filters = (contains("name"), equals("status"), equals("supplier_id"))

    def build(self, payload: Payload) -> Record:
        require_fields(
            payload,
            ("name", "price", "stock_quantity", "supplier_id"),
            "name, price, stock_quantity e supplier_id sao obrigatorios",
        )
        require_text(payload, "name", "description")
        return {
            "name": payload["name"],
            "description": payload.get("description") or "",
            "price": _price(payload["price"]),
            "stock_quantity": _stock(payload["stock_quantity"]),
            "supplier_id": payload["supplier_id"],
            "status": sanitize_choice(payload.get("status"), STATUSES, "on"),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        require_text(payload, "name", "description")
        changes: Record = {}
        if "price" in payload:
            changes["price"] = _price(payload["price"])
        if "stock_quantity" in payload:
            changes["stock_quantity"] = _stock(payload["stock_quantity"])
        for name in ("name", "description", "supplier_id"):
            if name in payload:
                changes[name] = payload[name]
        if "status" in payload:
            changes["status"] = sanitize_choice(payload["status"], STATUSES, "on")
        return changes

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        name = str(candidate.get("name") or "").lower()
        supplier_id = candidate.get("supplier_id")
        for record in records:
            if record.get("id") == exclude_id:
                continue
            if str(record.get("name") or "").lower() == name and record.get("supplier_id") == supplier_id:
                logger.warning("products: duplicate %r for supplier %s", name, supplier_id)
                raise ConflictError("Ja existe um produto com esse nome para o mesmo fornecedor")
