"""Order (pedido) use cases. Orders carry no cross-record rule."""

from __future__ import annotations

from api.domain.fields import format_timestamp, now_timestamp, parse_date, sanitize_choice, to_money
from api.services.crud_service import CrudService, Payload, Record, date_from, date_to, equals, require_fields
from api.services.errors import ValidationError

STATUSES = ("Pending", "Shipped", "Delivered")


def _amount(value) -> float:
    amount = to_money(value)
    if amount is None:
        raise ValidationError("total_amount invalido")
    return amount


def _date(value) -> str:
    parsed = parse_date(value)
    if parsed is None:
        raise ValidationError("date invalido")
    return format_timestamp(parsed)


class OrderService(CrudService):
    collection = "orders"
    not_found_message = "Pedido nao encontrado"
    filters = (
        equals("store_id"),
        equals("status"),
        date_from("date_from", "date"),
        date_to("date_to", "date"),
    )

    def build(self, payload: Payload) -> Record:
        require_fields(payload, ("store_id", "item", "total_amount"), "store_id, item e total_amount sao obrigatorios")
        date = payload.get("date")
        return {
            "store_id": payload["store_id"],
            "item": payload["item"],
            "total_amount": _amount(payload["total_amount"]),
            "status": sanitize_choice(payload.get("status"), STATUSES, "Pending"),
            "date": _date(date) if date else now_timestamp(),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        changes: Record = {}
        if "total_amount" in payload:
            changes["total_amount"] = _amount(payload["total_amount"])
        if "date" in payload:
            changes["date"] = _date(payload["date"])
        for name in ("store_id", "item"):
            if name in payload:
                changes[name] = payload[name]
        if "status" in payload:
            changes["status"] = sanitize_choice(payload["status"], STATUSES, "Pending")
        return changes
