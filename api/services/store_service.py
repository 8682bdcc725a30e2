"""Store (loja) use cases."""

from __future__ import annotations

import logging
from typing import Optional

from api.domain.fields import is_email, normalize_phone, sanitize_choice
from api.services.crud_service import CrudService, Payload, Record, contains, equals, require_fields, require_text
from api.services.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)

STATUSES = ("on", "off")


class StoreService(CrudService):
    collection = "stores"
    not_found_message = "Loja nao encontrada"
    filters = (contains("store_name"), equals("status"))

    def build(self, payload: Payload) -> Record:
        require_fields(payload, ("store_name", "cnpj", "contact_email"), "store_name, cnpj e contact_email sao obrigatorios")
        require_text(payload, "store_name", "cnpj", "address")
        if not is_email(payload["contact_email"]):
            raise ValidationError("E-mail invalido")
        return {
            "store_name": payload["store_name"],
            "cnpj": payload["cnpj"],
            "address": payload.get("address") or "",
            "phone_number": normalize_phone(payload.get("phone_number")),
            "contact_email": payload["contact_email"],
            "status": sanitize_choice(payload.get("status"), STATUSES, "on"),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        require_text(payload, "store_name", "cnpj", "address")
        changes: Record = {}
        if "contact_email" in payload:
            if not is_email(payload["contact_email"]):
                raise ValidationError("E-mail invalido")
            changes["contact_email"] = payload["contact_email"]
        for name in ("store_name", "cnpj", "address"):
            if name in payload:
                changes[name] = payload[name]
        if "phone_number" in payload:
            changes["phone_number"] = normalize_phone(payload["phone_number"])
        if "status" in payload:
            changes["status"] = sanitize_choice(payload["status"], STATUSES, "on")
        return changes

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        cnpj = candidate.get("cnpj")
        if any(r.get("cnpj") == cnpj and r.get("id") != exclude_id for r in records):
            logger.warning("stores: duplicate cnpj %s", cnpj)
            raise ConflictError("Ja existe loja com esse CNPJ")
