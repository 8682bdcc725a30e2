"""Supplier use cases."""

from __future__ import annotations

import logging
from typing import Optional

from api.domain.fields import is_email, normalize_phone, sanitize_choice
from api.services.crud_service import CrudService, Payload, Record, contains, require_fields, require_text
from api.services.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)

STATUSES = ("on", "off")


class SupplierService(CrudService):
    collection = "suppliers"
    not_found_message = "Fornecedor nao encontrado"
    filters = (contains("supplier_name"), contains("supplier_category"))

    def build(self, payload: Payload) -> Record:
        require_fields(payload, ("supplier_name", "contact_email"), "supplier_name e contact_email sao obrigatorios")
        require_text(payload, "supplier_name", "supplier_category")
        if not is_email(payload["contact_email"]):
            raise ValidationError("E-mail invalido (use dominio completo, ex.: gmail.com)")
        return {
            "supplier_name": payload["supplier_name"],
            "supplier_category": payload.get("supplier_category") or "",
            "contact_email": payload["contact_email"],
            "phone_number": normalize_phone(payload.get("phone_number")),
            "status": sanitize_choice(payload.get("status"), STATUSES, "on"),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        require_text(payload, "supplier_name", "supplier_category")
        changes: Record = {}
        if "contact_email" in payload:
            if not is_email(payload["contact_email"]):
                raise ValidationError("E-mail invalido")
            changes["contact_email"] = payload["contact_email"]
        for name in ("supplier_name", "supplier_category"):
            if name in payload:
                changes[name] = payload[name]
        if "phone_number" in payload:
            changes["phone_number"] = normalize_phone(payload["phone_number"])
        if "status" in payload:
            changes["status"] = sanitize_choice(payload["status"], STATUSES, "on")
        return changes

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        name = str(candidate.get("supplier_name") or "").lower()
        email = str(candidate.get("contact_email") or "").lower()
        for record in records:
            if record.get("id") == exclude_id:
                continue
            if (
                str(record.get("supplier_name") or "").lower() == name
                and str(record.get("contact_email") or "").lower() == email
            ):
                logger.warning("suppliers: duplicate name/e-mail %s / %s", name, email)
                raise ConflictError("Fornecedor ja cadastrado com esse nome e e-mail")
