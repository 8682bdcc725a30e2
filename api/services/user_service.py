"""
User use cases: CRUD with hashed passwords plus credential checks.
"""

from __future__ import annotations

import logging
from typing import Optional

from api.core.security import hash_password, verify_password
from api.domain.fields import is_blank, is_email, sanitize_choice
from api.services.crud_service import CrudService, Payload, Record, contains, require_fields, require_text
from api.services.errors import ConflictError, InvalidCredentialsError, ValidationError

logger = logging.getLogger(__name__)

LEVELS = ("admin", "user")
STATUSES = ("on", "off")
SENSITIVE_FIELDS = ("pwd",)


def sanitize(record: Record) -> Record:
    """Copy of record without password material."""
    return {key: value for key, value in record.items() if key not in SENSITIVE_FIELDS}


def _hashed(value) -> str:
    if is_blank(value) or not isinstance(value, str):
        raise ValidationError("senha invalida")
    return hash_password(value)


class UserService(CrudService):
    """Users never leave this service with their pwd hash attached."""

    collection = "users"
    not_found_message = "Usuario nao encontrado"
    filters = (contains("name"),)

    def present(self, record: Record) -> Record:
        return sanitize(record)

    def build(self, payload: Payload) -> Record:
        require_fields(payload, ("name", "contact_email", "user", "pwd"), "name, e-mail, user e senha sao obrigatorios")
        require_text(payload, "name", "user")
        if not is_email(payload["contact_email"]):
            raise ValidationError("e-mail invalido")
        return {
            "name": payload["name"],
            "contact_email": payload["contact_email"],
            "user": payload["user"],
            "pwd": _hashed(payload["pwd"]),
            "level": sanitize_choice(payload.get("level"), LEVELS, "user"),
            "status": sanitize_choice(payload.get("status"), STATUSES, "on"),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        require_text(payload, "name", "user")
        changes: Record = {}
        if "contact_email" in payload:
            if not is_email(payload["contact_email"]):
                raise ValidationError("e-mail invalido")
            changes["contact_email"] = payload["contact_email"]
        for name in ("name", "user"):
            if name in payload:
                changes[name] = payload[name]
        if "level" in payload:
            changes["level"] = sanitize_choice(payload["level"], LEVELS, "user")
        if "status" in payload:
            changes["status"] = sanitize_choice(payload["status"], STATUSES, "on")
        if "pwd" in payload:
            changes["pwd"] = _hashed(payload["pwd"])
        return changes

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        others = [r for r in records if r.get("id") != exclude_id]
        if any(r.get("user") == candidate.get("user") for r in others):
            logger.warning("users: login %s already taken", candidate.get("user"))
            raise ConflictError("user ja existe")
        if any(r.get("contact_email") == candidate.get("contact_email") for r in others):
            logger.warning("users: e-mail %s already registered", candidate.get("contact_email"))
            raise ConflictError("e-mail ja cadastrado")

    def login(self, login: Optional[str], password: Optional[str]) -> Record:
        """Check credentials of an active user and return it sanitized.

        Unknown login, disabled account and wrong password all raise the same
        InvalidCredentialsError so callers cannot tell them apart.
        """
        if is_blank(login) or is_blank(password):
            raise ValidationError("user e senha sao obrigatorios")
        user = next(
            (r for r in self.store.read_all() if r.get("user") == login and r.get("status") != "off"),
            None,
        )
        if user is None or not verify_password(str(password), user.get("pwd")):
            logger.warning("users: rejected login for %s", login)
            raise InvalidCredentialsError("Credenciais invalidas")
        return sanitize(user)
