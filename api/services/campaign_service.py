"""Campaign use cases, including the same-name overlap rule."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from api.domain.campaigns import find_overlapping
from api.domain.fields import format_timestamp, parse_date, to_percentage
from api.services.crud_service import (
    CrudService,
    Payload,
    Record,
    contains,
    date_from,
    date_to,
    equals,
    require_fields,
    require_text,
)
from api.services.errors import ConflictError, ValidationError

logger = logging.getLogger(__name__)


def _percentage(value) -> float:
    pct = to_percentage(value)
    if pct is None:
        raise ValidationError("discount_percentage deve ser entre 0 e 100")
    return pct


def _check_order(start: datetime, end: datetime) -> None:
    if start > end:
        raise ValidationError("start_date deve ser <= end_date")


class CampaignService(CrudService):
    collection = "campaigns"
    not_found_message = "Campanha nao encontrada"
    filters = (
        contains("name"),
        equals("supplier_id"),
        date_from("start_from", "start_date"),
        date_to("start_to", "start_date"),
        date_from("end_from", "end_date"),
        date_to("end_to", "end_date"),
    )

    def build(self, payload: Payload) -> Record:
        require_fields(
            payload,
            ("supplier_id", "name", "start_date", "end_date", "discount_percentage"),
            "supplier_id, name, start_date, end_date e discount_percentage sao obrigatorios",
        )
        require_text(payload, "name")
        start = parse_date(payload["start_date"])
        end = parse_date(payload["end_date"])
        if start is None or end is None:
            raise ValidationError("Datas invalidas")
        _check_order(start, end)
        return {
            "supplier_id": payload["supplier_id"],
            "name": payload["name"],
            "start_date": format_timestamp(start),
            "end_date": format_timestamp(end),
            "discount_percentage": _percentage(payload["discount_percentage"]),
        }

    def changes(self, payload: Payload, current: Record) -> Record:
        require_text(payload, "name")
        changes: Record = {}
        if "discount_percentage" in payload:
            changes["discount_percentage"] = _percentage(payload["discount_percentage"])

        start = parse_date(payload["start_date"]) if "start_date" in payload else parse_date(current.get("start_date"))
        end = parse_date(payload["end_date"]) if "end_date" in payload else parse_date(current.get("end_date"))
        if "start_date" in payload and start is None:
            raise ValidationError("start_date invalida")
        if "end_date" in payload and end is None:
            raise ValidationError("end_date invalida")
        if start is not None and end is not None:
            _check_order(start, end)
        if "start_date" in payload:
            changes["start_date"] = format_timestamp(start)
        if "end_date" in payload:
            changes["end_date"] = format_timestamp(end)

        for name in ("supplier_id", "name"):
            if name in payload:
                changes[name] = payload[name]
        return changes

    def check_conflicts(self, records: list[Record], candidate: Record, exclude_id: Optional[str] = None) -> None:
        start = parse_date(candidate.get("start_date"))
        end = parse_date(candidate.get("end_date"))
        if start is None or end is None:
            return
        clash = find_overlapping(
            records,
            supplier_id=candidate.get("supplier_id"),
            name=candidate.get("name") or "",
            start=start,
            end=end,
            exclude_id=exclude_id,
        )
        if clash is not None:
            logger.warning("campaigns: %r overlaps campaign %s", candidate.get("name"), clash.get("id"))
            raise ConflictError("Ja existe campanha com esse nome para o fornecedor nesse intervalo")
