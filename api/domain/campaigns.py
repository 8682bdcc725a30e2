"""Domain helpers for campaign scheduling rules."""
from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping, Optional

from api.domain.fields import parse_date


def intervals_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Closed intervals [start_a, end_a] and [start_b, end_b] share at least one instant."""
    return start_a <= end_b and start_b <= end_a


def find_overlapping(
    campaigns: Iterable[Mapping[str, Any]],
    *,
    supplier_id: Any,
    name: str,
    start: datetime,
    end: datetime,
    exclude_id: Optional[str] = None,
) -> Optional[Mapping[str, Any]]:
    """Return the first campaign clashing with the given one, if any.

    Two campaigns clash when they belong to the same supplier, carry the same
    name (case-insensitive) and their date intervals overlap.
    """
    wanted = str(name).lower()
    for campaign in campaigns:
        if exclude_id is not None and campaign.get("id") == exclude_id:
            continue
        if campaign.get("supplier_id") != supplier_id:
            continue
        if str(campaign.get("name") or "").lower() != wanted:
            continue
        other_start = parse_date(campaign.get("start_date"))
        other_end = parse_date(campaign.get("end_date"))
        if other_start is None or other_end is None:
            continue
        if intervals_overlap(other_start, other_end, start, end):
            return campaign
    return None
