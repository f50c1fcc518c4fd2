"""Eligibility of deposit records for display and statistics."""

from __future__ import annotations

from typing import Iterable

from concessions.common.constants import PLACEHOLDER_MARKER
from concessions.common.models import DepositRecord


def is_eligible(record: DepositRecord, *, placeholder_marker: str = PLACEHOLDER_MARKER) -> bool:
    """Return True when the record has coordinates and a resolved identifier."""
    if record.coordinates is None:
        return False
    if placeholder_marker and placeholder_marker in record.id:
        return False
    return True


def eligible_records(
    records: Iterable[DepositRecord],
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> list[DepositRecord]:
    return [record for record in records if is_eligible(record, placeholder_marker=placeholder_marker)]
