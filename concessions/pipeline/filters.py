"""Faceted filtering of deposit records and the criteria reducer.

Facets combine with AND; values selected within one facet combine with OR.
An empty facet selection places no constraint on that facet.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Iterable, Mapping, Union

from concessions.common.constants import PLACEHOLDER_MARKER
from concessions.common.models import DepositRecord, FilterCriteria
from concessions.pipeline.eligibility import is_eligible

FACET_DIMENSIONS = ("regions", "resource_types", "statuses", "confidences")

EMPTY_CRITERIA = FilterCriteria()


@dataclass(frozen=True)
class SetSearch:
    text: str


@dataclass(frozen=True)
class ToggleValue:
    dimension: str
    value: str


@dataclass(frozen=True)
class ClearAll:
    pass


CriteriaChange = Union[SetSearch, ToggleValue, ClearAll]


def searchable_text(record: DepositRecord) -> str:
    parts = [
        record.deposit_name,
        record.concessionaire,
        record.municipality,
        record.region,
        record.resource_type,
    ]
    return " ".join(part for part in parts if part).lower()


def _facet_values(record: DepositRecord) -> dict[str, str]:
    return {
        "regions": record.region,
        "resource_types": record.resource_type,
        "statuses": record.status,
        "confidences": record.coordinate_confidence,
    }


def matches(record: DepositRecord, criteria: FilterCriteria) -> bool:
    """Check search text and facet selections; eligibility is not considered here."""
    if criteria.search_text:
        if criteria.search_text.lower() not in searchable_text(record):
            return False

    values = _facet_values(record)
    for dimension in FACET_DIMENSIONS:
        selected = getattr(criteria, dimension)
        if selected and values[dimension] not in selected:
            return False
    return True


def filter_deposits(
    records: Iterable[DepositRecord],
    criteria: FilterCriteria,
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> list[DepositRecord]:
    return [
        record
        for record in records
        if is_eligible(record, placeholder_marker=placeholder_marker) and matches(record, criteria)
    ]


def apply_criteria(criteria: FilterCriteria, change: CriteriaChange) -> FilterCriteria:
    if isinstance(change, ClearAll):
        return EMPTY_CRITERIA
    if isinstance(change, SetSearch):
        return replace(criteria, search_text=change.text)
    if isinstance(change, ToggleValue):
        if change.dimension not in FACET_DIMENSIONS:
            raise ValueError(f"Unknown filter dimension: {change.dimension}")
        current: frozenset[str] = getattr(criteria, change.dimension)
        if change.value in current:
            updated = current - {change.value}
        else:
            updated = current | {change.value}
        return replace(criteria, **{change.dimension: updated})
    raise TypeError(f"Unsupported criteria change: {change!r}")


def active_filter_count(criteria: FilterCriteria) -> int:
    count = sum(len(getattr(criteria, dimension)) for dimension in FACET_DIMENSIONS)
    if criteria.search_text:
        count += 1
    return count


def criteria_from_mapping(payload: Mapping[str, Any]) -> FilterCriteria:
    unknown = set(payload) - {"search_text", *FACET_DIMENSIONS}
    if unknown:
        raise ValueError(f"Unknown filter keys: {', '.join(sorted(unknown))}")
    return FilterCriteria(
        search_text=payload.get("search_text") or "",
        **{dimension: frozenset(payload.get(dimension) or ()) for dimension in FACET_DIMENSIONS},
    )
