"""Option lists for the filter panel."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable

from concessions.common.constants import CONFIDENCE_OPTIONS, PLACEHOLDER_MARKER
from concessions.common.models import DepositRecord
from concessions.pipeline.eligibility import eligible_records


class FilterableField(str, Enum):
    REGION = "region"
    RESOURCE_TYPE = "resource_type"
    RESOURCE_GROUP = "resource_group"
    STATUS = "status"
    MUNICIPALITY = "municipality"
    CONFIDENCE = "coordinate_confidence"


FIELD_ACCESSORS: dict[FilterableField, Callable[[DepositRecord], str]] = {
    FilterableField.REGION: lambda record: record.region,
    FilterableField.RESOURCE_TYPE: lambda record: record.resource_type,
    FilterableField.RESOURCE_GROUP: lambda record: record.resource_group,
    FilterableField.STATUS: lambda record: record.status,
    FilterableField.MUNICIPALITY: lambda record: record.municipality,
    FilterableField.CONFIDENCE: lambda record: record.coordinate_confidence,
}


def unique_values(
    records: Iterable[DepositRecord],
    field: FilterableField | str,
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> list[str]:
    accessor = FIELD_ACCESSORS[FilterableField(field)]
    values = set()
    for record in eligible_records(records, placeholder_marker=placeholder_marker):
        value = accessor(record)
        if value and value.strip():
            values.add(value)
    return sorted(values)


def filter_options(
    records: Iterable[DepositRecord],
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> dict[str, list[str]]:
    records = list(records)
    return {
        "regions": unique_values(records, FilterableField.REGION, placeholder_marker=placeholder_marker),
        "resource_types": unique_values(records, FilterableField.RESOURCE_TYPE, placeholder_marker=placeholder_marker),
        "statuses": unique_values(records, FilterableField.STATUS, placeholder_marker=placeholder_marker),
        "confidences": list(CONFIDENCE_OPTIONS),
    }
