"""Data models shared by the filter, aggregation and export stages."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(frozen=True)
class DepositRecord:
    id: str
    concessionaire: str = ""
    deposit_name: str = ""
    municipality: str = ""
    region: str = ""
    resource_group: str = ""
    resource_type: str = ""
    concession_term: str = ""
    status: str = ""
    coordinates: tuple[float, float] | None = None
    coordinate_confidence: str = "none"

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["coordinates"] = list(self.coordinates) if self.coordinates is not None else None
        return out


@dataclass(frozen=True)
class FilterCriteria:
    """The user's current filter selection.

    Instances are never mutated; every interaction produces a new value via
    ``concessions.pipeline.filters.apply_criteria``. An empty set on any facet
    means that facet imposes no constraint.
    """

    search_text: str = ""
    regions: frozenset[str] = frozenset()
    resource_types: frozenset[str] = frozenset()
    statuses: frozenset[str] = frozenset()
    confidences: frozenset[str] = frozenset()

    def is_empty(self) -> bool:
        return not (self.search_text or self.regions or self.resource_types or self.statuses or self.confidences)


@dataclass(frozen=True)
class StatisticsSummary:
    total_count: int
    counts_by_region: dict[str, int] = field(default_factory=dict)
    counts_by_resource_type: dict[str, int] = field(default_factory=dict)
    counts_by_status: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class DatasetMetadata:
    total_deposits: int | None = None
    geocoded_deposits: int | None = None
    success_rate: float | None = None
    confidence_distribution: dict[str, int] = field(default_factory=dict)
    extraction_date: str | None = None
    source_file: str | None = None


@dataclass(frozen=True)
class Dataset:
    metadata: DatasetMetadata
    deposits: tuple[DepositRecord, ...]
