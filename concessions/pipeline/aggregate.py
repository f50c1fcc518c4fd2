"""Grouped statistics over eligible deposits."""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping

from concessions.common.constants import PLACEHOLDER_MARKER, UNKNOWN_LABEL
from concessions.common.models import DepositRecord, StatisticsSummary
from concessions.pipeline.eligibility import eligible_records


def _label(value: str) -> str:
    return value if value else UNKNOWN_LABEL


def _sorted_counts(counter: Counter) -> dict[str, int]:
    return dict(sorted(counter.items()))


def aggregate(
    records: Iterable[DepositRecord],
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> StatisticsSummary:
    valid = eligible_records(records, placeholder_marker=placeholder_marker)

    by_region: Counter = Counter()
    by_resource_type: Counter = Counter()
    by_status: Counter = Counter()
    for record in valid:
        by_region[_label(record.region)] += 1
        by_resource_type[_label(record.resource_type)] += 1
        by_status[_label(record.status)] += 1

    return StatisticsSummary(
        total_count=len(valid),
        counts_by_region=_sorted_counts(by_region),
        counts_by_resource_type=_sorted_counts(by_resource_type),
        counts_by_status=_sorted_counts(by_status),
    )


def top_k(counts: Mapping[str, int], k: int) -> list[tuple[str, int]]:
    """Return the ``k`` largest buckets, highest count first, ties by label."""
    if k <= 0:
        return []
    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return ranked[:k]
