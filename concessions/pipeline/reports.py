"""Statistics panel payload and dataset quality report."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Iterable

from concessions.common.constants import CONFIDENCE_TIERS, DEFAULT_TOP_K, PLACEHOLDER_MARKER
from concessions.common.fs import write_json
from concessions.common.models import DepositRecord
from concessions.pipeline.aggregate import aggregate, top_k
from concessions.pipeline.eligibility import is_eligible


def _percent(part: int, whole: int) -> float:
    return 0.0 if whole == 0 else round((part / whole) * 100, 2)


def _ranked(counts: dict[str, int], k: int) -> list[dict]:
    return [{"label": label, "count": count} for label, count in top_k(counts, k)]


def build_statistics_panel(
    all_records: Iterable[DepositRecord],
    filtered_records: Iterable[DepositRecord],
    *,
    top: int = DEFAULT_TOP_K,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> dict:
    overall = aggregate(all_records, placeholder_marker=placeholder_marker)
    shown = aggregate(filtered_records, placeholder_marker=placeholder_marker)

    return {
        "total": overall.total_count,
        "shown": shown.total_count,
        "regions": len(overall.counts_by_region),
        "active_regions": len(shown.counts_by_region),
        "top_resource_types": _ranked(shown.counts_by_resource_type, top),
        "top_regions": _ranked(shown.counts_by_region, top),
        "status_distribution": [
            {"label": label, "count": count, "percent": _percent(count, shown.total_count)}
            for label, count in shown.counts_by_status.items()
        ],
    }


def coordinate_quality(
    records: Iterable[DepositRecord],
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
) -> dict:
    records = list(records)
    tiers = Counter({tier: 0 for tier in CONFIDENCE_TIERS})
    with_coordinates = 0
    placeholders = 0
    eligible = 0
    for record in records:
        tiers[record.coordinate_confidence] += 1
        if record.coordinates is not None:
            with_coordinates += 1
        if placeholder_marker and placeholder_marker in record.id:
            placeholders += 1
        if is_eligible(record, placeholder_marker=placeholder_marker):
            eligible += 1

    return {
        "counts": {
            "records": len(records),
            "eligible": eligible,
            "with_coordinates": with_coordinates,
            "without_coordinates": len(records) - with_coordinates,
            "placeholders": placeholders,
        },
        "confidence_tiers": dict(sorted(tiers.items())),
        "coordinate_coverage_percent": _percent(with_coordinates, len(records)),
    }


def write_report(path: Path, payload: dict) -> Path:
    write_json(path, payload)
    return path
