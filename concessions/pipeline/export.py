"""Map marker and CSV exports of filtered deposits."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from concessions.common.constants import PLACEHOLDER_MARKER
from concessions.common.fs import write_csv, write_json
from concessions.common.models import DepositRecord
from concessions.pipeline.classify import Classifier
from concessions.pipeline.eligibility import is_eligible

DEFAULT_MAP_VIEW = {"center": {"lat": 42.7339, "lng": 25.4858}, "zoom": 7}
MISSING_VALUE = "Н/Д"

CSV_HEADERS = [
    "id",
    "deposit_name",
    "concessionaire",
    "municipality",
    "region",
    "resource_group",
    "resource_type",
    "status",
    "concession_term",
    "lat",
    "lon",
    "coordinate_confidence",
]


def marker_payload(record: DepositRecord, classifier: Classifier) -> dict:
    if record.coordinates is None:
        raise ValueError(f"Deposit {record.id} has no coordinates")
    lat, lon = record.coordinates
    return {
        "position": {"lat": lat, "lng": lon},
        "title": record.deposit_name,
        "color": classifier.classify(record),
        "info": {
            "id": record.id,
            "concessionaire": record.concessionaire or MISSING_VALUE,
            "municipality": record.municipality,
            "region": record.region,
            "resource_type": record.resource_type,
            "resource_group": record.resource_group,
            "status": record.status,
            "concession_term": record.concession_term,
            "coordinate_confidence": record.coordinate_confidence,
        },
    }


def markers_feature_collection(
    records: Iterable[DepositRecord],
    classifier: Classifier,
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
    map_view: dict | None = None,
) -> dict:
    features = []
    for record in records:
        if not is_eligible(record, placeholder_marker=placeholder_marker):
            continue
        marker = marker_payload(record, classifier)
        position = marker["position"]
        features.append(
            {
                "type": "Feature",
                "id": record.id,
                "geometry": {"type": "Point", "coordinates": [position["lng"], position["lat"]]},
                "properties": {"title": marker["title"], "color": marker["color"], **marker["info"]},
            }
        )
    return {
        "type": "FeatureCollection",
        "features": features,
        "map_view": map_view or DEFAULT_MAP_VIEW,
    }


def write_markers_geojson(
    path: Path,
    records: Iterable[DepositRecord],
    classifier: Classifier,
    *,
    placeholder_marker: str = PLACEHOLDER_MARKER,
    map_view: dict | None = None,
) -> int:
    collection = markers_feature_collection(
        records,
        classifier,
        placeholder_marker=placeholder_marker,
        map_view=map_view,
    )
    write_json(path, collection)
    return len(collection["features"])


def _serialize_row(record: DepositRecord) -> dict:
    row = record.to_dict()
    coordinates = row.pop("coordinates")
    row["lat"] = "" if coordinates is None else coordinates[0]
    row["lon"] = "" if coordinates is None else coordinates[1]
    return row


def write_deposits_csv(path: Path, records: Iterable[DepositRecord]) -> int:
    return write_csv(path, CSV_HEADERS, (_serialize_row(record) for record in records))
