"""Loading and parsing of the deposits JSON document."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from concessions.common.constants import CONFIDENCE_TIERS
from concessions.common.errors import DatasetError
from concessions.common.fs import read_json
from concessions.common.http import HttpClient
from concessions.common.models import Dataset, DatasetMetadata, DepositRecord

# Dataset keys as published, followed by accepted English aliases.
FIELD_KEYS = {
    "concessionaire": ("koncesioner", "concessionaire"),
    "deposit_name": ("nahodishte", "deposit_name", "depositName"),
    "municipality": ("obshtina", "municipality"),
    "region": ("oblast", "region"),
    "resource_group": ("grupa_bogatstvo", "resource_group", "resourceGroup"),
    "resource_type": ("vid_bogatstvo", "resource_type", "resourceType"),
    "concession_term": ("srok_koncesiya", "concession_term", "concessionTerm"),
    "status": ("status",),
}
CONFIDENCE_KEYS = ("coordinate_confidence", "coordinateConfidence")


def _first_text(raw: Mapping[str, Any], keys: tuple[str, ...]) -> str:
    for key in keys:
        value = raw.get(key)
        if value is None:
            continue
        return str(value).strip()
    return ""


def _safe_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def parse_coordinates(value: Any) -> tuple[float, float] | None:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        return None
    lat = _safe_float(value[0])
    lon = _safe_float(value[1])
    if lat is None or lon is None:
        return None
    if not (-90 <= lat <= 90 and -180 <= lon <= 180):
        return None
    return lat, lon


def parse_record(raw: Mapping[str, Any]) -> DepositRecord:
    confidence = _first_text(raw, CONFIDENCE_KEYS).lower()
    if confidence not in CONFIDENCE_TIERS:
        confidence = "none"

    return DepositRecord(
        id=_first_text(raw, ("id",)),
        coordinates=parse_coordinates(raw.get("coordinates")),
        coordinate_confidence=confidence,
        **{name: _first_text(raw, keys) for name, keys in FIELD_KEYS.items()},
    )


def _parse_metadata(raw: Any) -> DatasetMetadata:
    if not isinstance(raw, dict):
        return DatasetMetadata()
    distribution = raw.get("confidence_distribution")
    return DatasetMetadata(
        total_deposits=raw.get("total_deposits"),
        geocoded_deposits=raw.get("geocoded_deposits"),
        success_rate=_safe_float(raw.get("success_rate")),
        confidence_distribution=dict(distribution) if isinstance(distribution, dict) else {},
        extraction_date=raw.get("extraction_date"),
        source_file=raw.get("source_file"),
    )


def parse_dataset(payload: Any) -> Dataset:
    if not isinstance(payload, dict):
        raise DatasetError("Deposits document must be a JSON object")
    deposits = payload.get("deposits")
    if not isinstance(deposits, list):
        raise DatasetError("Deposits document is missing a 'deposits' list")

    records = []
    for idx, raw in enumerate(deposits):
        if not isinstance(raw, dict):
            raise DatasetError(f"deposits[{idx}] is not an object")
        records.append(parse_record(raw))

    return Dataset(metadata=_parse_metadata(payload.get("metadata")), deposits=tuple(records))


def load_dataset(path: Path) -> Dataset:
    return parse_dataset(read_json(path))


def fetch_dataset(url: str, client: HttpClient | None = None) -> Dataset:
    if client is not None:
        return parse_dataset(client.get_json(url))
    with HttpClient() as owned:
        return parse_dataset(owned.get_json(url))


def load_dataset_source(source: str | Path, client: HttpClient | None = None) -> Dataset:
    text = str(source)
    if text.startswith(("http://", "https://")):
        return fetch_dataset(text, client=client)
    return load_dataset(Path(text))
