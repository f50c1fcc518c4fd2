import json
from pathlib import Path

from concessions.common.models import DepositRecord, FilterCriteria
from concessions.pipeline.filters import filter_deposits
from concessions.pipeline.reports import build_statistics_panel, coordinate_quality, write_report


def _records():
    return [
        DepositRecord(id="1", coordinates=(1.0, 1.0), region="Sofia", resource_type="Sand", status="approved", coordinate_confidence="high"),
        DepositRecord(id="2", coordinates=(1.0, 1.0), region="Sofia", resource_type="Sand", status="pending", coordinate_confidence="medium"),
        DepositRecord(id="3", coordinates=(1.0, 1.0), region="Varna", resource_type="Marble", status="approved", coordinate_confidence="low"),
        DepositRecord(id="4", coordinates=None, region="Ruse", resource_type="Coal", status="approved", coordinate_confidence="none"),
        DepositRecord(id="Идентифика-5", coordinates=(1.0, 1.0), region="Plovdiv", coordinate_confidence="none"),
    ]


def test_statistics_panel_compares_all_and_filtered():
    records = _records()
    filtered = filter_deposits(records, FilterCriteria(regions=frozenset({"Sofia"})))

    panel = build_statistics_panel(records, filtered, top=1)

    assert panel["total"] == 3
    assert panel["shown"] == 2
    assert panel["regions"] == 2
    assert panel["active_regions"] == 1
    assert panel["top_resource_types"] == [{"label": "Sand", "count": 2}]
    assert panel["top_regions"] == [{"label": "Sofia", "count": 2}]
    assert panel["status_distribution"] == [
        {"label": "approved", "count": 1, "percent": 50.0},
        {"label": "pending", "count": 1, "percent": 50.0},
    ]


def test_statistics_panel_with_nothing_shown():
    panel = build_statistics_panel(_records(), [])
    assert panel["shown"] == 0
    assert panel["top_regions"] == []
    assert panel["status_distribution"] == []


def test_coordinate_quality_counts():
    report = coordinate_quality(_records())
    assert report["counts"] == {
        "records": 5,
        "eligible": 3,
        "with_coordinates": 4,
        "without_coordinates": 1,
        "placeholders": 1,
    }
    assert report["confidence_tiers"] == {"high": 1, "low": 1, "medium": 1, "none": 2}
    assert report["coordinate_coverage_percent"] == 80.0


def test_coordinate_quality_of_empty_input():
    report = coordinate_quality([])
    assert report["coordinate_coverage_percent"] == 0.0
    assert report["counts"]["records"] == 0


def test_write_report_is_sorted_json(tmp_path: Path):
    path = write_report(tmp_path / "reports" / "stats.json", {"b": 1, "a": "Област"})
    text = path.read_text(encoding="utf-8")
    assert text.index('"a"') < text.index('"b"')
    assert "Област" in text
    assert json.loads(text) == {"a": "Област", "b": 1}
