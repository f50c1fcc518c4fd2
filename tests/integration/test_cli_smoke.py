import json
from pathlib import Path

import pytest

from concessions.cli import main, parse_args, run_command
from concessions.common.constants import EXIT_EMPTY_RESULT, EXIT_HARD_FAIL, EXIT_SUCCESS

FIXTURE = "tests/fixtures/mining_deposits_sample.json"


def _args(command: str, *extra: str):
    return parse_args([command, "--config-dir", "concessions/config", "--data", FIXTURE, "--run-id", "run-test", *extra])


@pytest.mark.integration
def test_cli_stats_writes_panel(tmp_path: Path):
    out = tmp_path / "stats.json"
    assert run_command(_args("stats", "--out", str(out), "--data-dir", str(tmp_path))) == EXIT_SUCCESS

    panel = json.loads(out.read_text(encoding="utf-8"))
    assert panel["total"] == 5
    assert panel["shown"] == 5
    assert panel["top_regions"][0] == {"label": "София", "count": 3}
    assert (tmp_path / "run_meta" / "run-test.log.jsonl").exists()


@pytest.mark.integration
def test_cli_filter_prints_json_lines(capsys):
    assert run_command(_args("filter", "--region", "София", "--status", "съгласуван")) == EXIT_SUCCESS

    lines = [json.loads(line) for line in capsys.readouterr().out.splitlines()]
    assert [line["id"] for line in lines] == ["K-001", "K-003"]


@pytest.mark.integration
def test_cli_filter_with_no_matches_signals_empty_result(capsys):
    assert run_command(_args("filter", "--search", "несъществуващо")) == EXIT_EMPTY_RESULT
    assert capsys.readouterr().out == ""


@pytest.mark.integration
def test_cli_markers_and_options(tmp_path: Path):
    markers = tmp_path / "markers.geojson"
    assert run_command(_args("markers", "--resource-type", "Медни руди", "--out", str(markers))) == EXIT_SUCCESS
    payload = json.loads(markers.read_text(encoding="utf-8"))
    assert [feature["id"] for feature in payload["features"]] == ["K-003"]
    assert payload["features"][0]["properties"]["color"] == "#fb923c"

    options = tmp_path / "options.json"
    assert run_command(_args("options", "--out", str(options))) == EXIT_SUCCESS
    assert json.loads(options.read_text(encoding="utf-8"))["regions"] == ["Благоевград", "София"]


@pytest.mark.integration
def test_cli_quality_report(tmp_path: Path):
    out = tmp_path / "quality.json"
    assert run_command(_args("quality", "--out", str(out))) == EXIT_SUCCESS
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["counts"]["eligible"] == 5
    assert report["counts"]["placeholders"] == 1


@pytest.mark.integration
def test_cli_missing_dataset_is_hard_failure(tmp_path: Path):
    exit_code = main(["stats", "--config-dir", "concessions/config", "--data", str(tmp_path / "missing.json")])
    assert exit_code == EXIT_HARD_FAIL


@pytest.mark.integration
def test_cli_missing_config_is_hard_failure(tmp_path: Path):
    assert main(["stats", "--config-dir", str(tmp_path), "--data", FIXTURE]) == EXIT_HARD_FAIL


@pytest.mark.integration
def test_cli_unexpected_write_failure_is_hard_failure(tmp_path: Path):
    out_dir = tmp_path / "already_a_directory"
    out_dir.mkdir()
    exit_code = main(
        [
            "stats",
            "--config-dir",
            "concessions/config",
            "--data",
            FIXTURE,
            "--out",
            str(out_dir),
            "--data-dir",
            str(tmp_path),
            "--run-id",
            "run-unexpected",
        ]
    )
    assert exit_code == EXIT_HARD_FAIL

    events = [json.loads(line) for line in (tmp_path / "run_meta" / "run-unexpected.log.jsonl").read_text(encoding="utf-8").splitlines()]
    assert events[-1]["event"] == "COMMAND_FAIL"
    assert events[-1]["error_code"] == "UNEXPECTED_ERROR"


@pytest.mark.integration
def test_cli_bad_http_overlay_is_config_failure(tmp_path: Path):
    overlay = tmp_path / "overlay"
    overlay.mkdir()
    (overlay / "app.yml").write_text("http:\n  connect_timeout: fast\n", encoding="utf-8")
    exit_code = main(
        [
            "stats",
            "--config-dir",
            "concessions/config",
            "--overlay-config-dir",
            str(overlay),
            "--data",
            FIXTURE,
            "--data-dir",
            str(tmp_path),
            "--run-id",
            "run-overlay",
        ]
    )
    assert exit_code == EXIT_HARD_FAIL

    events = [json.loads(line) for line in (tmp_path / "run_meta" / "run-overlay.log.jsonl").read_text(encoding="utf-8").splitlines()]
    assert events[-1]["error_code"] == "CONFIG_ERROR"


@pytest.mark.integration
def test_cli_without_data_or_configured_source_is_hard_failure():
    assert main(["stats", "--config-dir", "concessions/config"]) == EXIT_HARD_FAIL


@pytest.mark.integration
def test_cli_reads_configured_source_relative_to_config_dir(tmp_path: Path):
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    app_text = Path("concessions/config/app.yml").read_text(encoding="utf-8")
    (config_dir / "app.yml").write_text(app_text.replace("source: null", "source: deposits.json"), encoding="utf-8")
    (config_dir / "palette.yml").write_text(Path("concessions/config/palette.yml").read_text(encoding="utf-8"), encoding="utf-8")
    (config_dir / "deposits.json").write_text(Path(FIXTURE).read_text(encoding="utf-8"), encoding="utf-8")

    out = tmp_path / "quality.json"
    assert main(["quality", "--config-dir", str(config_dir), "--out", str(out)]) == EXIT_SUCCESS
    assert json.loads(out.read_text(encoding="utf-8"))["counts"]["records"] == 7
