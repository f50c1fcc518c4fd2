"""CLI entrypoint for the mining concession map data core."""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from concessions.common.config_loader import DEFAULT_CONFIG_DIR, ConfigBundle, load_all_configs
from concessions.common.constants import (
    COMMANDS,
    CONFIDENCE_TIERS,
    EXIT_EMPTY_RESULT,
    EXIT_HARD_FAIL,
    EXIT_SUCCESS,
)
from concessions.common.errors import ConcessionError
from concessions.common.http import HttpClient, RetryConfig, TimeoutConfig
from concessions.common.logging import build_logger, log_event
from concessions.common.models import DepositRecord, FilterCriteria
from concessions.common.time_utils import generate_run_id
from concessions.pipeline.classify import build_classifier
from concessions.pipeline.export import write_deposits_csv, write_markers_geojson
from concessions.pipeline.filters import criteria_from_mapping, filter_deposits
from concessions.pipeline.loader import load_dataset_source
from concessions.pipeline.options import filter_options
from concessions.pipeline.reports import build_statistics_panel, coordinate_quality, write_report


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("command", choices=COMMANDS)
    parser.add_argument("--data", default=None, help="Path or http(s) URL of the deposits JSON document")
    parser.add_argument("--config-dir", default=str(DEFAULT_CONFIG_DIR))
    parser.add_argument("--overlay-config-dir", default=None)
    parser.add_argument("--search", default="")
    parser.add_argument("--region", action="append", default=[])
    parser.add_argument("--resource-type", action="append", default=[])
    parser.add_argument("--status", action="append", default=[])
    parser.add_argument("--confidence", action="append", default=[], choices=CONFIDENCE_TIERS)
    parser.add_argument("--top-k", type=int, default=None)
    parser.add_argument("--out", default=None)
    parser.add_argument("--data-dir", default=None, help="Directory for run logs")
    parser.add_argument("--run-id", default=None)
    parser.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARN", "ERROR"])
    return parser.parse_args(argv)


def criteria_from_args(args: argparse.Namespace) -> FilterCriteria:
    return criteria_from_mapping(
        {
            "search_text": args.search,
            "regions": args.region,
            "resource_types": args.resource_type,
            "statuses": args.status,
            "confidences": args.confidence,
        }
    )


def _http_client(bundle: ConfigBundle) -> HttpClient:
    http_cfg = bundle.app["http"]
    return HttpClient(
        timeout=TimeoutConfig(connect=float(http_cfg["connect_timeout"]), read=float(http_cfg["read_timeout"])),
        retry=RetryConfig(max_attempts=int(http_cfg["max_attempts"])),
    )


def _emit(payload, out: str | None) -> None:
    if out:
        write_report(Path(out), payload)
    else:
        print(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True))


def execute_command(
    command: str,
    args: argparse.Namespace,
    bundle: ConfigBundle,
    records: tuple[DepositRecord, ...],
) -> int:
    """Run one command and return the number of rows it produced."""
    marker = bundle.app["placeholder_marker"]
    criteria = criteria_from_args(args)
    filtered = filter_deposits(records, criteria, placeholder_marker=marker)

    if command == "stats":
        top = args.top_k if args.top_k is not None else bundle.app["top_k"]
        panel = build_statistics_panel(records, filtered, top=top, placeholder_marker=marker)
        _emit(panel, args.out)
        return panel["shown"]
    if command == "filter":
        if args.out:
            return write_deposits_csv(Path(args.out), filtered)
        for record in filtered:
            print(json.dumps(record.to_dict(), ensure_ascii=False, sort_keys=True))
        return len(filtered)
    if command == "options":
        options = filter_options(records, placeholder_marker=marker)
        _emit(options, args.out)
        return sum(len(values) for values in options.values())
    if command == "markers":
        out_path = Path(args.out) if args.out else Path("markers.geojson")
        return write_markers_geojson(
            out_path,
            filtered,
            build_classifier(bundle.palette),
            placeholder_marker=marker,
            map_view=bundle.app["map"],
        )
    if command == "quality":
        report = coordinate_quality(records, placeholder_marker=marker)
        _emit(report, args.out)
        return report["counts"]["records"]
    raise ValueError(f"Unknown command: {command}")


def run_command(args: argparse.Namespace) -> int:
    run_id = args.run_id or generate_run_id()
    data_dir = Path(args.data_dir) if args.data_dir else None
    logger = build_logger(run_id, data_dir=data_dir, level=args.log_level)

    config_dir = Path(args.config_dir)
    overlay_config_dir = Path(args.overlay_config_dir) if args.overlay_config_dir else None
    source = args.data

    started = time.monotonic()
    log_event(logger, "command start", run_id=run_id, command=args.command, source=source, event="COMMAND_START", status="ok")
    try:
        bundle = load_all_configs(config_dir, overlay_config_dir=overlay_config_dir)
        source = bundle.dataset_source(args.data)
        with _http_client(bundle) as client:
            dataset = load_dataset_source(source, client=client)
        rows_out = execute_command(args.command, args, bundle, dataset.deposits)
    except ConcessionError as exc:
        log_event(
            logger,
            f"command failed: {exc}",
            level=logging.ERROR,
            run_id=run_id,
            command=args.command,
            source=source,
            event="COMMAND_FAIL",
            status="error",
            error_code=exc.error_code,
        )
        return EXIT_HARD_FAIL
    except Exception as exc:
        log_event(
            logger,
            f"unexpected failure: {exc!r}",
            level=logging.ERROR,
            run_id=run_id,
            command=args.command,
            source=source,
            event="COMMAND_FAIL",
            status="error",
            error_code="UNEXPECTED_ERROR",
        )
        return EXIT_HARD_FAIL

    log_event(
        logger,
        "command end",
        run_id=run_id,
        command=args.command,
        source=source,
        event="COMMAND_END",
        status="ok",
        rows_in=len(dataset.deposits),
        rows_out=rows_out,
        duration_ms=int((time.monotonic() - started) * 1000),
    )
    if rows_out == 0:
        return EXIT_EMPTY_RESULT
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv if argv is not None else sys.argv[1:])
    try:
        return run_command(args)
    except ConcessionError:
        return EXIT_HARD_FAIL
    except Exception:
        return EXIT_HARD_FAIL


if __name__ == "__main__":
    raise SystemExit(main())
