"""
Launch Command-Line Interface.

Exposes the launch operations as the ``rp-launch`` command.

Usage:
    rp-launch --config reportportal.yaml list --filter name=Nightly --page-size 50
    rp-launch get 5a1b2c
    rp-launch start "Nightly run" --tag smoke --tag ui
    rp-launch finish 5a1b2c --force
    rp-launch merge --name "Merged" --launch 5a1b2c --launch 5a1b2d --deep
    rp-launch analyze 5a1b2c --strategy history
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, List, Optional

from loguru import logger

from reportportal_client.config.loader import ConfigLoader
from reportportal_client.errors import DeserializationError, ReportPortalError
from reportportal_client.filtering.filter_option import (
    FilterOption,
    Paging,
    SortDirection,
    Sorting,
    conditions_from_expressions,
)
from reportportal_client.models.converters import parse_datetime
from reportportal_client.models.launch import LaunchMode
from reportportal_client.models.payloads import (
    FinishLaunchRequest,
    MergeLaunchesRequest,
    MergeType,
    StartLaunchRequest,
    UpdateLaunchRequest,
    utc_now,
)
from reportportal_client.service.service import Service


def _timestamp_arg(value: str):
    try:
        return parse_datetime(value)
    except DeserializationError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for all launch subcommands."""
    parser = argparse.ArgumentParser(
        prog="rp-launch",
        description="ReportPortal — launch operations",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to client config file (default: reportportal.yaml if present)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="List launches")
    list_cmd.add_argument("--debug", action="store_true", help="List debug launches")
    list_cmd.add_argument(
        "--filter",
        action="append",
        default=[],
        metavar="[OP.]FIELD=VALUE",
        help="Filter condition, repeatable (operation defaults to eq)",
    )
    list_cmd.add_argument("--page", type=int, default=None, help="Page number (1-based)")
    list_cmd.add_argument("--page-size", type=int, default=None, help="Page size")
    list_cmd.add_argument("--sort", action="append", default=[], help="Sort field, repeatable")
    list_cmd.add_argument("--desc", action="store_true", help="Sort descending")

    get_cmd = sub.add_parser("get", help="Show a launch")
    get_cmd.add_argument("launch_id")

    start_cmd = sub.add_parser("start", help="Start a launch")
    start_cmd.add_argument("name")
    start_cmd.add_argument("--description", default=None)
    start_cmd.add_argument("--tag", action="append", default=[])
    start_cmd.add_argument("--debug", action="store_true", help="Start in debug mode")

    finish_cmd = sub.add_parser("finish", help="Finish a launch")
    finish_cmd.add_argument("launch_id")
    finish_cmd.add_argument("--force", action="store_true", help="Stop even if items are running")
    finish_cmd.add_argument("--status", default=None)

    delete_cmd = sub.add_parser("delete", help="Delete a launch")
    delete_cmd.add_argument("launch_id")

    merge_cmd = sub.add_parser("merge", help="Merge launches")
    merge_cmd.add_argument("--name", required=True)
    merge_cmd.add_argument("--launch", action="append", required=True, dest="launches")
    merge_cmd.add_argument("--description", default=None)
    merge_cmd.add_argument("--tag", action="append", default=[])
    merge_cmd.add_argument("--deep", action="store_true", help="Use DEEP merge")
    merge_cmd.add_argument("--start-time", type=_timestamp_arg, default=None)
    merge_cmd.add_argument("--end-time", type=_timestamp_arg, default=None)

    update_cmd = sub.add_parser("update", help="Update launch metadata")
    update_cmd.add_argument("launch_id")
    update_cmd.add_argument("--description", default=None)
    update_cmd.add_argument("--mode", choices=[m.value for m in LaunchMode], default=None)
    update_cmd.add_argument("--tag", action="append", default=None)

    analyze_cmd = sub.add_parser("analyze", help="Analyze a launch")
    analyze_cmd.add_argument("launch_id")
    analyze_cmd.add_argument("--strategy", default="history")

    return parser


def configure_logging(verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def build_service(config_path: Optional[str]) -> Service:
    """Create a Service from the config file and RP_* environment variables."""
    config = ConfigLoader().load_client_config(config_path)
    return Service.from_config(config)


def _build_filter(args: argparse.Namespace) -> Optional[FilterOption]:
    if not (args.filter or args.page or args.page_size or args.sort):
        return None
    option = FilterOption(conditions=conditions_from_expressions(args.filter))
    if args.page or args.page_size:
        option.paging = Paging(number=args.page or 1, size=args.page_size or 20)
    if args.sort:
        direction = SortDirection.DESCENDING if args.desc else SortDirection.ASCENDING
        option.sorting = Sorting(fields=args.sort, direction=direction)
    return option


def run_command(service: Service, args: argparse.Namespace) -> Any:
    """Dispatch a parsed subcommand to the launch service and return its result."""
    launches = service.launches

    if args.command == "list":
        return launches.get_launches(_build_filter(args), debug=args.debug)
    if args.command == "get":
        return launches.get_launch(args.launch_id)
    if args.command == "start":
        return launches.start_launch(StartLaunchRequest(
            name=args.name,
            description=args.description,
            mode=LaunchMode.DEBUG if args.debug else LaunchMode.DEFAULT,
            tags=args.tag,
        ))
    if args.command == "finish":
        return launches.finish_launch(
            args.launch_id,
            FinishLaunchRequest(status=args.status),
            force=args.force,
        )
    if args.command == "delete":
        return launches.delete_launch(args.launch_id)
    if args.command == "merge":
        now = utc_now()
        return launches.merge_launches(MergeLaunchesRequest(
            name=args.name,
            launches=args.launches,
            start_time=args.start_time or now,
            end_time=args.end_time or now,
            description=args.description,
            tags=args.tag,
            merge_type=MergeType.DEEP if args.deep else MergeType.BASIC,
        ))
    if args.command == "update":
        return launches.update_launch(args.launch_id, UpdateLaunchRequest(
            description=args.description,
            mode=LaunchMode(args.mode) if args.mode else None,
            tags=args.tag,
        ))
    if args.command == "analyze":
        return launches.analyze_launch(args.launch_id, args.strategy)

    raise ValueError(f"Unknown command: {args.command}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for ``rp-launch``."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        with build_service(args.config) as service:
            result = run_command(service, args)
    except (ReportPortalError, FileNotFoundError, ValueError) as e:
        logger.error(f"[rp-launch] {args.command} failed: {e}")
        return 1

    print(json.dumps(result.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
