"""
Command-line interface for applying the Develocity conventions.

This module loads the configuration, applies command-line overrides, applies
the conventions for the requested tasks and reports what was configured.
"""

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..orchestration import ConventionsOutcome, ConventionsRunner
from ..validation import (
    handle_cli_error,
    ValidationError,
    validate_path_exists,
    validate_toolchain_version,
)

logger = logging.getLogger(__name__)


def _configure_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="develocity-conventions",
        description="Apply the Develocity build scan and build cache conventions and report the result.",
    )
    parser.add_argument(
        "tasks",
        nargs="*",
        help="Tasks or goals the build runs. A 'properties' task suppresses build scan conventions.",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=Path,
        help="Path to config.toml. Defaults to conf/config.toml.",
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        help="Directory of the project being built; git and docker are probed there.",
    )
    scan_group = parser.add_mutually_exclusive_group()
    scan_group.add_argument(
        "--scan",
        action="store_true",
        help="Publish anonymously using the build system's own defaults.",
    )
    scan_group.add_argument(
        "--no-scan",
        action="store_true",
        help="Do not apply build scan conventions.",
    )
    parser.add_argument(
        "--no-build-cache",
        action="store_true",
        help="Do not apply build cache conventions.",
    )
    parser.add_argument(
        "--toolchain-version",
        type=str,
        help="Requested Java toolchain version to report in the JDK tag.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the outcome as JSON on standard output.",
    )
    return parser


def _log_outcome(outcome: ConventionsOutcome) -> None:
    report = outcome.to_dict()
    logger.info(f"Develocity server: {report['server']}")
    scan = report["build_scan"]
    logger.info(f"Tags: {', '.join(scan['tags']) or '-'}")
    for name, value in scan["values"].items():
        logger.info(f"Value  {name}: {value}")
    for name, url in scan["links"].items():
        logger.info(f"Link   {name}: {url}")
    logger.info(
        f"Upload in background: {scan['upload_in_background']}, "
        f"capture input files: {scan['capture_input_files']}"
    )
    cache = report["build_cache"]
    logger.info(
        f"Local cache enabled: {cache['local']['enabled']}, remote cache enabled: "
        f"{cache['remote']['enabled']} at {cache['remote']['server']}, push: {cache['remote']['push_enabled']}"
    )


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line interface.

    Returns:
        Process exit status.

    Raises:
        SystemExit: On configuration errors or invalid arguments.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(logging.INFO)

    if args.config is not None:
        set_config_path(args.config)

    try:
        config = get_config()
    except (FileNotFoundError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )
    logging.getLogger().setLevel(config.log_level)

    overrides = {}
    try:
        if args.project_dir:
            overrides["project_dir"] = Path(
                validate_path_exists(args.project_dir, field_name="--project-dir argument")
            )
        if args.toolchain_version is not None:
            overrides["toolchain_version"] = validate_toolchain_version(
                args.toolchain_version, field_name="--toolchain-version argument"
            )
    except ValidationError as e:
        handle_cli_error(
            error=e,
            context="argument validation",
            exit_code=1,
            logger=logger,
        )
    if args.scan:
        overrides["anonymous_publication"] = True
    if args.no_scan:
        overrides["build_scan_enabled"] = False
    if args.no_build_cache:
        overrides["build_cache_enabled"] = False
    config = dataclasses.replace(config, **overrides)

    outcome = ConventionsRunner(config).apply(args.tasks)

    if args.json:
        json.dump(outcome.to_dict(), sys.stdout, indent=2, sort_keys=True)
        sys.stdout.write("\n")
    else:
        _log_outcome(outcome)
    return 0


if __name__ == "__main__":
    sys.exit(main_cli())
