"""gather command line.

Usage:
    gather [--log-level L] [-s SAVE_AS] [--timeout S] download -u URI
    gather [--log-level L] [-s SAVE_AS] [--timeout S] scrape -u URI -p PATTERN -w WHICH
    gather [--log-level L] [-s SAVE_AS] [--timeout S] run -c CONFIG.json

`-s` and `--timeout` may also follow the command name. For `run` they
override the values in the config file.

Commands are registered on a parser built by `build_parser`; `main` is the
single place that turns errors into exit codes.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Dict, List, Optional

from pydantic import ValidationError

from gather import __version__
from gather.core.config import GatherConfig, ScrapeJob, SimpleJob, load_config
from gather.core.errors import ConfigError, GatherError
from gather.flows.gather_flow import gather_flow

logger = logging.getLogger("gather")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def synopsis() -> str:
    return "Synopsis:\n  gather is a CLI for downloading URIs."


def _add_common_options(parser: argparse.ArgumentParser, default) -> None:
    # Commands register these with SUPPRESS so values given before the
    # command name survive.
    parser.add_argument(
        "-s", "--save-as", default=default, help="Path to save downloads to"
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=default,
        help="Seconds to wait for the server (default: wait forever)",
    )


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    _add_common_options(common, argparse.SUPPRESS)
    return common


def _require_save_as(args: argparse.Namespace) -> str:
    if not args.save_as:
        raise ConfigError(f"{args.command}: -s/--save-as is required")
    return args.save_as


def _download_config(args: argparse.Namespace) -> GatherConfig:
    return GatherConfig(
        save_as=_require_save_as(args),
        job=SimpleJob(uri=args.uri),
        timeout=args.timeout,
    )


def _scrape_config(args: argparse.Namespace) -> GatherConfig:
    return GatherConfig(
        save_as=_require_save_as(args),
        job=ScrapeJob(uri=args.uri, pattern=args.pattern, which=args.which),
        timeout=args.timeout,
    )


def _file_config(args: argparse.Namespace) -> GatherConfig:
    """Load the config file; -s and --timeout override its values."""
    config = load_config(args.config)
    if args.save_as is None and args.timeout is None:
        return config
    return GatherConfig(
        save_as=args.save_as if args.save_as is not None else config.save_as,
        job=config.job,
        timeout=args.timeout if args.timeout is not None else config.timeout,
    )


def register_commands(subparsers) -> Dict[str, argparse.ArgumentParser]:
    """Add the gather commands to `subparsers` and return them by name."""
    common = _common_options()
    commands: Dict[str, argparse.ArgumentParser] = {}

    download = subparsers.add_parser(
        "download",
        parents=[common],
        help="Download a URL contents to file",
        description="Given a URL, download its contents to a file",
    )
    download.add_argument("-u", "--uri", required=True, help="Host to download from")
    download.set_defaults(build_config=_download_config)
    commands["download"] = download

    scrape = subparsers.add_parser(
        "scrape",
        parents=[common],
        help="Scrape a URL for files",
        description="Scrape a URL for file patterns and download matching files",
    )
    scrape.add_argument("-u", "--uri", required=True, help="Host to scrape files from")
    scrape.add_argument(
        "-p",
        "--pattern",
        required=True,
        help="Pattern to look for when scraping for files",
    )
    scrape.add_argument(
        "-w",
        "--which",
        required=True,
        help="Which files to get: 'all', 'first' or 'last'",
    )
    scrape.set_defaults(build_config=_scrape_config)
    commands["scrape"] = scrape

    run = subparsers.add_parser(
        "run",
        parents=[common],
        help="Run a job described by a JSON config file",
        description=(
            "Load a JSON config file ($Year, $Month, $Day, $Hour, $Minute and "
            "$Second are replaced with the current UTC time) and run its job"
        ),
    )
    run.add_argument("-c", "--config", required=True, help="Path to the config file")
    run.set_defaults(build_config=_file_config)
    commands["run"] = run

    return commands


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gather", description="Download content from remote locations."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )
    _add_common_options(parser, None)
    subparsers = parser.add_subparsers(dest="command")
    register_commands(subparsers)
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("prefect").setLevel(level)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if not args.command:
        print(synopsis())
        return 0

    try:
        config = args.build_config(args)
    except ValidationError as exc:
        logger.error("Invalid options: %s", exc)
        return ConfigError.exit_code
    except ConfigError as exc:
        logger.error("%s", exc)
        return exc.exit_code

    try:
        gather_flow(config)
    except GatherError as exc:
        logger.error("%s", exc)
        return exc.exit_code

    return 0


if __name__ == "__main__":
    sys.exit(main())
