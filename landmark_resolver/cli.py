from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

import yaml
from pydantic import ValidationError

from .commands import doctor as cmd_doctor
from .commands import match as cmd_match
from .commands import registry_list as cmd_registry
from .config import load_settings
from .pipeline import MatchPipeline
from .registry import RegistryError

LOG_FORMAT = "%(levelname).1s | %(name)s | %(message)s"

C_RESET = "\033[0m"
LEVEL_COLORS = {
    logging.DEBUG: "\033[36m",  # Cyan
    logging.INFO: "\033[37m",  # Light gray
    logging.WARNING: "\033[33m",  # Yellow
    logging.ERROR: "\033[31m",  # Red
    logging.CRITICAL: "\033[35m",  # Magenta
}

logger = logging.getLogger(__name__)


class ColorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = LEVEL_COLORS.get(record.levelno)
        if not color:
            return message
        return f"{color}{message}{C_RESET}"


def configure_logging(level_name: str) -> None:
    log_level = getattr(logging, level_name.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(log_level)

    # stdout carries JSON results; logs go to stderr.
    handler = logging.StreamHandler(sys.stderr)
    if sys.stderr.isatty():
        handler.setFormatter(ColorFormatter(LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve image classifier labels to known landmarks")
    parser.add_argument("--config", type=Path, help="Path to landmark-resolver.yaml")
    parser.add_argument("--log-level", default="WARNING", help="Python logging level")

    subparsers = parser.add_subparsers(dest="command", required=True)
    match_parser = subparsers.add_parser("match", help="Match a label payload against the registry")
    match_parser.add_argument(
        "labels",
        type=Path,
        help="JSON file with labels (a list or a {\"Labels\": [...]} object); '-' reads stdin",
    )
    match_parser.add_argument(
        "--explain",
        action="store_true",
        help="Include the per-tier trace and the landmark signal",
    )
    subparsers.add_parser("registry", help="List the loaded landmark definitions")
    subparsers.add_parser("doctor", help="Check configuration and registry")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        settings = load_settings(args.config)
    except (OSError, ValidationError, yaml.YAMLError) as exc:
        logger.error("Invalid configuration: %s", exc)
        raise SystemExit(2)

    if args.command == "doctor":
        report = cmd_doctor.run(settings)
        for line in report.checks:
            print(line)
        if not report.ok:
            raise SystemExit(1)
        return

    try:
        pipeline = MatchPipeline.from_settings(settings)
    except RegistryError as exc:
        logger.error("Cannot load landmark registry: %s", exc)
        raise SystemExit(2)

    match args.command:
        case "match":
            try:
                labels = cmd_match.read_labels(args.labels)
            except (OSError, ValueError) as exc:
                logger.error("Cannot read labels from %s: %s", args.labels, exc)
                raise SystemExit(2)
            record = cmd_match.run(pipeline, settings, labels, explain=args.explain)
            print(cmd_match.render(record))
        case "registry":
            for line in cmd_registry.run(pipeline.registry):
                print(line)
        case _:
            parser.error("Unknown command")


if __name__ == "__main__":
    main()
