"""Command-line entry point for sketchfab-embed."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from sketchfab_embed.adapters.http_client import UrllibHttpClient
from sketchfab_embed.core.matcher import find_model_links
from sketchfab_embed.core.processor import EmbedFilter
from sketchfab_embed.settings import Settings, load_settings

NAME = "sketchfab-embed"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _log_file_handler(file_cfg: dict, project_root: str) -> logging.Handler:
    """Rotating log file; relative paths are resolved against the project root."""

    path = file_cfg.get("path", "logs/sketchfab-embed.log")
    if not os.path.isabs(path):
        path = os.path.join(project_root, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 5 * 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 5)),
        encoding="utf-8",
    )


def _configure_logging(settings: Settings) -> None:
    config = settings.logging or {}
    if not config.get("enabled", False):
        return

    level = getattr(logging, str(config.get("level", "INFO")).upper(), logging.INFO)
    handlers: list[logging.Handler] = []
    if config.get("console", True):
        # stdout carries the filtered HTML.
        handlers.append(logging.StreamHandler(sys.stderr))
    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_log_file_handler(file_cfg, settings.project_root))
    if not handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)


def _read_input(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as handle:
        return handle.read()


def _write_output(path: Optional[str], text: str) -> None:
    if not path or path == "-":
        sys.stdout.write(text)
        return
    with open(path, "w", encoding="utf-8") as handle:
        handle.write(text)


def build_filter(settings: Settings) -> EmbedFilter:
    """Wire the core filter with the urllib adapter."""

    client = UrllibHttpClient(timeout=settings.http_timeout, user_agent=settings.user_agent)
    return EmbedFilter(client, settings.embed)


def _filter(settings: Settings, input_path: str, output_path: Optional[str]) -> None:
    logger = logging.getLogger(__name__)
    text = _read_input(input_path)
    result = build_filter(settings).apply(text)
    _write_output(output_path, result)
    logger.info("Filtered %s (%s -> %s chars)", input_path, len(text), len(result))


def _links(settings: Settings, input_path: str) -> None:
    text = _read_input(input_path)
    for record in find_model_links(text, settings.embed.model_page_base):
        link_text = " ".join(record.link_text.split())
        print(f"{record.model_id}\t{link_text}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog=NAME)
    parser.add_argument("--config", help="Path to config.json (defaults to the project root)")
    subparsers = parser.add_subparsers(dest="command")

    filter_parser = subparsers.add_parser("filter", help="Convert model links in HTML into embeds")
    filter_parser.add_argument("input", nargs="?", default="-", help="HTML file, or - for stdin")
    filter_parser.add_argument("-o", "--output", help="Where to write the result (default: stdout)")

    links_parser = subparsers.add_parser("links", help="List model links without fetching metadata")
    links_parser.add_argument("input", nargs="?", default="-", help="HTML file, or - for stdin")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return

    try:
        settings = load_settings(args.config)
    except (OSError, ValueError) as exc:
        parser.exit(1, f"{NAME}: invalid configuration: {exc}\n")
    _configure_logging(settings)

    try:
        if args.command == "links":
            _links(settings, args.input)
            return
        _filter(settings, args.input, args.output)
    except OSError as exc:
        parser.exit(1, f"{NAME}: {exc}\n")


if __name__ == "__main__":
    main()
