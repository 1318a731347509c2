"""Command-line interface: ``python -m tocideator <command>``."""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from tocideator.exceptions import TocIdeatorError
from tocideator.markdown import to_markdown
from tocideator.normalizer import extract_node_array
from tocideator.numbering import number_outline, render_preview_text
from tocideator.publish import publish_snapshot
from tocideator.schemas import AnyNode, Forest
from tocideator.snapshot import export_json, parse_snapshot_text
from tocideator.tree import check_invariants, default_forest
from tocideator.utils.logging_config import configure_logging, get_logger

logger = get_logger(__name__)

_FOREST_ADAPTER = TypeAdapter(list[AnyNode])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tocideator",
        description="Draft, preview and share table-of-contents outlines.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: TOC_IDEATOR_LOG_LEVEL)")
    commands = parser.add_subparsers(dest="command", required=True)

    new = commands.add_parser("new", help="Write a fresh outline snapshot")
    new.add_argument("--title", help="Document title")
    new.add_argument("-o", "--output", default="-", help="Output file ('-' for stdout)")

    markdown = commands.add_parser("markdown", help="Render a snapshot as Markdown headings")
    markdown.add_argument("input", help="Snapshot JSON file ('-' for stdin)")
    markdown.add_argument("-o", "--output", default="-", help="Output file ('-' for stdout)")

    preview = commands.add_parser("preview", help="Print the numbered outline")
    preview.add_argument("input", help="Snapshot JSON file ('-' for stdin)")
    preview.add_argument("--no-numbers", action="store_true", help="Hide section numbers")

    normalize = commands.add_parser("normalize", help="Repair a snapshot into a valid outline")
    normalize.add_argument("input", help="Snapshot JSON file ('-' for stdin)")
    normalize.add_argument("-o", "--output", default="-", help="Output file ('-' for stdout)")

    check = commands.add_parser("check", help="Report outline problems without repairing them")
    check.add_argument("input", help="Snapshot JSON file ('-' for stdin)")

    publish = commands.add_parser("publish", help="Publish a snapshot to the share server")
    publish.add_argument("input", help="Snapshot JSON file ('-' for stdin)")
    publish.add_argument("--endpoint", help="Share endpoint (default: TOC_IDEATOR_PUBLISH_URL)")

    serve = commands.add_parser("serve", help="Run the share server")
    serve.add_argument("--host", default="127.0.0.1", help="Bind host")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        return _dispatch(args)
    except (TocIdeatorError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _dispatch(args: argparse.Namespace) -> int:
    if args.command == "new":
        forest = default_forest()
        if args.title and args.title.strip():
            forest[0].options = [args.title.strip()]
        _write_output(export_json(forest), args.output)
        return 0

    if args.command == "check":
        return _check(_read_input(args.input))

    if args.command == "serve":
        import uvicorn

        uvicorn.run("toc_server.main:app", host=args.host, port=args.port, log_config=None)
        return 0

    forest = parse_snapshot_text(_read_input(args.input))

    if args.command == "markdown":
        _write_output(to_markdown(forest), args.output)
    elif args.command == "preview":
        print(render_preview_text(number_outline(forest), with_numbers=not args.no_numbers))
    elif args.command == "normalize":
        _write_output(export_json(forest), args.output)
    elif args.command == "publish":
        link = asyncio.run(publish_snapshot(forest, endpoint=args.endpoint))
        print(link.url)
    return 0


def _check(text: str) -> int:
    try:
        nodes = extract_node_array(json.loads(text))
    except json.JSONDecodeError as exc:
        print(f"invalid JSON: {exc.msg} (line {exc.lineno})")
        return 1
    try:
        forest: Forest = _FOREST_ADAPTER.validate_python(nodes)
    except PydanticValidationError as exc:
        for error in exc.errors():
            location = ".".join(str(part) for part in error["loc"])
            print(f"{location}: {error['msg']}")
        return 1

    problems = check_invariants(forest)
    for problem in problems:
        print(problem)
    if problems:
        return 1
    print("ok")
    return 0


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(text: str, destination: str) -> None:
    if destination == "-":
        print(text)
        return
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    logger.info("Wrote %s", path)
