"""
CLI (Command Line Interface).

    runningorder dump [--url URL]            fetch the page, print JSend JSON
    runningorder parse <file.html>           parse a saved page, print JSend JSON
    runningorder show [<file.html>]          print the running order as tables
    runningorder clashes [<file.html>] [--band NAME ...]
    runningorder export [<file.html>] --out <file.ics>
    runningorder serve [--host H] [--port P] [--cors]

Commands that take an optional HTML file fetch the page when it is omitted.
All commands accept --year (default: current year) and --tz.
"""

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path
from zoneinfo import ZoneInfoNotFoundError

import uvicorn
from rich import box
from rich.console import Console
from rich.table import Table

from runningorder.clashes import find_clashes, select_events
from runningorder.errors import ParseError
from runningorder.export_ics import export_running_order_to_ics
from runningorder.logging_utils import configure_logging
from runningorder.model import RunningOrder
from runningorder.parse import parse_running_order
from runningorder.scrape import FetchError, dump, fetch_running_order, jsend_error, jsend_success, to_json
from runningorder.server import create_app
from runningorder.settings import current_year, load_timezone, running_order_url, timezone_name


console = Console()


def _fmt_time(timestamp: int, tz) -> str:
    return datetime.fromtimestamp(timestamp, tz).strftime("%a %H:%M")


def _load(args: argparse.Namespace, tz) -> RunningOrder:
    """
    Parse the file given on the command line, or fetch the page.
    """
    if getattr(args, "file", None):
        html = Path(args.file).read_bytes()
        return parse_running_order(args.year, html, tz)
    return fetch_running_order(args.year, args.url, tz)


def _cmd_dump(args: argparse.Namespace, tz) -> int:
    try:
        dump(args.year, sys.stdout, args.url, tz)
    except (FetchError, ParseError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


def _cmd_parse(args: argparse.Namespace, tz) -> int:
    try:
        html = Path(args.file).read_bytes()
    except OSError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    try:
        ro = parse_running_order(args.year, html, tz)
    except ParseError as exc:
        print(to_json(jsend_error(str(exc), 500)))
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    print(to_json(jsend_success(ro)))
    return 0


def _cmd_show(args: argparse.Namespace, tz) -> int:
    ro = _load(args, tz)

    for day in ro.days:
        for stage in day.stages:
            table = Table(title=f"{day.label}  {stage.label}", box=box.SIMPLE_HEAVY)
            table.add_column("Time")
            table.add_column("Band")
            table.add_column("URL", overflow="fold")
            for event in stage.events:
                table.add_row(event.time, event.label, event.url)
            console.print(table)

    return 0


def _cmd_clashes(args: argparse.Namespace, tz) -> int:
    ro = _load(args, tz)
    clashes = find_clashes(select_events(ro, args.band or ()))

    if not clashes:
        print("No clashes found.")
        return 0

    print(f"Clashes found: {len(clashes)}")
    for a, b in clashes:
        print(
            f"- {_fmt_time(a.timestamps.start, tz)}-{_fmt_time(a.timestamps.end, tz)} {a.label}"
            f"  <->  {_fmt_time(b.timestamps.start, tz)}-{_fmt_time(b.timestamps.end, tz)} {b.label}"
        )
    return 0


def _cmd_serve(args: argparse.Namespace, tz) -> int:
    app = create_app(args.url, args.year, tz, cors=args.cors)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _cmd_export(args: argparse.Namespace, tz) -> int:
    out_path = (args.out or "").strip()
    if not out_path:
        print("Please provide output .ics path.")
        return 1

    ro = _load(args, tz)
    n = export_running_order_to_ics(ro, out_path)
    print(f"Exported {n} events to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--year", "-y", type=int, default=None, help="Year of the festival (default: current year)")
    common.add_argument("--tz", type=str, default=timezone_name(), help="Festival timezone (IANA name)")
    common.add_argument("--url", type=str, default=running_order_url(), help="Running order page")

    parser = argparse.ArgumentParser(prog="runningorder", description="Festival running order as JSON")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("dump", parents=[common], help="Fetch the running order and print JSend JSON")

    p_parse = sub.add_parser("parse", parents=[common], help="Parse a saved running order page")
    p_parse.add_argument("file", type=str, help="HTML file")

    p_show = sub.add_parser("show", parents=[common], help="Print the running order")
    p_show.add_argument("file", type=str, nargs="?", help="HTML file (fetched if omitted)")

    p_clashes = sub.add_parser("clashes", parents=[common], help="Show overlapping events")
    p_clashes.add_argument("file", type=str, nargs="?", help="HTML file (fetched if omitted)")
    p_clashes.add_argument("--band", "-b", action="append", help="Only consider this band (repeatable)")

    p_export = sub.add_parser("export", parents=[common], help="Export scheduled events to .ics")
    p_export.add_argument("file", type=str, nargs="?", help="HTML file (fetched if omitted)")
    p_export.add_argument("--out", "-o", type=str, required=True, help="Output file path (e.g. md.ics)")

    p_serve = sub.add_parser("serve", parents=[common], help="Serve the running order as JSend JSON over HTTP")
    p_serve.add_argument("--host", type=str, default="127.0.0.1", help="Address to listen on")
    p_serve.add_argument("--port", "-p", type=int, default=8000, help="Port to listen on")
    p_serve.add_argument("--cors", action="store_true", help="Send Access-Control-Allow-Origin: *")

    return parser


COMMANDS = {
    "dump": _cmd_dump,
    "parse": _cmd_parse,
    "show": _cmd_show,
    "clashes": _cmd_clashes,
    "export": _cmd_export,
    "serve": _cmd_serve,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()

    # The server resolves the year per request.
    if args.year is None and args.command != "serve":
        args.year = current_year()

    try:
        tz = load_timezone(args.tz)
    except (ZoneInfoNotFoundError, ValueError):
        print(f"Unknown timezone: {args.tz}", file=sys.stderr)
        raise SystemExit(2)

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)

    try:
        raise SystemExit(handler(args, tz))
    except (FetchError, ParseError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1)
