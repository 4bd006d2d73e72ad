from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from .diagnostics import DiagnosticCollector, SourceMap
from .errors import RouteGenUserError
from .params import collect_params
from .routes import check_routes
from .span import Span
from .version import tool_version

_LOG = logging.getLogger("routegen")


def _setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug or os.environ.get("ROUTEGEN_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="routegen",
        description="Route template parameter scanner",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument("--debug", action="store_true", help="debug logging to stderr (same as ROUTEGEN_DEBUG=1)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_scan = sub.add_parser("scan", help="parameters of a single template (JSON)")
    sp_scan.add_argument("template", help="route path template, e.g. '/user/<id>/<rest..>'")
    sp_scan.add_argument(
        "--offset",
        type=int,
        default=0,
        metavar="N",
        help="source offset of the template's first character",
    )

    sp_check = sub.add_parser("check", help="scan every route of a YAML route file (JSON)")
    sp_check.add_argument("file", type=Path, help="YAML mapping of route name to template")

    return p


def _scan(template: str, offset: int) -> int:
    if offset < 0:
        raise ValueError(f"--offset must not be negative: {offset}")
    # Pad the source so that rendered diagnostics keep their columns
    source = SourceMap(" " * offset + template)
    span = Span.covering(template).shift(offset)
    collector = DiagnosticCollector()
    params = collect_params(template, span, collector)

    data: Dict[str, Any] = {
        "template": template,
        "params": [p.to_dict() for p in params],
        "diagnostics": [d.to_dict() for d in collector.diagnostics],
    }
    if collector.has_errors:
        sys.stderr.write(source.render_all(collector.diagnostics) + "\n")
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")
    return 1 if collector.has_errors else 0


def _check(path: Path) -> int:
    report = check_routes(path)
    if report.diagnostics:
        sys.stderr.write(report.source.render_all(report.diagnostics) + "\n")
    sys.stdout.write(json.dumps(report.to_dict(), ensure_ascii=False, indent=2) + "\n")
    return 0 if report.ok else 1


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(bool(ns.debug))

    try:
        if ns.cmd == "scan":
            return _scan(ns.template, ns.offset)

        if ns.cmd == "check":
            return _check(ns.file)

    except RouteGenUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2
    except ValueError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
