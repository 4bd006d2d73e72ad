"""
Route files.

A route file is a YAML mapping of route names to path templates:

    user: /user/<id>
    files: "/static/<path..>"

Every template is scanned with spans in the coordinates of the file itself,
so diagnostics point into the route file rather than into a detached string.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.comments import CommentedMap
from ruamel.yaml.error import YAMLError
from ruamel.yaml.scalarstring import (
    DoubleQuotedScalarString,
    FoldedScalarString,
    LiteralScalarString,
    SingleQuotedScalarString,
)

from .diagnostics import Diagnostic, DiagnosticCollector, Severity, SourceMap
from .errors import RoutesConfigError
from .params import Param, ParamIter
from .span import Span

logger = logging.getLogger(__name__)

_YAML_RT = YAML(typ="rt")
_YAML_RT.preserve_quotes = True       # quoted scalars keep their type, needed to locate their text

APPROXIMATE_SPANS = "template differs from its source text, spans are approximate"


@dataclass(frozen=True)
class RouteDecl:
    name: str
    template: str
    span: Span      # template text inside the route file
    # False when the loaded value differs from its source text (escapes, line folding)
    exact: bool = True


@dataclass(frozen=True)
class RouteParams:
    route: RouteDecl
    params: List[Param]


@dataclass
class RoutesReport:
    source: SourceMap
    routes: List[RouteParams] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(d.severity is Severity.ERROR for d in self.diagnostics)

    def to_dict(self) -> dict:
        return {
            "file": self.source.name,
            "ok": self.ok,
            "routes": [
                {
                    "name": rp.route.name,
                    "template": rp.route.template,
                    "params": [p.to_dict() for p in rp.params],
                }
                for rp in self.routes
            ],
            "diagnostics": [self._diag_dict(d) for d in self.diagnostics],
        }

    def _diag_dict(self, diag: Diagnostic) -> dict:
        line, column = self.source.line_col(diag.span.lo)
        return {**diag.to_dict(), "line": line, "column": column}


def load_routes(path: Path) -> Tuple[SourceMap, List[RouteDecl]]:
    """
    Reads route declarations from a YAML file.

    Raises:
        RoutesConfigError: unreadable file, invalid YAML or unexpected shape
    """
    if not path.is_file():
        raise RoutesConfigError(f"Route file not found: {path}")
    # utf-8-sig drops a BOM, which ruamel does not count as a column
    text = path.read_text(encoding="utf-8-sig")
    source = SourceMap(text, name=str(path))

    try:
        data = _YAML_RT.load(text)
    except YAMLError as e:
        raise RoutesConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return source, []
    if not isinstance(data, CommentedMap):
        raise RoutesConfigError(f"Route file must be a mapping of name → template: {path}")

    routes: List[RouteDecl] = []
    for name, template in data.items():
        if not isinstance(template, str):
            raise RoutesConfigError(
                f"{path}: route '{name}' must be a string template, got {type(template).__name__}"
            )
        if isinstance(template, (LiteralScalarString, FoldedScalarString)):
            raise RoutesConfigError(
                f"{path}: route '{name}' must be a plain or quoted scalar, not a block scalar"
            )
        line, col = data.lc.value(name)
        lo = source.offset(line + 1, col + 1)
        # The scalar mark points at the opening quote
        if isinstance(template, (DoubleQuotedScalarString, SingleQuotedScalarString)):
            lo += 1
        exact = source.text[lo:lo + len(template)] == template
        routes.append(RouteDecl(str(name), str(template), Span(lo, lo + len(template)), exact))

    logger.debug("Loaded %d route(s) from %s", len(routes), path)
    return source, routes


def check_routes(path: Path) -> RoutesReport:
    """
    Scans every template of a route file.

    Malformed templates do not stop the check: their valid leading parameters
    are kept and the error ends up in the report's diagnostics.
    """
    source, decls = load_routes(path)
    collector = DiagnosticCollector()
    report = RoutesReport(source=source)
    for decl in decls:
        if not decl.exact:
            collector.span_warn(decl.span, APPROXIMATE_SPANS)
        params = list(ParamIter(decl.template, decl.span, collector))
        report.routes.append(RouteParams(decl, params))
    report.diagnostics = collector.diagnostics
    if not report.ok:
        logger.info("%s: %d error(s)", path, len(collector.errors))
    return report


__all__ = ["APPROXIMATE_SPANS", "RouteDecl", "RouteParams", "RoutesReport", "load_routes", "check_routes"]
