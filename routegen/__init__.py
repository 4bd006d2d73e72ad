"""
Route template parameter scanner.

Finds `<name>` and `<name..>` declarations in route path templates and
reports them with exact source spans.
"""

from __future__ import annotations

from .diagnostics import Diagnostic, DiagnosticCollector, DiagnosticSink, Severity, SourceMap
from .errors import MalformedParamsError, RouteGenUserError, RoutesConfigError
from .params import MALFORMED_PARAMS, Param, ParamIter, ParamKind, collect_params, parse_params
from .span import Span, Spanned, spanned

__all__ = [
    "Span",
    "Spanned",
    "spanned",
    "Param",
    "ParamKind",
    "ParamIter",
    "MALFORMED_PARAMS",
    "collect_params",
    "parse_params",
    "Diagnostic",
    "DiagnosticCollector",
    "DiagnosticSink",
    "Severity",
    "SourceMap",
    "RouteGenUserError",
    "MalformedParamsError",
    "RoutesConfigError",
]
