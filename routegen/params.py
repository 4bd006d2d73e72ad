"""
Route parameter scanner.

Extracts bracketed parameter declarations from a route path template:

    /user/<id>/posts/<rest..>

`<id>` declares a parameter matching a single path segment, `<rest..>` one
that matches the remainder of the path. Each parameter is produced with the
span of its bracketed token in the original source, so diagnostics raised by
later code generation stages can point at the right characters.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import List, NoReturn, Optional

from .diagnostics import DiagnosticCollector, DiagnosticSink
from .errors import MalformedParamsError
from .span import Span, Spanned, spanned

logger = logging.getLogger(__name__)

MALFORMED_PARAMS = "malformed parameters"

# Suffix marking a parameter that consumes the rest of the path
MANY_MARKER = ".."


class ParamKind(enum.Enum):
    SINGLE = "single"
    MANY = "many"


@dataclass(frozen=True)
class Param:
    """
    A declared route parameter.

    `inner` holds the identifier text without the brackets (and without the
    `..` marker for MANY parameters), spanned over the whole bracketed token.
    """
    kind: ParamKind
    inner: Spanned[str]

    @classmethod
    def single(cls, ident: Spanned[str]) -> Param:
        return cls(ParamKind.SINGLE, ident)

    @classmethod
    def many(cls, ident: Spanned[str]) -> Param:
        return cls(ParamKind.MANY, ident)

    @property
    def ident(self) -> str:
        return self.inner.node

    @property
    def span(self) -> Span:
        return self.inner.span

    @property
    def is_many(self) -> bool:
        return self.kind is ParamKind.MANY

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "ident": self.ident,
            "span": [self.span.lo, self.span.hi],
        }

    def __repr__(self) -> str:
        return f"Param.{self.kind.name}({self.ident!r}, {self.span!r})"


class ParamIter:
    """
    Lazy iterator over the parameters of a route template.

    `span` must cover exactly `string` in the source it was taken from; all
    produced spans are in that source's coordinates. Malformed brackets are
    reported once to `sink` against the whole template span, after which the
    iterator is exhausted. Exhaustion is final: the iterator never rescans.
    A `span` shorter than `string` is a caller bug and raises ValueError.
    """

    def __init__(self, string: str, span: Span, sink: DiagnosticSink):
        self._sink = sink
        self._full_span = span
        # Unconsumed suffix of the template; span.lo is the offset of string[0]
        self._string = string
        self._span = span
        self._done = False

    def __iter__(self) -> ParamIter:
        return self

    def __next__(self) -> Param:
        if self._done:
            raise StopIteration

        start = self._string.find("<")
        # Any '>' counts, including one standing before the '<'
        end = self._string.find(">")
        if start < 0 and end < 0:
            self._done = True
            raise StopIteration

        # Unterminated '<', or a '>' with no '<' in front of it
        if start < 0 or end < 0 or end <= start:
            self._fail()

        full_param = self._string[start + 1:end]
        if full_param.endswith(MANY_MARKER):
            kind = ParamKind.MANY
            ident = full_param[:-len(MANY_MARKER)]
        else:
            kind = ParamKind.SINGLE
            ident = full_param

        param_span = self._span.sub(start, end + 1)

        self._string = self._string[end + 1:]
        self._span = self._span.with_lo(self._span.lo + end + 1)

        return Param(kind, spanned(ident, param_span))

    def _fail(self) -> NoReturn:
        logger.debug("malformed parameters in %r", self._full_span)
        self._done = True
        self._sink(self._full_span, MALFORMED_PARAMS)
        raise StopIteration


def collect_params(
    template: str,
    span: Optional[Span] = None,
    sink: Optional[DiagnosticSink] = None,
) -> List[Param]:
    """
    Scans a template to exhaustion.

    Never raises for malformed input: the caller has to check the sink to
    tell a clean scan from a truncated one.

    Args:
        template: Route path template
        span: Span of the template in its source (defaults to [0, len(template)))
        sink: Error receiver (defaults to a throwaway DiagnosticCollector)
    """
    if span is None:
        span = Span.covering(template)
    if sink is None:
        sink = DiagnosticCollector()
    return list(ParamIter(template, span, sink))


def parse_params(template: str, span: Optional[Span] = None) -> List[Param]:
    """
    Strict variant of collect_params().

    Raises:
        MalformedParamsError: if the template has malformed brackets
    """
    collector = DiagnosticCollector()
    params = collect_params(template, span, collector)
    if collector.has_errors:
        raise MalformedParamsError(template, collector.errors, params)
    return params


__all__ = [
    "MALFORMED_PARAMS",
    "MANY_MARKER",
    "ParamKind",
    "Param",
    "ParamIter",
    "collect_params",
    "parse_params",
]
