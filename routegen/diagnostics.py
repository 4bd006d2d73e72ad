"""
Diagnostics for route templates.

The parameter scanner does not raise on malformed input. Instead it reports
through a sink, which is any callable taking `(span, message)`. DiagnosticCollector is
the sink used by the drivers in this package; SourceMap turns recorded
diagnostics into compiler-style messages pointing at the offending characters.
"""

from __future__ import annotations

import bisect
import enum
import logging
from dataclasses import dataclass
from typing import Iterator, List, Protocol, Tuple

from .span import Span

logger = logging.getLogger(__name__)


class Severity(enum.Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


@dataclass(frozen=True)
class Diagnostic:
    span: Span
    message: str
    severity: Severity = Severity.ERROR

    def to_dict(self) -> dict:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "span": [self.span.lo, self.span.hi],
        }


class DiagnosticSink(Protocol):
    """Receiver of error reports: `sink(span, message)`."""

    def __call__(self, span: Span, message: str) -> None: ...


class DiagnosticCollector:
    """
    Sink that records every report.

    Calling the collector directly records an error, so an instance can be
    passed wherever a DiagnosticSink is expected.
    """

    def __init__(self) -> None:
        self._items: List[Diagnostic] = []

    def __call__(self, span: Span, message: str) -> None:
        self.span_err(span, message)

    def span_err(self, span: Span, message: str) -> None:
        self._push(Diagnostic(span, message, Severity.ERROR))

    def span_warn(self, span: Span, message: str) -> None:
        self._push(Diagnostic(span, message, Severity.WARNING))

    def span_note(self, span: Span, message: str) -> None:
        self._push(Diagnostic(span, message, Severity.NOTE))

    def _push(self, diag: Diagnostic) -> None:
        logger.debug("%s at %r: %s", diag.severity.value, diag.span, diag.message)
        self._items.append(diag)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._items)

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self._items if d.severity is Severity.ERROR]

    @property
    def has_errors(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(list(self._items))


class SourceMap:
    """
    Offset → (line, column) mapping for a source text.

    Lines and columns are 1-based, as in editor and compiler output.
    """

    def __init__(self, text: str, name: str = "<template>"):
        self.text = text
        self.name = name
        self._line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def _check(self, pos: int) -> None:
        if pos < 0 or pos > len(self.text):
            raise ValueError(f"offset {pos} is outside of {self.name} (length {len(self.text)})")

    def line_col(self, pos: int) -> Tuple[int, int]:
        self._check(pos)
        idx = bisect.bisect_right(self._line_starts, pos) - 1
        return idx + 1, pos - self._line_starts[idx] + 1

    def offset(self, line: int, column: int) -> int:
        """Inverse of line_col()."""
        if line < 1 or line > len(self._line_starts):
            raise ValueError(f"line {line} is outside of {self.name}")
        pos = self._line_starts[line - 1] + column - 1
        self._check(pos)
        return pos

    def line_text(self, line: int) -> str:
        """Text of a 1-based line without its line break."""
        start = self._line_starts[line - 1]
        end = self._line_starts[line] - 1 if line < len(self._line_starts) else len(self.text)
        return self.text[start:end].rstrip("\r")

    def render(self, diag: Diagnostic) -> str:
        """
        Formats a diagnostic:

            routes.yaml:3:7: error: malformed parameters
              user: /user/<id
                    ^^^^^^^^^
        """
        line, col = self.line_col(diag.span.lo)
        src = self.line_text(line)
        # Underline stops at the end of the first line for multi-line spans
        width = max(1, min(diag.span.len, len(src) - (col - 1)))
        return (
            f"{self.name}:{line}:{col}: {diag.severity.value}: {diag.message}\n"
            f"  {src}\n"
            f"  {' ' * (col - 1)}{'^' * width}"
        )

    def render_all(self, diagnostics: List[Diagnostic]) -> str:
        return "\n".join(self.render(d) for d in diagnostics)


__all__ = [
    "Severity",
    "Diagnostic",
    "DiagnosticSink",
    "DiagnosticCollector",
    "SourceMap",
]
