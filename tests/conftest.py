import textwrap
from pathlib import Path

import pytest

from routegen.diagnostics import DiagnosticCollector

from tests.infrastructure.file_utils import write


@pytest.fixture
def collector() -> DiagnosticCollector:
    return DiagnosticCollector()


@pytest.fixture
def routes_file(tmp_path: Path) -> Path:
    """Route file with plain, quoted and malformed templates."""
    return write(
        tmp_path / "routes.yaml",
        textwrap.dedent("""
        # application routes
        index: /
        user: /user/<id>
        posts: "/user/<id>/posts/<rest..>"
        files: '/static/<path..>'
        broken: /a/<id/<b>x<c
        """).lstrip(),
    )
