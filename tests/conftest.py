import logging
from pathlib import Path
from typing import List

import pytest

from tests.infrastructure.file_utils import write
from tests.infrastructure.project_builders import create_component, create_sprite_item


class CollectingReporter:
    """ErrorReporter that keeps every message for assertions."""

    def __init__(self) -> None:
        self.messages: List[str] = []

    def report_error(self, message: str) -> None:
        self.messages.append(message)


@pytest.fixture
def reporter() -> CollectingReporter:
    return CollectingReporter()


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """Small site: one page, app/deferred/svg components, two sprite icons, a script and an image."""
    root = tmp_path
    write(
        root / "index.html",
        "<html><body>\n{app:{header}}\n{deferred:{map}}\n{svg:{icon-sprite}}\n</body></html>\n",
    )
    create_component(root, "header", "<header>{app:{header}:{logo}}</header>")
    create_component(root, "header", "<a class=\"logo\">Logo</a>", name="logo")
    create_component(root, "map", "<div id=\"map\"></div>", kind="deferred")
    create_sprite_item(root, "arrow")
    create_sprite_item(root, "close", body='<path d="M1 1l22 22"/>')
    write(root / "components" / "app" / "header" / "header.js", "// header\nvar a = 1;\n")
    write(root / "components" / "app" / "header" / "logo.svg", "<svg xmlns=\"http://www.w3.org/2000/svg\"/>\n")
    return root


@pytest.fixture(autouse=True)
def _kickstart_logger_state():
    # setup_logging() of one test must not leak its handler or level into the next
    from kickstart.log import setup_logging

    logger = logging.getLogger("kickstart")
    level, handlers = logger.level, list(logger.handlers)
    yield
    logger.setLevel(level)
    logger.handlers[:] = handlers
    setup_logging._inited = False  # type: ignore[attr-defined]
