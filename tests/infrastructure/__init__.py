"""
Shared test infrastructure.

Modules:
- file_utils: creating files and directories
- cli_utils: running the CLI in a subprocess
- project_builders: small kickstart projects on disk
"""

from .file_utils import write, write_bytes
from .cli_utils import run_cli, jload
from .project_builders import (
    create_component,
    create_config,
    create_page,
    create_png,
    create_sprite_item,
    make_ctx,
)

__all__ = [
    # File utilities
    "write", "write_bytes",

    # CLI utilities
    "run_cli", "jload",

    # Project builders
    "create_component", "create_config", "create_page", "create_png",
    "create_sprite_item", "make_ctx",
]
