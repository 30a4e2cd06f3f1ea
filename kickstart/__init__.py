"""
Kickstart: static-site asset build toolkit.

HTML templates get their ``{app:{...}}`` includes inlined from the
``components`` tree, static assets are copied, compiled and minified
into the build directory by small independent tasks.
"""

from .inline import TemplateInliner
from .version import tool_version

__all__ = ["TemplateInliner", "tool_version"]
