from __future__ import annotations

from importlib import metadata


def tool_version() -> str:
    """
    Installed package version, "0.0.0" when running from a source checkout.
    Kept free of package imports so that any module can use it.
    """
    try:
        return metadata.version("kickstart-assets")
    except metadata.PackageNotFoundError:
        return "0.0.0"

__all__ = ["tool_version"]
