"""
Combine single SVG icons into one inline sprite.

Every ``<source_dir>/<name>.svg`` becomes ``<symbol id="<name>">`` of the
sprite (viewBox kept); their ``<defs>`` are hoisted into one shared block.
The sprite is written below the components tree so html-replace can inline
it with ``{svg:{icon-sprite}}``.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import List, Optional, Tuple

from .base import TaskContext
from ..config.model import SvgSpriteCfg
from ..config.paths import join_parts
from ..errors import KickstartUserError
from ..utils import read_file_text, slugify, write_file_text

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

_COPIED_ATTRS = ("viewBox", "preserveAspectRatio")


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


def _qualify(el: ET.Element) -> None:
    """Put elements written without xmlns into the SVG namespace."""
    for node in el.iter():
        if isinstance(node.tag, str) and not node.tag.startswith("{"):
            node.tag = _q(node.tag)


class SvgSprite:
    """Accumulates icons; ``to_string()`` renders the sprite document."""

    def __init__(self) -> None:
        self.defs = ET.Element(_q("defs"))
        self.symbols: List[ET.Element] = []

    @property
    def ids(self) -> List[str]:
        return [s.get("id", "") for s in self.symbols]

    def add(self, symbol_id: str, svg_text: str) -> None:
        """Raises ValueError for documents that are not SVG."""
        try:
            src = ET.fromstring(svg_text)
        except ET.ParseError as e:
            raise ValueError(f"invalid SVG markup: {e}") from e
        _qualify(src)
        if src.tag != _q("svg"):
            raise ValueError(f"root element is not <svg>: {src.tag}")
        if symbol_id in self.ids:
            raise ValueError(f"duplicate symbol id '{symbol_id}'")

        symbol = ET.Element(_q("symbol"), {"id": symbol_id})
        for attr in _COPIED_ATTRS:
            if attr in src.attrib:
                symbol.set(attr, src.attrib[attr])

        for child in list(src):
            if child.tag == _q("defs"):
                self.defs.extend(list(child))
            else:
                symbol.append(child)
        self.symbols.append(symbol)

    def to_string(self) -> str:
        root = ET.Element(_q("svg"))
        if len(self.defs):
            root.append(self.defs)
        root.extend(self.symbols)
        return ET.tostring(root, encoding="unicode")


def sprite_destination(working_dir: Path, cfg: SvgSpriteCfg) -> Path:
    """Target file; a destination without '.svg' is a directory named after the source."""
    if not cfg.destination_file or not cfg.source_dir:
        raise KickstartUserError("svg_sprite entries need non-empty source_dir and destination_file")
    last = cfg.destination_file[-1]
    if last.endswith(".svg"):
        return join_parts(working_dir, cfg.destination_file)
    return join_parts(working_dir, cfg.destination_file) / f"{slugify(cfg.source_dir[-1])}.svg"


def collect_items(source_dir: Path) -> List[Tuple[str, Path]]:
    return [
        (p.stem, p)
        for p in sorted(source_dir.iterdir())
        if p.is_file() and p.suffix.lower() == ".svg"
    ]


def svg_sprite(ctx: TaskContext) -> None:
    configs = ctx.cfg.build.statics.svg_sprite
    if not configs:
        logger.info("\tNo svg_sprite configuration, nothing to do.")
        return

    for cfg in configs:
        build_one(ctx, cfg)


def build_one(ctx: TaskContext, cfg: SvgSpriteCfg) -> Optional[Path]:
    destination = sprite_destination(ctx.working_dir, cfg)
    source_dir = join_parts(ctx.working_dir, cfg.source_dir)

    if not source_dir.is_dir():
        logger.warning("\tThe path %s doesn't exist.", ctx.rel(source_dir))
        return None

    items = collect_items(source_dir)
    if not items:
        logger.warning("\tLooks like %s is empty.", ctx.rel(source_dir))
        return None

    sprite = SvgSprite()
    for symbol_id, path in items:
        ctx.file_event("proceed", path)
        try:
            sprite.add(symbol_id, read_file_text(path))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            ctx.file_error(path, e)

    if not sprite.symbols:
        logger.warning("\tNo usable icon in %s, %s was not written.", ctx.rel(source_dir), ctx.rel(destination))
        return None

    write_file_text(destination, sprite.to_string())
    ctx.file_event("write", destination)
    return destination
