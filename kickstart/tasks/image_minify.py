"""
Re-encode the raster images of the build output with Pillow (prod only).

JPEG: optimized + progressive at the configured quality; PNG/GIF: lossless
optimize; WebP: configured quality. A re-encoded file only replaces the
original when it is smaller.
"""

from __future__ import annotations

import io
from pathlib import Path
from typing import Dict, List

from PIL import Image, UnidentifiedImageError

from .base import TaskContext
from ..config.model import ImageMinifyCfg
from ..utils import iter_dirs_recursive

_FORMATS: Dict[str, str] = {
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
    "webp": "WEBP",
}


def save_options(fmt: str, cfg: ImageMinifyCfg) -> Dict[str, object]:
    if fmt == "JPEG":
        return {"quality": cfg.jpeg_quality, "optimize": True, "progressive": True}
    if fmt == "PNG":
        return {"optimize": cfg.png_optimize}
    if fmt == "GIF":
        return {"optimize": True, "save_all": True}
    if fmt == "WEBP":
        return {"quality": cfg.webp_quality, "method": 6}
    return {}


def reencode(path: Path, cfg: ImageMinifyCfg) -> bytes:
    """Re-encoded bytes of an image in its own format."""
    fmt = _FORMATS[path.suffix.lower().lstrip(".")]
    with Image.open(path) as im:
        im.load()
        if fmt == "JPEG" and im.mode not in ("RGB", "L", "CMYK"):
            im = im.convert("RGB")
        buf = io.BytesIO()
        im.save(buf, fmt, **save_options(fmt, cfg))
    return buf.getvalue()


def optimize_image(path: Path, cfg: ImageMinifyCfg) -> bool:
    """True when the file was replaced by a smaller encoding."""
    original = path.stat().st_size
    data = reencode(path, cfg)
    if len(data) >= original:
        return False
    path.write_bytes(data)
    return True


def collect_images(img_dir: Path, cfg: ImageMinifyCfg) -> List[Path]:
    wanted = {e.lower().lstrip(".") for e in cfg.extensions} & set(_FORMATS)
    out: List[Path] = []
    for d in iter_dirs_recursive(img_dir):
        out.extend(
            p for p in sorted(d.iterdir())
            if p.is_file() and p.suffix.lower().lstrip(".") in wanted
        )
    return out


def minify_images(ctx: TaskContext) -> None:
    if ctx.is_dev:
        ctx.skip("Image minification is disabled in dev mode.")
        return

    img_dir = ctx.build_subdir(ctx.cfg.dir_assets_img)
    if not img_dir.is_dir():
        ctx.skip(f"{ctx.rel(img_dir)} doesn't exist.")
        return

    cfg = ctx.cfg.build.statics.image_minify
    for path in collect_images(img_dir, cfg):
        ctx.file_event("proceed", path)
        try:
            replaced = optimize_image(path, cfg)
        except (OSError, UnidentifiedImageError, ValueError) as e:
            ctx.file_error(path, e)
            continue
        if replaced:
            ctx.file_event("write", path)
