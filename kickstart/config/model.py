from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional, Tuple, Union

Mode = Literal["dev", "prod"]
MODES: Tuple[str, ...] = ("dev", "prod")


@dataclass
class ConsoleCfg:
    verbose: bool = True
    quiet: bool = False


def _default_console() -> Dict[str, ConsoleCfg]:
    return {
        "dev": ConsoleCfg(verbose=True, quiet=False),
        "prod": ConsoleCfg(verbose=False, quiet=False),
    }


# ---- css / js / html ----

@dataclass
class SassCfg:
    # regex suffixes of top-level .scss files that must not be compiled
    files_exclude: List[str] = field(default_factory=list)
    output_style: Literal["nested", "expanded", "compact", "compressed"] = "expanded"
    include_paths: List[str] = field(default_factory=list)


@dataclass
class MinifyCfg:
    keep_bang_comments: bool = True


@dataclass
class CssCfg:
    sass: SassCfg = field(default_factory=SassCfg)
    minify: MinifyCfg = field(default_factory=MinifyCfg)


@dataclass
class JsCfg:
    minify: MinifyCfg = field(default_factory=MinifyCfg)


@dataclass
class HtmlMinifyCfg:
    remove_comments: bool = True
    remove_empty_space: bool = True
    reduce_boolean_attributes: bool = False
    remove_optional_attribute_quotes: bool = False


@dataclass
class HtmlCfg:
    minify: HtmlMinifyCfg = field(default_factory=HtmlMinifyCfg)


# ---- statics ----

@dataclass
class CopyOptions:
    """
    One copy rule. Paths are relative to the working directory;
    source_dir defaults to the working directory itself, destination_dir
    to the build directory.
    """
    mode: Union[Mode, List[Mode]] = field(default_factory=lambda: list(MODES))
    source_dir: Optional[str] = None
    destination_dir: Optional[str] = None
    # copy every match straight into destination_dir (drop sub-directories)
    flatten: bool = True
    ignore: List[str] = field(default_factory=list)

    def modes(self) -> List[str]:
        return [self.mode] if isinstance(self.mode, str) else list(self.mode)


@dataclass
class CopyEntry:
    options: CopyOptions = field(default_factory=CopyOptions)
    files: List[str] = field(default_factory=lambda: ["*"])


def _default_copy() -> List[CopyEntry]:
    return [
        CopyEntry(
            options=CopyOptions(
                source_dir="components/app",
                destination_dir="build/assets/img",
                flatten=True,
                ignore=["_svg/", "_sprite-items/"],
            ),
            files=["**/*.jpg", "**/*.png", "**/*.gif", "**/*.ico", "**/*.webp", "**/*.svg"],
        ),
        CopyEntry(
            options=CopyOptions(
                source_dir="components/app",
                destination_dir="build/assets/js",
                flatten=False,
            ),
            files=["**/*.js"],
        ),
    ]


@dataclass
class SvgSpriteCfg:
    source_dir: List[str]
    # a last segment without ".svg" is treated as a directory
    destination_file: List[str]


def _default_svg_sprite() -> List[SvgSpriteCfg]:
    return [
        SvgSpriteCfg(
            source_dir=["components", "app", "_sprite-items", "icons"],
            destination_file=["components", "app", "_svg", "icon-sprite", "icon-sprite.svg"],
        )
    ]


@dataclass
class ImageMinifyCfg:
    # svg is left alone: re-encoding breaks hand-tuned markup
    extensions: List[str] = field(default_factory=lambda: ["jpg", "png", "gif", "webp"])
    jpeg_quality: int = 82
    webp_quality: int = 80
    png_optimize: bool = True


@dataclass
class StaticsCfg:
    copy: List[CopyEntry] = field(default_factory=_default_copy)
    svg_sprite: List[SvgSpriteCfg] = field(default_factory=_default_svg_sprite)
    image_minify: ImageMinifyCfg = field(default_factory=ImageMinifyCfg)


@dataclass
class BuildCfg:
    css: CssCfg = field(default_factory=CssCfg)
    html: HtmlCfg = field(default_factory=HtmlCfg)
    js: JsCfg = field(default_factory=JsCfg)
    statics: StaticsCfg = field(default_factory=StaticsCfg)


@dataclass
class Config:
    dir_build: str = "build"
    dir_working: str = "./"
    components_dir: str = "components"
    dir_assets_css: List[str] = field(default_factory=lambda: ["assets", "css"])
    dir_assets_js: List[str] = field(default_factory=lambda: ["assets", "js"])
    dir_assets_img: List[str] = field(default_factory=lambda: ["assets", "img"])
    console: Dict[str, ConsoleCfg] = field(default_factory=_default_console)
    build: BuildCfg = field(default_factory=BuildCfg)

    def console_for(self, mode: str) -> ConsoleCfg:
        return self.console.get(mode) or ConsoleCfg()
