from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config import MODES, apply_overrides, load_config
from .errors import KickstartUserError
from .inline import TemplateInliner
from .jsonic import dumps as jdumps
from .log import setup_logging
from .report import BuildReport
from .tasks import BUILD_SEQUENCE, TaskContext, run_build, run_named, task_names
from .version import tool_version


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="kickstart",
        description="Static-site asset build tasks",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Arguments shared by every task command
    def add_common(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--mode",
            choices=list(MODES),
            default="dev",
            help="build mode; minifiers only run in prod",
        )
        sp.add_argument(
            "--config",
            metavar="FILE",
            help="configuration file (default: ./kickstart.yaml)",
        )
        sp.add_argument("--dir-build", metavar="DIR", help="override dir_build of the configuration")
        sp.add_argument("--dir-working", metavar="DIR", help="override dir_working of the configuration")
        sp.add_argument(
            "--json",
            action="store_true",
            help="print a JSON run report to stdout",
        )

    for name in task_names():
        add_common(sub.add_parser(name, help=f"run the {name} task"))

    sp_build = sub.add_parser("build", help=f"run {', '.join(BUILD_SEQUENCE)}")
    add_common(sp_build)

    sp_resolve = sub.add_parser("resolve", help="print a template with its placeholders inlined")
    sp_resolve.add_argument("template", help="HTML file to resolve")
    sp_resolve.add_argument(
        "--components-dir",
        default=None,
        help="components folder relative to the working directory",
    )
    sp_resolve.add_argument("--dir-working", metavar="DIR", help="working directory (default: .)")

    return p


def _context(ns: argparse.Namespace) -> TaskContext:
    root = Path.cwd()
    cfg_file = Path(ns.config) if getattr(ns, "config", None) else None
    cfg = load_config(root, cfg_file)
    apply_overrides(cfg, dir_build=ns.dir_build, dir_working=ns.dir_working)
    setup_logging(cfg.console_for(ns.mode))
    return TaskContext(root=root, cfg=cfg, mode=ns.mode)


def _resolve(ns: argparse.Namespace) -> int:
    root = Path.cwd()
    cfg = load_config(root)
    apply_overrides(cfg, dir_working=ns.dir_working)
    setup_logging(cfg.console_for("dev"))
    inliner = TemplateInliner(
        root / cfg.dir_working,
        components_dir=ns.components_dir or cfg.components_dir,
    )
    template = Path(ns.template)
    if not template.is_file():
        raise KickstartUserError(f"Template not found: {template}")
    try:
        text = inliner.resolve_file(template)
    except UnicodeDecodeError as e:
        raise KickstartUserError(f"Template is not valid UTF-8: {template} ({e})") from e
    sys.stdout.write(text)
    return 0


def _finish(report: BuildReport, as_json: bool) -> int:
    if as_json:
        sys.stdout.write(jdumps(report.model_dump(mode="json")))
    return 1 if report.failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "resolve":
            return _resolve(ns)

        ctx = _context(ns)
        if ns.cmd == "build":
            return _finish(run_build(ctx), ns.json)
        return _finish(run_named([ns.cmd], ctx), ns.json)

    except KickstartUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
