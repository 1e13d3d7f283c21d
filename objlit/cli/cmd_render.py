# objlit/cli/cmd_render.py
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ..config import apply_config_from_default_file, generator_from_config
from ..imports import compute_import_roots, detect_project_root, prepend_sys_path
from ..logconf import configure_logger
from ..rt import resolve_attr


def _handle(args: argparse.Namespace) -> None:
    log = configure_logger(
        level=logging.DEBUG if getattr(args, "verbose", False) else logging.WARNING,
        name="objlit.cli.render",
    )
    apply_config_from_default_file("render", args, start=Path.cwd())

    roots = compute_import_roots(
        getattr(args, "additional_sys_path", None), project_root=detect_project_root()
    )
    prepend_sys_path(roots)
    log.debug("import roots: %s", roots)

    obj = resolve_attr(args.target)
    if getattr(args, "call", False):
        obj = obj()

    text = generator_from_config(vars(args)).render(obj)
    if getattr(args, "header", False):
        template = getattr(args, "header_text", None) or "// generated by objlit from {target}"
        text = template.format(target=args.target) + "\n" + text

    output = getattr(args, "output", None)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n", encoding="utf-8")
        log.info("wrote %s", out_path)
    else:
        sys.stdout.write(text + "\n")


def add_render_subparser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser("render", help="print an object as a literal expression")
    p.add_argument("target", help="object to render: 'pkg.mod:NAME' or 'pkg.mod.NAME'")
    p.add_argument("--call", action="store_true", default=argparse.SUPPRESS,
                   help="call the target with no arguments and render the result")
    p.add_argument("-o", "--output", type=Path, default=argparse.SUPPRESS,
                   help="write to this file instead of stdout")
    p.add_argument("--header", action=argparse.BooleanOptionalAction, default=argparse.SUPPRESS,
                   help="precede the output with a provenance comment line")
    p.add_argument("--names", choices=("short", "qualified"), default=argparse.SUPPRESS,
                   help="how type names are written")
    p.add_argument("--indent", type=int, default=argparse.SUPPRESS,
                   help="spaces per clause indentation level")
    p.add_argument("--builder-suffix", dest="builder_suffix", default=argparse.SUPPRESS,
                   help="naming suffix of companion builder types")
    p.add_argument("--additional-sys-path", dest="additional_sys_path", nargs="*",
                   default=argparse.SUPPRESS,
                   help="extra import roots; relative paths are resolved under the project root")
    p.add_argument("-v", "--verbose", action="store_true", default=False)
    p.set_defaults(handler=_handle)
