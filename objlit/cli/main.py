# objlit/cli/main.py
import argparse
import sys as _sys
from typing import Optional, Sequence

from ..logconf import configure_logger
from .cmd_render import add_render_subparser
from ..errors import ObjlitError


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="objlit")
    subparsers = parser.add_subparsers(dest="command", required=True)

    add_render_subparser(subparsers)

    args = parser.parse_args(argv)
    try:
        args.handler(args)
    except ObjlitError as exc:
        logger = configure_logger(name="objlit")
        logger.error("%s", exc)
        _sys.exit(1)


if __name__ == "__main__":
    main()
