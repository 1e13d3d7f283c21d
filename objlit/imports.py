# objlit/imports.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union, Optional
import os
import sys

Pathish = Union[str, os.PathLike[str], Path]


def detect_project_root(start: Optional[Path] = None) -> Path:
    """
    Best-effort project root detection:
      - From `start` upward: directory containing '.objlit' or 'pyproject.toml'
      - Fallback: CWD
    """
    base = (start or Path.cwd()).resolve()
    for p in [base] + list(base.parents):
        if (p / ".objlit").exists() or (p / "pyproject.toml").exists():
            return p
    return Path.cwd().resolve()


def compute_import_roots(
    additional: Iterable[Pathish] | None = None,
    project_root: Optional[Path] = None,
) -> List[str]:
    """
    Build ordered import roots to prepend to sys.path:
      1) project root (explicit or auto-detected)
      2) additional paths (relative to project root if not absolute)
    Return absolute, de-duplicated strings of existing directories.
    """
    proj_root = project_root or detect_project_root()
    roots: list[Path] = [proj_root]
    for raw in (additional or []):
        p = Path(raw)
        roots.append(p if p.is_absolute() else (proj_root / p))

    seen: set[str] = set()
    out: list[str] = []
    for rr in roots:
        rr = rr.resolve()
        if not rr.is_dir():
            continue
        s = rr.as_posix()
        if s not in seen:
            seen.add(s)
            out.append(s)
    return out


def prepend_sys_path(roots: Iterable[Pathish]) -> None:
    """
    Prepend sys.path with the given roots, preserving input order and avoiding
    duplicates.
    """
    normed: list[str] = []
    for r in roots:
        s = Path(r).resolve().as_posix()
        if s not in normed:
            normed.append(s)

    for s in reversed(normed):
        if s not in sys.path:
            sys.path.insert(0, s)
