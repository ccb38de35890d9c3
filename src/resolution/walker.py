"""Candidate node_modules directories for bare package lookups."""

from __future__ import annotations

import os
from typing import List, Optional

from constants import Constants

from .paths import join_posix, path_to_posix


def _is_within(path: str, root: str) -> bool:
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # different drives
        return False


def node_module_paths(start: str, project_root: Optional[str] = None) -> List[str]:
    """Return ``<ancestor>/node_modules`` for every ancestor of ``start``.

    The list is nearest first and ends at the filesystem root. Ancestors that
    are themselves named ``node_modules`` contribute nothing, unless
    ``start`` lies inside ``project_root``. Nothing is checked for existence.
    """
    current = os.path.abspath(start)
    keep_nested = project_root is not None and _is_within(current, os.path.abspath(project_root))

    candidates: List[str] = []
    seen = set()
    while True:
        if keep_nested or os.path.basename(current) != Constants.NODE_MODULES_DIR:
            candidate = join_posix(current, Constants.NODE_MODULES_DIR)
            if candidate not in seen:
                seen.add(candidate)
                candidates.append(candidate)
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return candidates


def split_package_specifier(specifier: str):
    """Split a bare specifier into ``(package_name, subpath)``.

    ``subpath`` is ``.`` for the package root and ``./rest`` otherwise.
    Returns None when a scoped specifier has no package name.
    """
    specifier = path_to_posix(specifier)
    parts = specifier.split("/")
    if specifier.startswith("@"):
        if len(parts) < 2 or not parts[0][1:] or not parts[1]:
            return None
        name = "/".join(parts[:2])
        rest = parts[2:]
    else:
        if not parts[0]:
            return None
        name = parts[0]
        rest = parts[1:]
    subpath = "./" + "/".join(rest) if rest and any(rest) else "."
    return name, subpath
