"""Module file search.

An ``import "name.lox";`` statement names a file, not a path relative to
the importer. The file is searched for anywhere below the module root
(``LOXPATH``, else the working directory). Build-output and hidden
directories are skipped. Exactly one match is required.


File: modules.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import os
from pathlib import Path, PurePath

from loxlang.exceptions import ModuleResolutionError

EXCLUDED_DIRS = frozenset({"target", "build", "dist", "__pycache__"})


def module_root(override: str | os.PathLike | None = None) -> Path:
    """
    Directory searched for modules: ``override``, else ``LOXPATH``, else
    the current working directory.
    """
    if override is not None:
        return Path(override)
    env_root = os.environ.get("LOXPATH")
    if env_root:
        return Path(env_root)
    return Path.cwd()


def module_name(path: str) -> str:
    """
    Name a module is bound under when imported without an alias.

    >>> module_name("lib/utils.lox")
    'utils'
    """
    return PurePath(path).stem


def find_module(path: str, root: str | os.PathLike | None = None) -> Path:
    """
    Locate the single file matching ``path`` below the module root.
    When ``path`` has directory components, the file's trailing path
    components must match them.

    Raises:
        ModuleResolutionError: If zero or several files match.
    """
    wanted = PurePath(path).parts
    if not wanted:
        raise ModuleResolutionError(path)

    base = module_root(root)
    matches = []
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(
            d for d in dirnames
            if d not in EXCLUDED_DIRS and not d.startswith(".")
        )
        if wanted[-1] not in filenames:
            continue
        candidate = Path(dirpath) / wanted[-1]
        if candidate.parts[-len(wanted):] == wanted:
            matches.append(candidate)

    if len(matches) != 1:
        raise ModuleResolutionError(path, len(matches))
    return matches[0]
