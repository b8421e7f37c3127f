"""
Path Normalization
==================

Canonical path forms used as manifest keys and collaborator arguments.

Every path handed to the manifest collaborator goes through
``normalize_path`` first so comparisons stay stable no matter which
explorer gesture produced the path.
"""

import os
from pathlib import Path, PurePath


def normalize_path(path):
    """
    Canonicalize a filesystem path.

    Expands ``~``, collapses repeated separators and ``.``/``..`` segments,
    uses the platform separator and strips trailing separators unless the
    result is the filesystem root. No filesystem access is performed.

    Args:
        path: A ``str`` or ``os.PathLike`` path

    Returns:
        The normalized path as ``str``; empty or non-path input is returned
        unchanged
    """
    if isinstance(path, PurePath):
        path = str(path)
    if not isinstance(path, str) or path == "":
        return path

    normalized = os.path.normpath(os.path.expanduser(path))
    if os.altsep:
        normalized = normalized.replace(os.altsep, os.sep)
    if len(normalized) > 1:
        stripped = normalized.rstrip(os.sep)
        # keep the root ("/" or "C:\\")
        if stripped and not stripped.endswith(":"):
            normalized = stripped
    return normalized


def resolve_child(directory: str | Path, name: str) -> str:
    """
    Resolve ``name`` under ``directory`` into an absolute, normalized path.

    Args:
        directory: Parent directory
        name: Entry name or relative path typed by the user

    Returns:
        str: Absolute normalized path
    """
    return normalize_path(os.path.abspath(os.path.join(str(directory), name)))


def is_dir(path: str | Path | None) -> bool:
    """Return True when ``path`` currently exists as a directory."""
    return bool(path) and os.path.isdir(path)


def is_within(path: str, root: str) -> bool:
    """
    Check whether ``path`` is ``root`` itself or lies below it.

    Both arguments are compared in normalized form, component-wise, so
    ``/proj-other`` is not considered inside ``/proj``.

    Args:
        path: Path to test
        root: Candidate ancestor

    Returns:
        bool: True if ``path`` is inside ``root``
    """
    path = normalize_path(path)
    root = normalize_path(root)
    if not path or not root:
        return False
    if path == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return path.startswith(prefix)
