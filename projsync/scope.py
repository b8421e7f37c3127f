"""
Scope Predicate
===============

Decides whether a path belongs to the manifest this synchronizer maintains.
Nothing is cached: the decision is recomputed for every event, and paths that
no longer exist (after a delete) are fine.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from projsync.manager import ProjectManager
from projsync.utils.paths import is_within, normalize_path

logger = logging.getLogger(__name__)


class ScopePredicate:
    """Tracks which paths should trigger manifest updates."""

    def __init__(
        self,
        manager: ProjectManager,
        project_root: str | Path,
        update_policy: Callable[[str, bool], bool] | None = None,
    ):
        """Initialize the predicate.

        Args:
            manager: Collaborator reporting whether an app or library target is configured
            project_root: Working/project root every tracked path lives under
            update_policy: Per-path allow-list, ``should_update_project(path, is_directory)``
        """
        self.manager = manager
        self.project_root = normalize_path(str(project_root))
        self.update_policy = update_policy or (lambda path, is_directory=False: True)

    def is_project_file(self, path: str | None) -> bool:
        """Check the project is configured and ``path`` lies under its root."""
        if not path:
            return False
        return self.manager.is_project_configured() and is_within(path, self.project_root)

    def in_scope(self, path: str | None, is_directory: bool = False) -> bool:
        """
        Check whether ``path`` should be synchronized.

        Args:
            path: Normalized path, existing or not
            is_directory: Whether ``path`` is (or was) a group rather than a file

        Returns:
            bool: True when the project is configured, the path is under the
            project root and the update policy accepts it
        """
        path = normalize_path(path)
        if not self.is_project_file(path):
            return False
        return bool(self.update_policy(path, is_directory))

    __call__ = in_scope
