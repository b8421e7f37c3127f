"""
Explorer Actions
================

The explorer's own add and delete actions. The host offers no hook after a
create or delete that knows whether a directory was involved, so these
actions perform the filesystem change themselves and emit the matching hook.
Prompting and confirming stay with the host UI.
"""

import os
import shutil
from collections.abc import Sequence

from projsync.errors import HostMutationFailure
from projsync.explorer.hooks import ExplorerHooks
from projsync.notify import ConsoleNotifier, Notifier
from projsync.utils.paths import is_dir, normalize_path, resolve_child


class ExplorerActions:
    """Creates and deletes paths on behalf of the explorer."""

    def __init__(self, hooks: ExplorerHooks, notifier: Notifier | None = None):
        self.hooks = hooks
        self.notifier = notifier or ConsoleNotifier()

    def add(self, directory: str, value: str | None) -> str | None:
        """
        Create a file or a directory below ``directory``.

        A value ending with a separator creates a directory (and its
        parents); anything else creates the parent directories and an empty
        file. Blank input is ignored.

        Args:
            directory: Directory the explorer cursor is in
            value: Name typed by the user, may contain subdirectories

        Returns:
            The created path, or None if nothing was created
        """
        if not value or not value.strip():
            return None

        path = resolve_child(normalize_path(directory), value)
        is_file = not value.endswith(("/", os.sep))
        target_dir = os.path.dirname(path) if is_file else path

        if is_file and os.path.exists(path):
            self.notifier.warn(f"File already exists:\n- `{path}`")
            return None

        try:
            os.makedirs(target_dir, exist_ok=True)
            if is_file:
                with open(path, "w"):
                    pass
        except OSError as e:
            self.notifier.error(str(HostMutationFailure(path, e.strerror or str(e), "create")))
            self.hooks.emit_add(path, not is_file, False)
            return None

        self.hooks.emit_add(path, not is_file, True)
        return path

    @staticmethod
    def confirm_message(paths: Sequence[str]) -> str:
        """Question the host asks before deleting ``paths``."""
        if len(paths) == 1:
            what = paths[0]
            try:
                what = os.path.relpath(paths[0])
            except ValueError:
                pass
        else:
            what = f"{len(paths)} files"
        return f"Delete {what}?"

    def delete(self, paths: Sequence[str]) -> list[str]:
        """
        Delete ``paths`` in selection order.

        The type of every path is captured before anything is removed. A
        failure on one path is reported and does not stop the others; the
        delete hook fires for every path with its own success flag.

        Args:
            paths: Selected paths, already confirmed by the user

        Returns:
            list[str]: Paths deleted successfully
        """
        paths = [normalize_path(path) for path in paths if path]
        if not paths:
            return []

        directories = {path: is_dir(path) for path in paths}
        deleted = []
        for path in paths:
            try:
                if os.path.islink(path):
                    os.unlink(path)
                elif directories[path]:
                    shutil.rmtree(path)
                else:
                    os.remove(path)
                ok = True
            except FileNotFoundError:
                ok = True
            except OSError as e:
                self.notifier.error(str(HostMutationFailure(path, e.strerror or str(e), "delete")))
                ok = False
            if ok:
                deleted.append(path)
            self.hooks.emit_delete(path, directories[path], ok)
        return deleted
