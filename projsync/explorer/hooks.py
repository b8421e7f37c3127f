"""
Explorer Hooks
==============

Typed post-mutation hooks exposed by the explorer host. The host emits an
event after it changed the file tree; observers only watch, they never alter
what the host does or returns. An observer raising is logged and the
remaining observers still run.
"""

import logging
from collections.abc import Callable, Iterable
from enum import Enum

logger = logging.getLogger(__name__)

Unsubscribe = Callable[[], None]


class HookKind(Enum):
    ADD = "add"
    RENAME = "rename"
    COPY = "copy"
    COPY_BATCH = "copy_batch"
    DELETE = "delete"


class ExplorerHooks:
    """Subscription registry for explorer file operations."""

    def __init__(self):
        self._observers: dict[HookKind, list[Callable]] = {kind: [] for kind in HookKind}

    def subscribe(self, kind: HookKind, observer: Callable) -> Unsubscribe:
        """
        Register ``observer`` for ``kind``.

        Args:
            kind: Hook to observe
            observer: Callable receiving the hook's arguments

        Returns:
            A callable removing the observer again
        """
        self._observers[kind].append(observer)

        def unsubscribe() -> None:
            if observer in self._observers[kind]:
                self._observers[kind].remove(observer)

        return unsubscribe

    def observers(self, kind: HookKind) -> list[Callable]:
        return list(self._observers[kind])

    def on_add(self, observer: Callable[[str, bool, bool], object]) -> Unsubscribe:
        """``observer(path, is_directory, ok)`` after a file or directory was created."""
        return self.subscribe(HookKind.ADD, observer)

    def on_rename(self, observer: Callable[[str, str, bool], object]) -> Unsubscribe:
        """``observer(source, destination, ok)`` after a rename or move."""
        return self.subscribe(HookKind.RENAME, observer)

    def on_copy(self, observer: Callable[[str, str, bool], object]) -> Unsubscribe:
        """``observer(source, destination, ok)`` after a single copy."""
        return self.subscribe(HookKind.COPY, observer)

    def on_copy_batch(self, observer: Callable[[list[str], str, bool], object]) -> Unsubscribe:
        """``observer(paths, target_dir, ok)`` after several paths were copied into one directory."""
        return self.subscribe(HookKind.COPY_BATCH, observer)

    def on_delete(self, observer: Callable[[str, bool, bool], object]) -> Unsubscribe:
        """``observer(path, is_directory, ok)`` after a deletion attempt."""
        return self.subscribe(HookKind.DELETE, observer)

    def _emit(self, kind: HookKind, *args) -> None:
        for observer in self.observers(kind):
            try:
                observer(*args)
            except Exception:
                logger.exception(f"Observer {observer!r} failed on {kind.value} hook")

    def emit_add(self, path: str, is_directory: bool, ok: bool = True) -> None:
        self._emit(HookKind.ADD, path, is_directory, ok)

    def emit_rename(self, source: str, destination: str, ok: bool = True) -> None:
        self._emit(HookKind.RENAME, source, destination, ok)

    def emit_copy(self, source: str, destination: str, ok: bool = True) -> None:
        self._emit(HookKind.COPY, source, destination, ok)

    def emit_copy_batch(self, paths: Iterable[str], target_dir: str, ok: bool = True) -> None:
        self._emit(HookKind.COPY_BATCH, list(paths), target_dir, ok)

    def emit_delete(self, path: str, is_directory: bool, ok: bool = True) -> None:
        self._emit(HookKind.DELETE, path, is_directory, ok)
