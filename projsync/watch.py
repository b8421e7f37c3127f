"""
Filesystem Watch Bridge
=======================

Feeds changes made outside the explorer into the same hooks. watchdog
delivers events on its observer thread; they are handed to the asyncio loop
with ``call_soon_threadsafe`` so every manifest call still happens on the
loop thread.
"""

import asyncio
import os
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from projsync.explorer.hooks import ExplorerHooks
from projsync.utils.rich_console import get_console_logger

logger = get_console_logger()


class WatchdogBridge(FileSystemEventHandler):
    """Translates watchdog events into explorer hook emissions."""

    def __init__(self, hooks: ExplorerHooks, loop: asyncio.AbstractEventLoop):
        """Initialize the bridge.

        Args:
            hooks: Hooks to emit on
            loop: Loop the emissions are scheduled on
        """
        super().__init__()
        self.hooks = hooks
        self.loop = loop

    def _schedule(self, callback, *args) -> None:
        if self.loop.is_closed():
            return
        self.loop.call_soon_threadsafe(callback, *args)

    def on_created(self, event: FileSystemEvent) -> None:
        """
        Created files map to AddFile, created directories to AddGroup only.

        Synthetic creations are kept: they are the files of a directory
        moved in from outside the watched tree, which have no other event.
        """
        self._schedule(self.hooks.emit_add, os.fsdecode(event.src_path), event.is_directory, True)

    def on_moved(self, event: FileSystemEvent) -> None:
        """Synthetic child moves are covered by the directory move."""
        if event.is_synthetic:
            return
        self._schedule(
            self.hooks.emit_rename, os.fsdecode(event.src_path), os.fsdecode(event.dest_path), True
        )

    def on_deleted(self, event: FileSystemEvent) -> None:
        if event.is_synthetic:
            return
        self._schedule(self.hooks.emit_delete, os.fsdecode(event.src_path), event.is_directory, True)


def start_observer(
    root: str | Path, hooks: ExplorerHooks, loop: asyncio.AbstractEventLoop
) -> Observer:
    """
    Watch ``root`` recursively and forward its changes to ``hooks``.

    Args:
        root: Directory to watch
        hooks: Hooks receiving the changes
        loop: Loop the hooks run on

    Returns:
        Observer: The started observer; call ``stop()`` and ``join()`` when done
    """
    observer = Observer()
    observer.schedule(WatchdogBridge(hooks, loop), str(root), recursive=True)
    observer.start()
    logger.info(f"Watching {root} for file tree changes")
    return observer
