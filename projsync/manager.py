"""
Manifest Collaborator
=====================

Interface of the project manifest storage engine, plus a dry-run
implementation that records and logs every call.

Every operation is expected to be idempotent. ``add_file`` may finish
asynchronously: it signals completion by calling ``on_done`` (``on_done()``
or ``on_done(True)`` on success, ``on_done(False)`` on failure) or by
returning an awaitable.
"""

import asyncio
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from projsync.utils.rich_console import get_console_logger

logger = get_console_logger()

DoneCallback = Callable[..., None]


class ProjectManager(Protocol):
    """Operations the synchronizer needs from the manifest engine."""

    def add_file(
        self, path: str, on_done: DoneCallback | None = None, *, create_groups: bool = False
    ) -> Any: ...

    def add_group(self, path: str) -> Any: ...

    def move_file(self, source: str, destination: str) -> Any: ...

    def move_or_rename_group(self, source: str, destination: str) -> Any: ...

    def delete_file(self, path: str) -> Any: ...

    def delete_group(self, path: str) -> Any: ...

    def is_project_configured(self) -> bool: ...


@dataclass
class ManifestCall:
    """One recorded collaborator call."""
    method: str
    args: tuple[str, ...]
    options: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        rendered = ", ".join(self.args)
        if self.options:
            rendered += ", " + ", ".join(f"{key}={value}" for key, value in self.options.items())
        return f"{self.method}({rendered})"


class DryRunProjectManager:
    """
    Records manifest calls instead of writing a project file.

    Completion of ``add_file`` is signalled on the next loop tick when an
    event loop is running, and immediately otherwise.
    """

    def __init__(self, configured: bool = True, echo: bool = True):
        self.configured = configured
        self.echo = echo
        self.calls: list[ManifestCall] = []

    def _record(self, method: str, *args: str, **options: Any) -> ManifestCall:
        call = ManifestCall(method=method, args=tuple(args), options=options)
        self.calls.append(call)
        if self.echo:
            logger.info(f"[dry-run] {call}")
        return call

    def add_file(self, path: str, on_done: DoneCallback | None = None, *, create_groups: bool = False):
        self._record("add_file", path, create_groups=create_groups)
        if on_done is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            on_done(True)
        else:
            loop.call_soon(on_done, True)

    def add_group(self, path: str):
        self._record("add_group", path)

    def move_file(self, source: str, destination: str):
        self._record("move_file", source, destination)

    def move_or_rename_group(self, source: str, destination: str):
        self._record("move_or_rename_group", source, destination)

    def delete_file(self, path: str):
        self._record("delete_file", path)

    def delete_group(self, path: str):
        self._record("delete_group", path)

    def is_project_configured(self) -> bool:
        return self.configured
