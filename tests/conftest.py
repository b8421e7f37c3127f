"""
Test Configuration and Fixtures
===============================

Shared fixtures: a project tree under ``tmp_path``, a recording manifest
collaborator and notifier, and the wired synchronizer components.
"""

import asyncio
from pathlib import Path

import pytest

from projsync.config import SyncSettings
from projsync.dispatcher import SyncDispatcher
from projsync.materializer import RecursiveMaterializer
from projsync.scheduler import CooperativeScheduler
from projsync.scope import ScopePredicate


class RecordingProjectManager:
    """
    Fake manifest collaborator recording every call.

    Args:
        configured: Value of ``is_project_configured``
        delay: Seconds before ``add_file`` signals completion; None signals immediately
    """

    def __init__(self, configured: bool = True, delay: float | None = None):
        self.configured = configured
        self.delay = delay
        self.calls: list[tuple] = []
        self.add_file_options: list[bool] = []
        self.fail_on: set[str] = set()
        self.raise_on: set[str] = set()
        self.silent_on: set[str] = set()
        self.in_flight = 0
        self.max_in_flight = 0

    def add_file(self, path, on_done=None, *, create_groups=False):
        self.calls.append(("add_file", path))
        self.add_file_options.append(create_groups)
        if path in self.raise_on:
            raise RuntimeError(f"cannot add {path}")
        if on_done is None or path in self.silent_on:
            return
        ok = path not in self.fail_on
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)

        def finish():
            self.in_flight -= 1
            on_done(ok)

        if self.delay is None:
            finish()
        else:
            asyncio.get_running_loop().call_later(self.delay, finish)

    def add_group(self, path):
        self.calls.append(("add_group", path))
        if path in self.raise_on:
            raise RuntimeError(f"cannot add group {path}")

    def move_file(self, source, destination):
        self.calls.append(("move_file", source, destination))

    def move_or_rename_group(self, source, destination):
        self.calls.append(("move_or_rename_group", source, destination))

    def delete_file(self, path):
        self.calls.append(("delete_file", path))

    def delete_group(self, path):
        self.calls.append(("delete_group", path))

    def is_project_configured(self) -> bool:
        return self.configured

    def methods(self) -> list[str]:
        return [call[0] for call in self.calls]

    def added_files(self) -> list[str]:
        return [call[1] for call in self.calls if call[0] == "add_file"]


class RecordingNotifier:
    """Notifier keeping messages in lists."""

    def __init__(self):
        self.infos: list[str] = []
        self.warnings: list[str] = []
        self.errors: list[str] = []

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


def swift_only(path: str, is_directory: bool = False) -> bool:
    """Update policy tracking Swift sources and the groups holding them."""
    return is_directory or path.endswith(".swift")


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """
    Create an empty project root with a ``src`` directory.

    Returns:
        Path: The project root
    """
    root = tmp_path / "proj"
    (root / "src").mkdir(parents=True)
    return root


@pytest.fixture
def outside(tmp_path: Path) -> Path:
    """Directory outside the project root."""
    path = tmp_path / "outside"
    path.mkdir()
    return path


@pytest.fixture
def manager() -> RecordingProjectManager:
    return RecordingProjectManager()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def settings(project: Path) -> SyncSettings:
    return SyncSettings(project_root=project, step_timeout=2.0)


@pytest.fixture
def scope(manager, project) -> ScopePredicate:
    return ScopePredicate(manager, project)


@pytest.fixture
def scheduler() -> CooperativeScheduler:
    return CooperativeScheduler()


@pytest.fixture
def materializer(manager, scope, scheduler, notifier) -> RecursiveMaterializer:
    return RecursiveMaterializer(manager, scope.in_scope, scheduler, notifier, step_timeout=2.0)


@pytest.fixture
def dispatcher(manager, scope, scheduler, materializer, notifier) -> SyncDispatcher:
    return SyncDispatcher(manager, scope, scheduler, materializer, notifier)
