"""
Sync Dispatcher
===============

Entry point for every explorer change that already happened on disk.

Each change moves through ``Idle -> Intercepted -> Classified -> Applied``.
A failed host mutation or an untracked path returns to ``Idle`` without any
manifest call. Errors of one operation never stop the others: this is a
best-effort synchronizer, not a transaction, but every failure is surfaced
through the notifier.
"""

import asyncio
import inspect
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from projsync.classifier import EventKind, ExplorerEvent, classify
from projsync.errors import ManifestCallFailure, SchedulingFailure
from projsync.manager import ProjectManager
from projsync.materializer import RecursiveMaterializer
from projsync.notify import ConsoleNotifier, Notifier
from projsync.operations import CanonicalOperation
from projsync.scheduler import CooperativeScheduler
from projsync.scope import ScopePredicate
from projsync.utils.paths import is_dir, normalize_path, resolve_child

logger = logging.getLogger(__name__)


class DispatchState(Enum):
    IDLE = "idle"
    INTERCEPTED = "intercepted"
    CLASSIFIED = "classified"
    APPLIED = "applied"


@dataclass
class DispatchResult:
    """Outcome of dispatching one explorer event."""
    event: ExplorerEvent
    state: DispatchState = DispatchState.IDLE
    operations: list[CanonicalOperation] = field(default_factory=list)
    failures: list[ManifestCallFailure | SchedulingFailure] = field(default_factory=list)
    walk: asyncio.Task | None = None
    reason: str | None = None

    @property
    def skipped(self) -> bool:
        return self.state is DispatchState.IDLE


class SyncDispatcher:
    """Applies the manifest operations implied by explorer events."""

    def __init__(
        self,
        manager: ProjectManager,
        scope: ScopePredicate,
        scheduler: CooperativeScheduler,
        materializer: RecursiveMaterializer,
        notifier: Notifier | None = None,
    ):
        self.manager = manager
        self.scope = scope
        self.scheduler = scheduler
        self.materializer = materializer
        self.notifier = notifier or ConsoleNotifier()

    def dispatch(self, event: ExplorerEvent, ok: bool = True) -> DispatchResult:
        """
        Synchronize the manifest with one filesystem change.

        Args:
            event: The change, already performed by the host
            ok: Whether the host reported success

        Returns:
            DispatchResult: Reached state, applied operations and the
            recursive walk task if one was started
        """
        result = DispatchResult(event=event)
        if not ok:
            result.reason = "host mutation failed"
            logger.debug(f"Skipping {event.kind.value} of {event.path}: {result.reason}")
            return result

        result.state = DispatchState.INTERCEPTED
        if not any(self.scope.in_scope(path, event.is_directory) for path in event.endpoints):
            result.state = DispatchState.IDLE
            result.reason = "out of scope"
            logger.debug(f"Skipping {event.kind.value} of {event.path}: {result.reason}")
            return result

        classification = classify(event)
        result.state = DispatchState.CLASSIFIED
        logger.debug(
            f"{event.kind.value} {event.path} -> "
            f"{[operation.describe() for operation in classification.operations]}"
        )

        pending = []
        for operation in classification.operations:
            try:
                outcome = operation.apply(self.manager)
            except Exception as e:
                result.failures.append(self._report(operation, str(e)))
                continue
            result.operations.append(operation)
            if inspect.isawaitable(outcome):
                pending.append((operation, outcome))

        if classification.expand and pending:
            # the walk must not overlap the group write
            result.walk = self._spawn(
                self._expand_after(pending, classification.expand),
                f"materialize:{classification.expand}",
                result,
                pending,
            )
        else:
            for operation, outcome in pending:
                self._spawn(
                    self._await(operation, outcome), operation.describe(), result, [(operation, outcome)]
                )
            if classification.expand:
                result.walk = self.materializer.materialize(classification.expand)
        result.state = DispatchState.APPLIED
        logger.debug(f"Applied {len(result.operations)} operation(s) for {event.path}")
        return result

    def _spawn(
        self, coroutine, name: str, result: DispatchResult, pending: list
    ) -> asyncio.Task | None:
        try:
            return self.scheduler.spawn(coroutine, name=name)
        except SchedulingFailure as e:
            # the pending operations never ran
            for operation, outcome in pending:
                if inspect.iscoroutine(outcome):
                    outcome.close()
                result.operations.remove(operation)
            result.failures.append(e)
            self.notifier.error(str(e))
            return None

    async def _await(self, operation: CanonicalOperation, outcome) -> None:
        try:
            await outcome
        except Exception as e:
            self._report(operation, str(e))

    async def _expand_after(self, pending: list, root: str) -> int:
        for operation, outcome in pending:
            await self._await(operation, outcome)
        return await self.materializer.run(root)

    def _report(self, operation: CanonicalOperation, reason: str) -> ManifestCallFailure:
        failure = ManifestCallFailure(operation, reason)
        self.notifier.error(str(failure))
        return failure

    # Explorer observers

    def on_rename(self, source: str, destination: str, ok: bool = True) -> DispatchResult:
        """Rename or move of a file or directory."""
        destination = normalize_path(destination)
        event = ExplorerEvent(
            EventKind.RENAME, destination, source=source, is_directory=is_dir(destination)
        )
        return self.dispatch(event, ok)

    def on_add(self, path: str, is_directory: bool, ok: bool = True) -> DispatchResult:
        """A file or directory created from the explorer."""
        return self.dispatch(ExplorerEvent(EventKind.CREATE, path, is_directory=is_directory), ok)

    def on_copy(self, source: str, destination: str, ok: bool = True) -> DispatchResult:
        """Copy of a single file or directory; directories are walked recursively."""
        destination = normalize_path(destination)
        event = ExplorerEvent(
            EventKind.COPY, destination, source=source, is_directory=is_dir(destination)
        )
        return self.dispatch(event, ok)

    def on_copy_batch(
        self, paths: Iterable[str], target_dir: str, ok: bool = True
    ) -> list[DispatchResult]:
        """
        Copy of several paths into one directory.

        Each destination is resolved as ``target_dir/<name>``. Copied
        directories are not walked.
        """
        target_dir = normalize_path(target_dir)
        results = []
        for path in paths:
            name = os.path.basename(normalize_path(path))
            destination = resolve_child(target_dir, name)
            event = ExplorerEvent(
                EventKind.COPY_BATCH, destination, source=path, is_directory=is_dir(destination)
            )
            results.append(self.dispatch(event, ok))
        return results

    def on_delete(self, path: str, is_directory: bool, ok: bool = True) -> DispatchResult:
        """Deletion; ``is_directory`` must be captured before the path was removed."""
        return self.dispatch(ExplorerEvent(EventKind.DELETE, path, is_directory=is_directory), ok)
