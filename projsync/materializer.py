"""
Recursive Materializer
======================

Adds every file of a copied directory to the manifest, one file at a time.

The directory's own group is added by the dispatcher beforehand. The walk
first collects descendant files depth-first, then drains that queue issuing
one ``add_file`` per file and waiting for its completion signal before the
next one. At most one manifest call is in flight per walk since the manifest
engine does not support concurrent writers. A call that outlives the step
timeout is reported and ends the walk: it may still be writing.
"""

import asyncio
import inspect
import logging
import os
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, field

from projsync.errors import ManifestCallFailure, SchedulingFailure, SyncError, TraversalFailure
from projsync.manager import ProjectManager
from projsync.notify import ConsoleNotifier, Notifier
from projsync.operations import AddFile
from projsync.scheduler import CooperativeScheduler
from projsync.utils.logging import timeit
from projsync.utils.paths import is_dir, normalize_path

logger = logging.getLogger(__name__)


@dataclass
class PendingWalk:
    """In-flight state of one recursive walk."""
    root: str
    queue: deque[str] = field(default_factory=deque)
    cursor: int = 0
    added: int = 0
    in_flight: int = 0
    stalled: bool = False
    failures: list[SyncError] = field(default_factory=list)

    @property
    def remaining(self) -> int:
        return len(self.queue)

    def settle(self, *_) -> None:
        self.in_flight -= 1


class RecursiveMaterializer:
    """Drives sequential ``add_file`` calls for the files below a directory."""

    def __init__(
        self,
        manager: ProjectManager,
        in_scope: Callable[[str], bool],
        scheduler: CooperativeScheduler,
        notifier: Notifier | None = None,
        step_timeout: float | None = 30.0,
    ):
        """Initialize the materializer.

        Args:
            manager: Manifest collaborator
            in_scope: Scope predicate applied to every discovered file
            scheduler: Scheduler the drain tasks run on
            notifier: Where failures are surfaced
            step_timeout: Seconds to wait for one completion signal, None to wait forever
        """
        self.manager = manager
        self.in_scope = in_scope
        self.scheduler = scheduler
        self.notifier = notifier or ConsoleNotifier()
        self.step_timeout = step_timeout
        self.active_walks: list[PendingWalk] = []

    def discover(self, root: str) -> PendingWalk:
        """
        Collect the files below ``root`` depth-first.

        Unreadable subdirectories are reported and skipped; their siblings
        are still collected.

        Args:
            root: Directory to walk

        Returns:
            PendingWalk: Walk whose queue holds every discovered file
        """
        walk = PendingWalk(root=normalize_path(root))
        self._collect(walk.root, walk)
        return walk

    def _collect(self, directory: str, walk: PendingWalk) -> None:
        try:
            with os.scandir(directory) as iterator:
                entries = sorted(iterator, key=lambda entry: entry.name)
        except OSError as e:
            failure = TraversalFailure(directory, e.strerror or str(e))
            walk.failures.append(failure)
            self.notifier.warn(str(failure))
            return

        for entry in entries:
            path = normalize_path(os.path.join(directory, entry.name))
            try:
                # symlinked directories are not followed
                is_directory = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_directory = False
            if is_directory:
                self._collect(path, walk)
            else:
                walk.queue.append(path)

    def materialize(self, root: str) -> asyncio.Task | None:
        """
        Start a walk for ``root`` without blocking the caller.

        Args:
            root: Directory whose group was just added

        Returns:
            The drain task, or None when the directory holds no file or the
            walk could not be scheduled
        """
        walk = self.discover(root)
        if not walk.queue:
            logger.debug(f"Nothing to materialize under {walk.root}")
            return None
        logger.debug(f"Materializing {walk.remaining} file(s) under {walk.root}")
        try:
            return self.scheduler.spawn(self.drain(walk), name=f"materialize:{walk.root}")
        except SchedulingFailure as e:
            walk.failures.append(e)
            self.notifier.error(f"{e}\n- {walk.remaining} file(s) under `{walk.root}` were not added")
            return None

    async def run(self, root: str) -> int:
        """Discover and drain ``root`` in the current task."""
        walk = self.discover(root)
        if not walk.queue:
            logger.debug(f"Nothing to materialize under {walk.root}")
            return 0
        return await self.drain(walk)

    @timeit
    async def drain(self, walk: PendingWalk) -> int:
        """
        Issue ``add_file`` for each queued file, one at a time.

        Files out of scope or that turned into directories are skipped. The
        walk is abandoned if its root stops being a directory.

        Args:
            walk: Walk created by ``discover``

        Returns:
            int: Number of files added successfully
        """
        self.active_walks.append(walk)
        try:
            while walk.queue:
                if not is_dir(walk.root):
                    logger.debug(f"Abandoning walk of {walk.root}: {walk.remaining} file(s) left")
                    break
                path = walk.queue.popleft()
                walk.cursor += 1
                if not self.in_scope(path) or is_dir(path):
                    continue
                if await self._add_file(path, walk):
                    walk.added += 1
                if walk.stalled:
                    self.notifier.warn(
                        f"Stopped adding files under `{walk.root}`: {walk.remaining} file(s) left"
                    )
                    break
        finally:
            self.active_walks.remove(walk)
        return walk.added

    async def _add_file(self, path: str, walk: PendingWalk) -> bool:
        operation = AddFile(path, create_groups=True)
        loop = asyncio.get_running_loop()
        completion = loop.create_future()

        def resolve(ok) -> None:
            if not completion.done():
                completion.set_result(ok)

        def on_done(ok=True, *args) -> None:
            success = ok is not False and not isinstance(ok, BaseException)
            loop.call_soon_threadsafe(resolve, success)

        walk.in_flight += 1
        try:
            result = operation.apply(self.manager, on_done)
            if inspect.isawaitable(result):
                await result
                ok = True
            else:
                ok = await asyncio.wait_for(asyncio.shield(completion), self.step_timeout)
        except asyncio.TimeoutError:
            # still running: counted until its late signal arrives
            walk.stalled = True
            completion.add_done_callback(walk.settle)
            return self._report(
                walk, operation, f"no completion signal after {self.step_timeout}s"
            )
        except Exception as e:
            return self._report(walk, operation, str(e))
        finally:
            if not walk.stalled:
                walk.in_flight -= 1

        if not ok:
            return self._report(walk, operation, "the project manager reported a failure")
        return True

    def _report(self, walk: PendingWalk, operation: AddFile, reason: str) -> bool:
        failure = ManifestCallFailure(operation, reason)
        walk.failures.append(failure)
        self.notifier.error(str(failure))
        return False
