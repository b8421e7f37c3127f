"""
Explorer Integration
====================

Connects the explorer hooks to the dispatcher. Setup is idempotent: once the
integration is ``READY`` further ``setup()`` calls do nothing.
"""

from enum import Enum

from projsync.config import SyncSettings, get_settings
from projsync.dispatcher import SyncDispatcher
from projsync.explorer.hooks import ExplorerHooks, Unsubscribe
from projsync.manager import ProjectManager
from projsync.materializer import RecursiveMaterializer
from projsync.notify import ConsoleNotifier, Notifier
from projsync.scheduler import CooperativeScheduler
from projsync.scope import ScopePredicate
from projsync.utils.rich_console import get_console_logger

logger = get_console_logger()


class InitState(Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"


class ExplorerSync:
    """Keeps the project manifest in sync with explorer file operations."""

    def __init__(
        self,
        hooks: ExplorerHooks,
        dispatcher: SyncDispatcher,
        settings: SyncSettings | None = None,
    ):
        self.hooks = hooks
        self.dispatcher = dispatcher
        self.settings = settings or get_settings()
        self.state = InitState.UNINITIALIZED
        self._unsubscribers: list[Unsubscribe] = []

    @property
    def ready(self) -> bool:
        return self.state is InitState.READY

    def setup(self) -> bool:
        """
        Subscribe the dispatcher to the explorer hooks.

        Returns:
            bool: True if this call installed the observers
        """
        if self.ready:
            return False
        if not self.settings.enabled:
            logger.debug("Explorer integration disabled")
            return False

        self._unsubscribers = [
            self.hooks.on_add(self.dispatcher.on_add),
            self.hooks.on_rename(self.dispatcher.on_rename),
            self.hooks.on_copy(self.dispatcher.on_copy),
            self.hooks.on_copy_batch(self.dispatcher.on_copy_batch),
            self.hooks.on_delete(self.dispatcher.on_delete),
        ]
        self.state = InitState.READY
        logger.debug(f"Explorer integration ready for {self.settings.project_root}")
        return True

    def teardown(self) -> None:
        """Remove the observers; pending walks are left to finish."""
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.state = InitState.UNINITIALIZED


def build_sync(
    hooks: ExplorerHooks,
    manager: ProjectManager,
    settings: SyncSettings | None = None,
    notifier: Notifier | None = None,
    scheduler: CooperativeScheduler | None = None,
) -> ExplorerSync:
    """
    Wire the scope predicate, scheduler, materializer and dispatcher.

    Args:
        hooks: Explorer hook registry
        manager: Manifest collaborator
        settings: Settings, defaults to the environment-loaded singleton
        notifier: Where failures are surfaced
        scheduler: Scheduler for recursive walks

    Returns:
        ExplorerSync: The integration, not yet set up
    """
    settings = settings or get_settings()
    notifier = notifier or ConsoleNotifier()
    scheduler = scheduler or CooperativeScheduler()
    scope = ScopePredicate(manager, settings.project_root, settings.update_policy())
    materializer = RecursiveMaterializer(
        manager, scope.in_scope, scheduler, notifier, step_timeout=settings.step_timeout
    )
    dispatcher = SyncDispatcher(manager, scope, scheduler, materializer, notifier)
    return ExplorerSync(hooks, dispatcher, settings)
