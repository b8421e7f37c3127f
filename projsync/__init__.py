"""
projsync - keeps a project manifest in sync with explorer file operations
"""

from projsync.classifier import Classification, EventKind, ExplorerEvent, classify
from projsync.config import SyncSettings, get_settings
from projsync.dispatcher import DispatchResult, DispatchState, SyncDispatcher
from projsync.errors import HostMutationFailure, ManifestCallFailure, SyncError, TraversalFailure
from projsync.explorer import ExplorerActions, ExplorerHooks, ExplorerSync, build_sync
from projsync.manager import DryRunProjectManager, ProjectManager
from projsync.materializer import PendingWalk, RecursiveMaterializer
from projsync.operations import (
    AddFile,
    AddGroup,
    CanonicalOperation,
    DeleteFile,
    DeleteGroup,
    MoveFile,
    MoveOrRenameGroup,
    OperationKind,
)
from projsync.scheduler import CooperativeScheduler
from projsync.scope import ScopePredicate
from projsync.utils.paths import normalize_path

__version__ = "0.1.0"
__all__ = [
    "AddFile",
    "AddGroup",
    "CanonicalOperation",
    "Classification",
    "CooperativeScheduler",
    "DeleteFile",
    "DeleteGroup",
    "DispatchResult",
    "DispatchState",
    "DryRunProjectManager",
    "EventKind",
    "ExplorerActions",
    "ExplorerEvent",
    "ExplorerHooks",
    "ExplorerSync",
    "HostMutationFailure",
    "ManifestCallFailure",
    "MoveFile",
    "MoveOrRenameGroup",
    "OperationKind",
    "PendingWalk",
    "ProjectManager",
    "RecursiveMaterializer",
    "ScopePredicate",
    "SyncDispatcher",
    "SyncError",
    "SyncSettings",
    "TraversalFailure",
    "build_sync",
    "classify",
    "get_settings",
    "normalize_path",
]
