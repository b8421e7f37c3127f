"""
Explorer integration: hooks, built-in actions and wiring.
"""

from projsync.explorer.actions import ExplorerActions
from projsync.explorer.hooks import ExplorerHooks, HookKind
from projsync.explorer.integration import ExplorerSync, InitState, build_sync

__all__ = ["ExplorerActions", "ExplorerHooks", "ExplorerSync", "HookKind", "InitState", "build_sync"]
