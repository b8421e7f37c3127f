"""
Synchronization errors.

A path that is not tracked is not an error: the dispatcher simply stays idle.
"""


class SyncError(Exception):
    """Base exception for manifest synchronization errors."""


class HostMutationFailure(SyncError):
    """The explorer failed to perform the filesystem change itself."""

    def __init__(self, path: str, reason: str, action: str = "change"):
        self.path = path
        self.reason = reason
        self.action = action
        super().__init__(f"Failed to {action} `{path}`:\n- {reason}")


class ManifestCallFailure(SyncError):
    """The manifest collaborator reported a failure for one operation."""

    def __init__(self, operation, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to update project ({operation.describe()}): {reason}")


class TraversalFailure(SyncError):
    """A directory could not be enumerated during a recursive walk."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read directory `{path}`: {reason}")


class SchedulingFailure(SyncError):
    """Background work could not be started, usually for lack of a running loop."""

    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to schedule {name}: {reason}")
