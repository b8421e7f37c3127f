"""
Operation Classifier
====================

Maps one explorer event to the canonical manifest operations it implies.

The directory flag of an event is read after the host performed the
filesystem change, so a rename onto an existing directory is still seen as a
group rename. Deletions are the exception: their type must be captured
before the path disappears.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from projsync.operations import (
    AddFile,
    AddGroup,
    CanonicalOperation,
    DeleteFile,
    DeleteGroup,
    MoveFile,
    MoveOrRenameGroup,
)
from projsync.utils.paths import normalize_path


class EventKind(Enum):
    """Explorer actions that change the file tree."""
    RENAME = "rename"
    CREATE = "create"
    COPY = "copy"
    COPY_BATCH = "copy_batch"
    DELETE = "delete"


@dataclass(frozen=True)
class ExplorerEvent:
    """
    A single filesystem change reported by the explorer.

    Attributes:
        kind: Action that produced the change
        path: Affected path; the destination for renames and copies
        source: Original path for renames and copies
        is_directory: Whether ``path`` is a directory
    """
    kind: EventKind
    path: str
    source: str | None = None
    is_directory: bool = False

    def __post_init__(self):
        object.__setattr__(self, "path", normalize_path(self.path))
        object.__setattr__(self, "source", normalize_path(self.source))

    @property
    def endpoints(self) -> tuple[str, ...]:
        """Paths whose scope decides whether the event is synchronized."""
        if self.kind is EventKind.RENAME and self.source:
            return (self.source, self.path)
        return (self.path,)


class Classification(NamedTuple):
    """Operations to apply, and the directory to walk afterwards, if any."""
    operations: tuple[CanonicalOperation, ...]
    expand: str | None = None


def classify(event: ExplorerEvent) -> Classification:
    """
    Derive canonical operations from an explorer event.

    Args:
        event: The explorer event

    Returns:
        Classification: Operations in application order and an optional
        directory root for recursive materialization

    Raises:
        ValueError: If a rename carries no source path
    """
    kind = event.kind
    if kind is EventKind.RENAME:
        if not event.source:
            raise ValueError(f"Rename of {event.path} has no source path")
        if event.is_directory:
            return Classification((MoveOrRenameGroup(event.source, event.path),))
        return Classification((MoveFile(event.source, event.path),))

    if kind is EventKind.CREATE:
        if event.is_directory:
            return Classification((AddGroup(event.path),))
        return Classification((AddFile(event.path),))

    if kind is EventKind.COPY:
        if event.is_directory:
            return Classification((AddGroup(event.path),), expand=event.path)
        return Classification((AddFile(event.path),))

    if kind is EventKind.COPY_BATCH:
        # Batch copies never expand directories.
        if event.is_directory:
            return Classification(())
        return Classification((AddFile(event.path),))

    if kind is EventKind.DELETE:
        if event.is_directory:
            return Classification((DeleteGroup(event.path),))
        return Classification((DeleteFile(event.path),))

    raise ValueError(f"Unknown event kind: {kind}")
