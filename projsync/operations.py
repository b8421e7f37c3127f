"""
Canonical Operations
====================

Normalized manifest intents derived from explorer events, independent of the
gesture that produced them. Values are short-lived: built by the classifier,
applied to the manifest collaborator, then dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar

from projsync.manager import DoneCallback, ProjectManager


class OperationKind(Enum):
    """Tag of a canonical operation."""
    ADD_FILE = "add_file"
    ADD_GROUP = "add_group"
    MOVE_OR_RENAME_GROUP = "move_or_rename_group"
    MOVE_FILE = "move_file"
    DELETE_FILE = "delete_file"
    DELETE_GROUP = "delete_group"


@dataclass(frozen=True)
class CanonicalOperation:
    """Base class of all canonical operations."""

    kind: ClassVar[OperationKind]

    @property
    def paths(self) -> tuple[str, ...]:
        """Every path the operation touches."""
        raise NotImplementedError

    def apply(self, manager: ProjectManager, on_done: DoneCallback | None = None) -> Any:
        """
        Perform the matching collaborator call.

        Args:
            manager: Manifest collaborator
            on_done: Completion callback, only forwarded by ``AddFile``

        Returns:
            Whatever the collaborator returns (possibly an awaitable)
        """
        return getattr(manager, self.kind.value)(*self.paths)

    def describe(self) -> str:
        return f"{self.kind.value} {' -> '.join(self.paths)}"


@dataclass(frozen=True)
class AddFile(CanonicalOperation):
    path: str
    create_groups: bool = True

    kind: ClassVar[OperationKind] = OperationKind.ADD_FILE

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path,)

    def apply(self, manager: ProjectManager, on_done: DoneCallback | None = None) -> Any:
        return manager.add_file(self.path, on_done, create_groups=self.create_groups)


@dataclass(frozen=True)
class AddGroup(CanonicalOperation):
    path: str

    kind: ClassVar[OperationKind] = OperationKind.ADD_GROUP

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True)
class MoveOrRenameGroup(CanonicalOperation):
    source: str
    destination: str

    kind: ClassVar[OperationKind] = OperationKind.MOVE_OR_RENAME_GROUP

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.source, self.destination)


@dataclass(frozen=True)
class MoveFile(CanonicalOperation):
    source: str
    destination: str

    kind: ClassVar[OperationKind] = OperationKind.MOVE_FILE

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.source, self.destination)


@dataclass(frozen=True)
class DeleteFile(CanonicalOperation):
    path: str

    kind: ClassVar[OperationKind] = OperationKind.DELETE_FILE

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path,)


@dataclass(frozen=True)
class DeleteGroup(CanonicalOperation):
    path: str

    kind: ClassVar[OperationKind] = OperationKind.DELETE_GROUP

    @property
    def paths(self) -> tuple[str, ...]:
        return (self.path,)
