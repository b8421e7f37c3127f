"""Tests for mapping explorer events to canonical operations."""

import pytest

from projsync.classifier import Classification, EventKind, ExplorerEvent, classify
from projsync.operations import (
    AddFile,
    AddGroup,
    DeleteFile,
    DeleteGroup,
    MoveFile,
    MoveOrRenameGroup,
    OperationKind,
)

SRC = "/proj/src/a"
DST = "/proj/src/b"


@pytest.mark.parametrize(
    "kind, is_directory, expected, expand",
    [
        (EventKind.RENAME, True, (MoveOrRenameGroup(SRC, DST),), None),
        (EventKind.RENAME, False, (MoveFile(SRC, DST),), None),
        (EventKind.CREATE, True, (AddGroup(DST),), None),
        (EventKind.CREATE, False, (AddFile(DST),), None),
        (EventKind.COPY, True, (AddGroup(DST),), DST),
        (EventKind.COPY, False, (AddFile(DST),), None),
        (EventKind.COPY_BATCH, True, (), None),
        (EventKind.COPY_BATCH, False, (AddFile(DST),), None),
        (EventKind.DELETE, True, (DeleteGroup(DST),), None),
        (EventKind.DELETE, False, (DeleteFile(DST),), None),
    ],
)
def test_classification_table(kind, is_directory, expected, expand):
    """Test every (action, directory) pair yields exactly the listed operations."""
    event = ExplorerEvent(kind, DST, source=SRC, is_directory=is_directory)
    assert classify(event) == Classification(expected, expand)


def test_added_files_create_groups():
    """Test file additions ask the manager to create missing groups."""
    (operation,) = classify(ExplorerEvent(EventKind.CREATE, DST)).operations
    assert operation.kind is OperationKind.ADD_FILE
    assert operation.create_groups is True


def test_event_paths_are_normalized():
    """Test event paths lose trailing separators before classification."""
    event = ExplorerEvent(EventKind.RENAME, "/proj/src/b/", source="/proj//src/a/", is_directory=True)
    assert classify(event).operations == (MoveOrRenameGroup("/proj/src/a", "/proj/src/b"),)


def test_rename_endpoints_include_source():
    """Test renames expose both endpoints for the scope check."""
    rename = ExplorerEvent(EventKind.RENAME, DST, source=SRC)
    copy = ExplorerEvent(EventKind.COPY, DST, source=SRC)
    assert rename.endpoints == (SRC, DST)
    assert copy.endpoints == (DST,)


def test_rename_without_source_is_rejected():
    """Test a rename event must carry its source path."""
    with pytest.raises(ValueError):
        classify(ExplorerEvent(EventKind.RENAME, DST))


def test_operation_descriptions():
    """Test operations render a readable summary."""
    assert MoveFile(SRC, DST).describe() == f"move_file {SRC} -> {DST}"
    assert DeleteGroup(DST).describe() == f"delete_group {DST}"
    assert AddGroup(DST) != DeleteGroup(DST)
