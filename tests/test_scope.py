"""Tests for the scope predicate."""

import pytest

from projsync.config import SyncSettings
from projsync.scope import ScopePredicate

from conftest import RecordingProjectManager, swift_only


def test_path_under_root_is_in_scope(manager, project):
    """Test a project file is tracked when the project is configured."""
    scope = ScopePredicate(manager, project)
    assert scope.in_scope(str(project / "src" / "a.swift"))
    assert scope(str(project / "src"))


@pytest.mark.parametrize("relative", ["src/a.swift", "src", "Package.swift", "deep/er/file.m"])
def test_unconfigured_project_is_never_in_scope(project, relative):
    """Test nothing is tracked once the project has no configured target."""
    scope = ScopePredicate(RecordingProjectManager(configured=False), project)
    assert not scope.in_scope(str(project / relative))


def test_path_outside_root_is_out_of_scope(manager, project, outside):
    """Test paths outside the project root, including sibling prefixes, are ignored."""
    scope = ScopePredicate(manager, project)
    assert not scope.in_scope(str(outside / "a.swift"))
    assert not scope.in_scope(f"{project}-other/a.swift")


def test_update_policy_is_applied(manager, project):
    """Test the per-path policy can veto a path under the root."""
    scope = ScopePredicate(manager, project, swift_only)
    assert scope.in_scope(str(project / "src" / "a.swift"))
    assert not scope.in_scope(str(project / "src" / "notes.txt"))


def test_missing_path_can_be_checked(manager, project):
    """Test a deleted path can still be evaluated."""
    scope = ScopePredicate(manager, project)
    missing = project / "src" / "gone" / "a.swift"
    assert not missing.exists()
    assert scope.in_scope(str(missing))


def test_empty_path_is_out_of_scope(manager, project):
    """Test None and empty paths are rejected."""
    scope = ScopePredicate(manager, project)
    assert not scope.in_scope(None)
    assert not scope.in_scope("")


def test_settings_policy_excludes_build_folders(manager, project):
    """Test the default glob deny-list from settings."""
    settings = SyncSettings(project_root=project)
    scope = ScopePredicate(manager, settings.project_root, settings.update_policy())
    assert scope.in_scope(str(project / "src" / "a.swift"))
    assert not scope.in_scope(str(project / ".git" / "HEAD"))
    assert not scope.in_scope(str(project / "App.xcodeproj" / "project.pbxproj"))
    assert not scope.in_scope(str(project / "src" / ".DS_Store"))


def test_groups_pass_include_only_settings(manager, project):
    """Test an include glob for files does not veto the directories holding them."""
    settings = SyncSettings(project_root=project, include=["*.swift"])
    scope = ScopePredicate(manager, settings.project_root, settings.update_policy())

    assert scope.in_scope(str(project / "src"), True)
    assert scope.in_scope(str(project / "src" / "a.swift"))
    assert not scope.in_scope(str(project / "src" / "a.txt"))
    assert not scope.in_scope(str(project / ".git"), True)
