"""
Command line interface for projsync.
"""

import asyncio
from pathlib import Path

import typer

from projsync.config import SyncSettings
from projsync.explorer import ExplorerHooks, build_sync
from projsync.manager import DryRunProjectManager
from projsync.utils.rich_console import get_console_logger, print_table
from projsync.watch import start_observer

logger = get_console_logger()

app = typer.Typer(
    help="projsync - keep a project manifest in sync with file tree changes",
    no_args_is_help=True,
)


def load_settings(
    root: Path | None = None,
    include: list[str] | None = None,
    exclude: list[str] | None = None,
) -> SyncSettings:
    """Environment settings with command line overrides applied."""
    return SyncSettings.from_env(
        project_root=root,
        include=include or None,
        exclude=exclude or None,
    )


async def run_watch(
    settings: SyncSettings,
    stop: asyncio.Event | None = None,
    manager: DryRunProjectManager | None = None,
) -> DryRunProjectManager:
    """
    Watch the project root and log the manifest operations it would need.

    Args:
        settings: Effective settings
        stop: Event ending the watch; runs until cancelled when omitted
        manager: Recording manager, a fresh one by default

    Returns:
        DryRunProjectManager: The manager holding every recorded call
    """
    hooks = ExplorerHooks()
    manager = manager or DryRunProjectManager()
    sync = build_sync(hooks, manager, settings)
    sync.setup()
    observer = start_observer(settings.project_root, hooks, asyncio.get_running_loop())
    try:
        await (stop or asyncio.Event()).wait()
    finally:
        observer.stop()
        observer.join()
        await sync.dispatcher.scheduler.drain()
        sync.teardown()
        logger.success(f"Recorded {len(manager.calls)} manifest operation(s)")
    return manager


@app.command()
def watch(
    root: Path = typer.Argument(None, help="Project root (default: PROJSYNC_PROJECT_ROOT or cwd)"),
    include: list[str] = typer.Option(None, "--include", "-i", help="Glob allow-list entry"),
    exclude: list[str] = typer.Option(None, "--exclude", "-e", help="Glob deny-list entry"),
):  # pragma: no cover
    """Watch a project tree and print the manifest operations each change implies.

    Press Ctrl+C to stop watching.
    """
    settings = load_settings(root, include, exclude)
    if not settings.project_root.is_dir():
        logger.error(f"Not a directory: {settings.project_root}")
        raise typer.Exit(1)
    try:
        asyncio.run(run_watch(settings))
    except KeyboardInterrupt:
        logger.info("Stopped watching")


@app.command()
def config(
    root: Path = typer.Argument(None, help="Project root (default: PROJSYNC_PROJECT_ROOT or cwd)"),
):
    """Show the effective synchronization settings."""
    settings = load_settings(root)
    rows = [
        ["enabled", settings.enabled],
        ["project_root", settings.project_root],
        ["include", ", ".join(settings.include)],
        ["exclude", ", ".join(settings.exclude)],
        ["step_timeout", "none" if settings.step_timeout is None else f"{settings.step_timeout}s"],
    ]
    print_table(["Setting", "Value"], rows, title="projsync settings")
