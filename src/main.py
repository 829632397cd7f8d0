"""Main entry point for RTasks.

With --add or --list a single operation runs and the program exits;
otherwise the interactive full-screen list starts.
"""
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from config import load_settings
from logging_setup import setup_logging
from state import AppState
from storage import LEGACY_FILE, Storage, resolve_data_file
from store import TaskStore
from terminal import Terminal

__version__ = "0.1.0"


def open_store(data_file: Path) -> TaskStore:
    """Migrate a legacy ./tasks.json into data_file and load the store."""
    storage = Storage(data_file)
    if storage.migrate_legacy(LEGACY_FILE):
        click.echo(f"Migrated tasks from ./{LEGACY_FILE} to {storage.path}", err=True)
    return TaskStore(storage)


def print_tasks(store: TaskStore) -> None:
    if not store.tasks:
        click.echo("No tasks found.")
        return
    click.echo("📋 Your tasks:")
    for task in store.tasks:
        status = "✅" if task.completed else "⬜"
        desc = f" - {task.description}" if task.description else ""
        click.echo(f"{status} [{task.id}] {task.title}{desc}")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-a", "--add", "title", metavar="TASK", help="Add a new task and exit.")
@click.option("-d", "--description", default="", metavar="DESCRIPTION",
              help="Description for the task (used with -a).")
@click.option("-l", "--list", "list_tasks", is_flag=True, help="List all tasks and exit.")
@click.version_option(__version__, prog_name="rtasks")
def main(title: Optional[str], description: str, list_tasks: bool) -> None:
    """Terminal Task Manager."""
    settings = load_settings()
    interactive = title is None and not list_tasks
    data_file = resolve_data_file(settings.data_dir)
    setup_logging(
        # no log file in the working directory when only the fallback location is known
        log_dir=data_file.parent if settings.log_file and data_file != LEGACY_FILE else None,
        level=settings.log_level,
        console=not interactive,
    )

    if title is not None and not title.strip():
        raise click.UsageError("task title must not be empty")

    store = open_store(data_file)

    if title is not None:
        store.add(title.strip(), description.strip())
        click.echo(f"✅ Task added: {title.strip()}")
        return

    if list_tasks:
        print_tasks(store)
        return

    if not store.storage.exists():
        click.echo(f"RTasks data will be stored at: {store.storage.path}", err=True)
        click.echo("Press any key to continue...", err=True)
        try:
            click.getchar()
        except (KeyboardInterrupt, EOFError):
            return

    CLI(AppState(store=store), Terminal(alt_screen=settings.alt_screen)).run()


if __name__ == "__main__":
    main()
