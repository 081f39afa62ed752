from __future__ import annotations

import sys
from pathlib import Path

import typer
from dotenv import load_dotenv
from loguru import logger
from rich.console import Console
from rich.markup import escape

from memoire.bootstrap import ensure_data_dir
from memoire.config import get_data_dir, load_config, resolve_data_file
from memoire.errors import AbortedError, MemoireError
from memoire.models import Entry
from memoire.records import format_entry
from memoire.store import NoteStore, join_value

load_dotenv()

app = typer.Typer(help="Memoire -- personal key-value notes in a plain text file")
console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)


def _setup_logging(level: str) -> None:
    logger.remove()
    logger.add(
        lambda message: sys.stderr.write(message),
        level=level.upper(),
        format="<level>{level}</level>: {message}",
    )


def printable(text: str) -> str:
    """Show bytes that were not valid UTF-8 in the data file as U+FFFD."""
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "replace")


def _confirm_prompt(prompt: str) -> bool:
    """Ask on stderr; only an answer starting with y/Y confirms."""
    try:
        reply = err_console.input(f"{printable(prompt)} [y/N]: ", markup=False)
    except (EOFError, KeyboardInterrupt):
        err_console.print()
        return False
    return reply.strip()[:1] in ("y", "Y")


def _print_entry(entry: Entry) -> None:
    console.print(printable(format_entry(entry)), markup=False)


def _fail(exc: MemoireError) -> typer.Exit:
    if isinstance(exc, AbortedError):
        err_console.print(str(exc), markup=False)
    else:
        err_console.print(f"[red]Error:[/red] {escape(printable(str(exc)))}")
    return typer.Exit(1)


def _store(ctx: typer.Context) -> NoteStore:
    return ctx.obj


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    file: Path | None = typer.Option(None, "--file", "-f", help="Data file (default: <data dir>/data.txt)"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Assume yes for confirmations"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Report skipped lines and log debug output"),
):
    """List all entries when no command is given."""
    data_dir = get_data_dir()
    if file is None:
        created = ensure_data_dir(data_dir)
        if created:
            err_console.print(f"[dim]Initialised: {escape(', '.join(created))} in {escape(str(data_dir))}[/dim]")
    config = load_config(data_dir)
    verbose = verbose or config.store.verbose
    _setup_logging("debug" if verbose else config.memoire.log_level)

    ctx.obj = NoteStore(
        resolve_data_file(data_dir, config, file),
        assume_yes=yes or config.store.assume_yes,
        confirm=_confirm_prompt,
        verbose=verbose,
    )
    logger.debug(f"Using data file {ctx.obj.path}")

    if ctx.invoked_subcommand is None:
        list_entries(ctx)


@app.command("list")
def list_entries(ctx: typer.Context):
    """Print every entry as key:value."""
    try:
        entries = _store(ctx).list_entries()
    except MemoireError as exc:
        raise _fail(exc) from exc
    for entry in entries:
        _print_entry(entry)


@app.command("get")
def get_entry(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Key, or characters of the key in order"),
):
    """Look up a key (exact match first, then fuzzy)."""
    try:
        entry = _store(ctx).get(query)
    except MemoireError as exc:
        raise _fail(exc) from exc
    _print_entry(entry)


@app.command("set")
def set_entry(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to create or overwrite"),
    value: list[str] = typer.Argument(..., help="Value; several words are joined with spaces"),
):
    """Create a key or overwrite an existing one."""
    try:
        _store(ctx).set(key, join_value(value))
    except MemoireError as exc:
        raise _fail(exc) from exc
    console.print("OK")


@app.command("update")
def update_entry(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Existing key"),
    value: list[str] = typer.Argument(..., help="New value; several words are joined with spaces"),
):
    """Overwrite the value of an existing key only."""
    try:
        _store(ctx).update(key, join_value(value))
    except MemoireError as exc:
        raise _fail(exc) from exc
    console.print("OK")


@app.command("delete")
def delete_entry(
    ctx: typer.Context,
    key: str = typer.Argument(..., help="Key to delete"),
):
    """Delete a key."""
    try:
        _store(ctx).delete(key)
    except MemoireError as exc:
        raise _fail(exc) from exc
    console.print("OK")


if __name__ == "__main__":
    app()
