"""Diary CLI - terminal journal."""

import json
import logging
import sys

import click

from .config import Config, load_config
from .core.buffer import LineBuffer
from .core.entry import Entry, format_tags, parse_tags
from .errors import AssistantError, DiaryError
from .session import EditSession
from .store import EntryStore
from .workflows import get_assistant, insert_generated, open_store, suggest_tags


def _open(config: Config) -> EntryStore:
    """Load the store or exit with an error."""
    try:
        return open_store(config)
    except DiaryError as e:
        click.echo(f"Failed to load diary: {e}", err=True)
        sys.exit(1)


def _fail(e: Exception) -> None:
    click.echo(f"Error: {e}", err=True)
    sys.exit(1)


def _require(store: EntryStore, entry_id: int) -> Entry:
    entry = store.get(entry_id)
    if entry is None:
        click.echo(f"No entry with id {entry_id}.", err=True)
        sys.exit(1)
    return entry


def _entries_json(entries: list[Entry]) -> str:
    return json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False)


def _show_entries(entries: list[Entry], config: Config, as_json: bool, empty_msg: str) -> None:
    """Shared listing logic."""
    if as_json:
        click.echo(_entries_json(entries))
        return

    if not entries:
        click.echo(empty_msg)
        return

    for entry in entries:
        stamp = entry.created_at.strftime(config.date_format)
        tags = f"  [{format_tags(entry.tags)}]" if any(entry.tags) else ""
        click.echo(f"{entry.id:>4}  {stamp}  {entry.preview()}{tags}")


def _edit_interactively(config: Config, content: LineBuffer, tags: LineBuffer, title: str) -> tuple[str, str]:
    """Run the content session, then the tag session."""
    assistant = get_assistant(config)

    def assist(buffer: LineBuffer) -> None:
        prompt = click.prompt("AI prompt")
        click.echo("Waiting for the assistant...")
        insert_generated(buffer, assistant, prompt)

    try:
        text = EditSession(content, title=f"{title} - Content", assist=assist).run()
        raw_tags = EditSession(tags, title=f"{title} - Tags (comma-separated)", multiline=False).run()
    except KeyboardInterrupt:
        click.echo("\nCancelled.", err=True)
        sys.exit(1)
    click.clear()
    return text, raw_tags


@click.group()
@click.version_option(package_name="diary")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """Diary - a terminal journal."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.option("--content", "-c", default=None, help="Entry text (skips the editor)")
@click.option("--tags", "-t", default=None, help="Comma-separated tags")
def write(content: str | None, tags: str | None):
    """Write a new entry."""
    config = load_config()
    store = _open(config)

    if content is None:
        content, raw = _edit_interactively(
            config, LineBuffer.for_new(), LineBuffer.for_new(tags or ""), "New Diary Entry"
        )
        tags = raw

    try:
        entry = store.create(content, parse_tags(tags or ""))
    except DiaryError as e:
        _fail(e)
    click.echo(f"Saved entry {entry.id}.")


@main.command("list")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def list_entries(as_json: bool):
    """List all entries, oldest first."""
    config = load_config()
    store = _open(config)
    _show_entries(store.list(), config, as_json, "No entries yet.")


@main.command()
@click.argument("entry_id", type=int)
def show(entry_id: int):
    """Show one entry in full."""
    config = load_config()
    entry = _require(_open(config), entry_id)

    click.secho(entry.created_at.strftime(config.date_format), fg="cyan", bold=True)
    if any(entry.tags):
        click.echo(f"Tags: {format_tags(entry.tags)}")
    click.echo()
    click.echo(entry.content)


@main.command()
@click.argument("entry_id", type=int)
@click.option("--content", "-c", default=None, help="New entry text (skips the editor)")
@click.option("--tags", "-t", default=None, help="New comma-separated tags")
def edit(entry_id: int, content: str | None, tags: str | None):
    """Edit an entry's content and tags."""
    config = load_config()
    store = _open(config)
    entry = _require(store, entry_id)

    raw_tags = tags if tags is not None else format_tags(entry.tags)
    if content is None:
        content, raw_tags = _edit_interactively(
            config, LineBuffer.for_edit(entry.content), LineBuffer.for_edit(raw_tags), "Edit Diary Entry"
        )

    updated = Entry(
        id=entry.id,
        created_at=entry.created_at,
        content=content,
        tags=parse_tags(raw_tags),
    )
    try:
        found = store.update(updated)
    except DiaryError as e:
        _fail(e)
    if not found:
        click.echo(f"No entry with id {entry_id}.", err=True)
        sys.exit(1)
    click.echo(f"Updated entry {entry_id}.")


@main.command()
@click.argument("entry_id", type=int)
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
def delete(entry_id: int, yes: bool):
    """Delete an entry."""
    config = load_config()
    store = _open(config)
    entry = _require(store, entry_id)

    if not yes and not click.confirm(f"Delete entry {entry_id} ({entry.preview(30)})?"):
        click.echo("Kept.")
        return

    try:
        store.delete(entry_id)
    except DiaryError as e:
        _fail(e)
    click.echo(f"Deleted entry {entry_id}.")


@main.command()
@click.argument("query", default="")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def search(query: str, as_json: bool):
    """Find entries whose text or tags contain QUERY."""
    config = load_config()
    store = _open(config)
    _show_entries(store.search(query), config, as_json, f"No entries match '{query}'.")


@main.command("suggest-tags")
@click.argument("entry_id", type=int)
@click.option("--apply", "apply_tags", is_flag=True, help="Store the suggested tags on the entry")
def suggest_tags_cmd(entry_id: int, apply_tags: bool):
    """Ask the assistant to suggest tags for an entry."""
    config = load_config()
    store = _open(config)
    entry = _require(store, entry_id)

    try:
        tags = suggest_tags(get_assistant(config), entry.content)
    except AssistantError as e:
        _fail(e)

    if not tags:
        click.echo("The assistant did not suggest any tags.")
        return

    click.echo(format_tags(tags))
    if apply_tags:
        try:
            store.update(Entry(id=entry.id, created_at=entry.created_at, content=entry.content, tags=tags))
        except DiaryError as e:
            _fail(e)
        click.echo(f"Updated entry {entry_id}.")
