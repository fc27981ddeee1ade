"""Command-line interface for Vita.

Each command:
1. Parses args (via Typer)
2. Builds a Vita instance from config files and environment
3. Calls the repository, pipeline or conversation manager
4. Renders results with Rich
"""

from __future__ import annotations

import asyncio
import logging

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from vita import __version__
from vita.config import create_vita, load_env_file
from vita.exceptions import VitaError
from vita.loaders import HTMLEntryLoader
from vita.logging_config import setup_logging
from vita.models import (
    ChatAnswer,
    ContentFrame,
    ConversationSummary,
    EntryDraft,
    EntryUpdate,
    ErrorFrame,
    KnowledgeEntry,
    MetadataFrame,
    Sender,
)
from vita.vita import Vita

app = typer.Typer(
    name="vita",
    help="Vita - health knowledge base with retrieval-grounded chat.",
    no_args_is_help=True,
)
conversations_app = typer.Typer(help="Chat and manage a user's conversations", no_args_is_help=True)
app.add_typer(conversations_app, name="conversations")
console = Console()

DATA_DIR_HELP = "Data directory (default: from settings)"
CONFIG_HELP = "Path to config file"
USER_HELP = "Owner of the conversations"


def version_callback(value: bool) -> None:
    if value:
        console.print(f"vita {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Vita - health knowledge base with retrieval-grounded chat."""
    load_env_file()
    setup_logging(logging.DEBUG if verbose else logging.WARNING)


def _fail(error: Exception) -> typer.Exit:
    console.print(f"[red]Error: {error}[/red]")
    return typer.Exit(1)


def _get_vita(data_dir: str | None, config_file: str | None) -> Vita:
    try:
        return create_vita(data_dir=data_dir, config_path=config_file)
    except (OSError, ValueError) as e:
        raise _fail(e) from None


def _preview(text: str, width: int = 100) -> str:
    preview = text[:width].replace("\n", " ")
    if len(text) > width:
        preview += "..."
    return preview


def _render_entry(entry: KnowledgeEntry) -> None:
    table = Table(title=entry.title, show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("ID", entry.id)
    table.add_row("Source", entry.source_url or "-")
    table.add_row("Indexed", "yes" if entry.is_indexed else "no")
    table.add_row("Created", entry.created_at.isoformat(timespec="seconds"))
    table.add_row("Updated", entry.updated_at.isoformat(timespec="seconds"))
    console.print(table)
    console.print(Panel(Markdown(entry.content), border_style="dim"))


def _render_sources(answer: ChatAnswer | MetadataFrame) -> None:
    if not answer.rag_results:
        return
    console.print("[bold]Sources:[/bold]")
    for i, source in enumerate(answer.rag_results, 1):
        console.print(
            f"  [{i}] [cyan]{source.title}[/cyan] [dim](similarity: {source.similarity:.3f})[/dim]"
        )
        if source.source_url:
            console.print(f"      [dim]{source.source_url}[/dim]")


def _render_summaries(summaries: list[ConversationSummary], title: str) -> None:
    if not summaries:
        console.print("[dim]No conversations found.[/dim]")
        raise typer.Exit(0)

    table = Table(title=f"{title} ({len(summaries)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Messages", justify="right")
    table.add_column("Updated", style="green")
    for summary in summaries:
        conversation = summary.conversation
        table.add_row(
            conversation.id,
            conversation.title,
            str(summary.message_count),
            conversation.updated_at.isoformat(timespec="seconds"),
        )
    console.print(table)


# Knowledge entries


@app.command()
def add(
    title: str = typer.Option(None, "--title", "-t", help="Entry title"),
    content: str = typer.Option(None, "--content", help="Entry content"),
    source_url: str = typer.Option("", "--source", "-s", help="Source URL"),
    html: str = typer.Option(None, "--html", help="Saved HTML page to import"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Add a knowledge entry (embedded before it is stored)."""
    try:
        if html:
            draft = HTMLEntryLoader().load_file(html, source_url or None)
            if title:
                draft = draft.model_copy(update={"title": title})
        else:
            if not title or not content:
                console.print("[red]Error: --title and --content are required without --html[/red]")
                raise typer.Exit(1)
            draft = EntryDraft(title=title, content=content, source_url=source_url)
    except (OSError, VitaError) as e:
        raise _fail(e) from None

    vita = _get_vita(data_dir, config_file)
    try:
        entry = vita.repository.create_entry(draft)
    except VitaError as e:
        raise _fail(e) from None
    console.print(f"[green]Added {entry.title!r}[/green] [dim]({entry.id})[/dim]")


@app.command()
def show(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Show a knowledge entry."""
    vita = _get_vita(data_dir, config_file)
    try:
        entry = vita.repository.get_entry(entry_id)
    except VitaError as e:
        raise _fail(e) from None
    _render_entry(entry)


@app.command(name="list")
def list_entries_cmd(
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """List all knowledge entries, newest first."""
    vita = _get_vita(data_dir, config_file)
    entries = vita.repository.list_entries()

    if not entries:
        console.print("[dim]No knowledge entries. Run 'vita add' first.[/dim]")
        raise typer.Exit(0)

    indexed = vita.repository.count_indexed()
    table = Table(title=f"Knowledge Entries ({len(entries)}, {indexed} indexed)")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Source")
    table.add_column("Created", style="green")
    for entry in entries:
        table.add_row(
            entry.id,
            entry.title,
            entry.source_url or "-",
            entry.created_at.isoformat(timespec="seconds"),
        )
    console.print(table)


@app.command()
def update(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    title: str = typer.Option(None, "--title", "-t", help="New title"),
    content: str = typer.Option(None, "--content", help="New content (re-embeds the entry)"),
    source_url: str = typer.Option(None, "--source", "-s", help="New source URL"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Update fields of a knowledge entry."""
    vita = _get_vita(data_dir, config_file)
    try:
        entry = vita.repository.update_entry(
            entry_id, EntryUpdate(title=title, content=content, source_url=source_url)
        )
    except VitaError as e:
        raise _fail(e) from None
    console.print(f"[green]Updated {entry.title!r}[/green] [dim]({entry.id})[/dim]")


@app.command()
def delete(
    entry_id: str = typer.Argument(..., help="Entry ID"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Delete a knowledge entry."""
    vita = _get_vita(data_dir, config_file)
    try:
        entry = vita.repository.get_entry(entry_id)
        if not force:
            console.print(f"[yellow]This will delete {entry.title!r}.[/yellow]")
            if not typer.confirm("Continue?"):
                console.print("Cancelled.")
                raise typer.Exit(0)
        vita.repository.delete_entry(entry_id)
    except VitaError as e:
        raise _fail(e) from None
    console.print(f"[green]Deleted {entry.title!r}[/green]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Search text"),
    limit: int = typer.Option(None, "--limit", "-k", help="Maximum number of results"),
    threshold: float = typer.Option(None, "--threshold", "-t", help="Minimum similarity (0-1)"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Similarity search over the knowledge base."""
    vita = _get_vita(data_dir, config_file)
    try:
        results = vita.search(query, limit, threshold)
    except VitaError as e:
        raise _fail(e) from None

    if not results:
        console.print("[yellow]No results found.[/yellow]")
        raise typer.Exit(0)

    for i, result in enumerate(results, 1):
        entry = result.entry
        console.print(
            f"  [{i}] [cyan]{entry.title}[/cyan] [dim](similarity: {result.similarity:.3f})[/dim]"
        )
        console.print(f"      [dim]{_preview(entry.content)}[/dim]")


async def _stream_answer(
    vita: Vita,
    question: str,
    limit: int | None,
    threshold: float | None,
    temperature: float | None,
) -> bool:
    metadata = None
    ok = True
    async for frame in vita.pipeline.stream_frames(question, limit, threshold, temperature):
        if isinstance(frame, MetadataFrame):
            metadata = frame
        elif isinstance(frame, ContentFrame):
            console.print(frame.text, end="", markup=False, highlight=False)
        elif isinstance(frame, ErrorFrame):
            console.print()
            console.print(f"[red]Error: {frame.message}[/red]")
            ok = False
    console.print()
    if metadata is not None:
        console.print()
        _render_sources(metadata)
    return ok


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question to ask"),
    limit: int = typer.Option(None, "--limit", "-k", help="Knowledge entries to retrieve"),
    threshold: float = typer.Option(None, "--threshold", "-t", help="Minimum similarity (0-1)"),
    temperature: float = typer.Option(None, "--temperature", help="Sampling temperature (0-2)"),
    stream: bool = typer.Option(False, "--stream", help="Print the answer as it is generated"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Ask a question answered from the knowledge base."""
    vita = _get_vita(data_dir, config_file)

    if stream:
        try:
            ok = asyncio.run(_stream_answer(vita, question, limit, threshold, temperature))
        except VitaError as e:
            raise _fail(e) from None
        if not ok:
            raise typer.Exit(1)
        return

    try:
        answer = vita.pipeline.answer(question, limit, threshold, temperature)
    except VitaError as e:
        raise _fail(e) from None

    border = "green" if answer.has_results else "yellow"
    console.print(Panel(Markdown(answer.text), title="Answer", border_style=border))
    console.print()
    _render_sources(answer)


# Conversations


@conversations_app.command()
def chat(
    question: str = typer.Argument(..., help="Question to ask"),
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    conversation_id: str = typer.Option(
        None, "--conversation", help="Conversation to continue (default: start a new one)"
    ),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Run one chat turn, starting a conversation when none is given."""
    vita = _get_vita(data_dir, config_file)
    try:
        turn = vita.conversations.start_or_continue(user, question, conversation_id)
    except VitaError as e:
        raise _fail(e) from None

    if turn is None:
        console.print("[yellow]No answer was generated.[/yellow]")
        raise typer.Exit(1)

    console.print(f"[bold]{turn.conversation.title}[/bold] [dim]({turn.conversation.id})[/dim]")
    console.print(Panel(Markdown(turn.bot_message.content), title="Vita", border_style="green"))
    _render_sources(turn.answer)


@conversations_app.command(name="list")
def list_conversations_cmd(
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """List a user's conversations, most recently updated first."""
    vita = _get_vita(data_dir, config_file)
    try:
        summaries = vita.conversations.list_conversations(user)
    except VitaError as e:
        raise _fail(e) from None
    _render_summaries(summaries, "Conversations")


@conversations_app.command(name="search")
def search_conversations_cmd(
    term: str = typer.Argument(..., help="Text to look for in titles"),
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Find a user's conversations by title."""
    vita = _get_vita(data_dir, config_file)
    try:
        summaries = vita.conversations.search_conversations(user, term)
    except VitaError as e:
        raise _fail(e) from None
    _render_summaries(summaries, f"Conversations matching {term!r}")


@conversations_app.command(name="show")
def show_conversation_cmd(
    conversation_id: str = typer.Argument(..., help="Conversation ID"),
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Show a conversation with all of its messages."""
    vita = _get_vita(data_dir, config_file)
    try:
        detail = vita.conversations.get_by_id(user, conversation_id)
    except VitaError as e:
        raise _fail(e) from None

    console.print(f"[bold]{detail.conversation.title}[/bold] [dim]({detail.conversation.id})[/dim]")
    for message in detail.messages:
        style = "cyan" if message.sender is Sender.USER else "green"
        console.print(f"[{style}]{message.sender.value}[/{style}]: ", end="")
        console.print(message.content, markup=False, highlight=False)


@conversations_app.command(name="rename")
def rename_conversation_cmd(
    conversation_id: str = typer.Argument(..., help="Conversation ID"),
    title: str = typer.Argument(..., help="New title"),
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Rename a conversation."""
    vita = _get_vita(data_dir, config_file)
    try:
        conversation = vita.conversations.rename(user, conversation_id, title)
    except VitaError as e:
        raise _fail(e) from None
    console.print(f"[green]Renamed to {conversation.title!r}[/green]")


@conversations_app.command(name="delete")
def delete_conversation_cmd(
    conversation_id: str = typer.Argument(..., help="Conversation ID"),
    user: str = typer.Option(..., "--user", "-u", help=USER_HELP),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation prompt"),
    data_dir: str = typer.Option(None, "--data-dir", "-d", help=DATA_DIR_HELP),
    config_file: str = typer.Option(None, "--config", "-c", help=CONFIG_HELP),
) -> None:
    """Delete a conversation and all of its messages."""
    vita = _get_vita(data_dir, config_file)
    try:
        if not force:
            detail = vita.conversations.get_by_id(user, conversation_id)
            console.print(
                f"[yellow]This will delete {detail.conversation.title!r} "
                f"and {len(detail.messages)} message(s).[/yellow]"
            )
            if not typer.confirm("Continue?"):
                console.print("Cancelled.")
                raise typer.Exit(0)
        conversation = vita.conversations.remove(user, conversation_id)
    except VitaError as e:
        raise _fail(e) from None
    console.print(f"[green]Deleted {conversation.title!r}[/green]")
