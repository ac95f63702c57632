"""
Terminal chat front-end for ragbooks.
Provides commands to chat with the book assistant and browse the corpus.
"""

import asyncio
import logging
from typing import List

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import settings
from .client import RagServiceClient
from .errors import RagBooksError
from .formatter import Block, Header, ListBlock, format_response
from .models import Book, RagResult
from .orchestrator import ChatOrchestrator

app = typer.Typer(
    name="ragbooks",
    help="Ask questions about your books and get answers with sources",
    add_completion=False
)

console = Console()

CLEAR_COMMAND = "/clear"
QUIT_COMMANDS = {"/quit", "/exit"}


def _configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else settings.LOG_LEVEL
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _build_orchestrator(base_url: str, timeout: float) -> ChatOrchestrator:
    return ChatOrchestrator(RagServiceClient(base_url=base_url, timeout=timeout))


def render_blocks(blocks: List[Block]) -> Text:
    """Render display blocks as rich text."""
    text = Text()
    for block in blocks:
        if isinstance(block, Header):
            text.append(block.text + "\n", style="bold underline")
        elif isinstance(block, ListBlock):
            for item in block.items:
                text.append(f"  • {item}\n")
        else:
            text.append(block.text + "\n")
    text.rstrip()
    return text


def print_result(orchestrator: ChatOrchestrator, result: RagResult) -> None:
    """Print an answer, its sources and confidence."""
    console.print(Panel(
        render_blocks(format_response(result.response)),
        title="Assistant",
        border_style="green"
    ))

    turn = orchestrator.last_turn
    books = orchestrator.source_books(turn) if turn else []
    if books:
        console.print("[bold]Sources:[/]")
        for book in books:
            console.print(f"  {book.title} [dim]by {book.author}[/]")
    console.print(f"[dim]Confidence: {result.confidence:.0%}[/]")


def print_books(books: List[Book], title: str) -> None:
    """Print books as a table."""
    table = Table(title=title)
    table.add_column("ID", justify="right")
    table.add_column("Title")
    table.add_column("Author")
    table.add_column("Year", justify="right")
    table.add_column("Tags")
    for book in books:
        table.add_row(str(book.id), book.title, book.author, str(book.published_year), ", ".join(book.tags))
    console.print(table)


async def _ask_and_print(orchestrator: ChatOrchestrator, question: str) -> None:
    try:
        result = await orchestrator.ask(question)
    except RagBooksError as e:
        console.print(f"[yellow]Warning:[/] {e}")
        return

    if result is None:
        console.print(f"[red]Error:[/] {orchestrator.error}")
        return
    print_result(orchestrator, result)


async def _chat_loop(orchestrator: ChatOrchestrator) -> None:
    await orchestrator.initialize()
    console.print(Panel(
        "Ask me anything about the books in your library.\n"
        f"Type {CLEAR_COMMAND} to start over, /quit to leave.",
        title="RAG Books Assistant",
        border_style="blue"
    ))

    while True:
        try:
            question = console.input("[bold cyan]You:[/] ").strip()
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        if not question:
            continue
        if question in QUIT_COMMANDS:
            break
        if question == CLEAR_COMMAND:
            orchestrator.clear()
            console.print(f"[green]Conversation cleared.[/] Session {orchestrator.session_id}")
            continue

        await _ask_and_print(orchestrator, question)


@app.command()
def chat(
    base_url: str = typer.Option(settings.RAG_API_URL, "--url", help="Remote answering service URL"),
    timeout: float = typer.Option(settings.RAG_API_TIMEOUT, "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
) -> None:
    """Start an interactive chat session."""
    _configure_logging(verbose)
    asyncio.run(_chat_loop(_build_orchestrator(base_url, timeout)))


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question about your books"),
    base_url: str = typer.Option(settings.RAG_API_URL, "--url", help="Remote answering service URL"),
    timeout: float = typer.Option(settings.RAG_API_TIMEOUT, "--timeout", help="Request timeout in seconds"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")
) -> None:
    """Ask a single question and print the answer."""
    _configure_logging(verbose)
    orchestrator = _build_orchestrator(base_url, timeout)

    async def run() -> None:
        await orchestrator.initialize()
        await _ask_and_print(orchestrator, question)

    asyncio.run(run())
    if orchestrator.error:
        raise typer.Exit(code=1)


@app.command()
def books(
    base_url: str = typer.Option(settings.RAG_API_URL, "--url", help="Remote answering service URL"),
    timeout: float = typer.Option(settings.RAG_API_TIMEOUT, "--timeout", help="Request timeout in seconds")
) -> None:
    """List the books in the library."""
    orchestrator = _build_orchestrator(base_url, timeout)

    async def run() -> List[Book]:
        await orchestrator.initialize()
        return await orchestrator.fetch_books()

    print_books(asyncio.run(run()), title="Library")
    if orchestrator.error:
        console.print(f"[red]Error:[/] {orchestrator.error}")


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to look for in titles, content and tags"),
    base_url: str = typer.Option(settings.RAG_API_URL, "--url", help="Remote answering service URL"),
    timeout: float = typer.Option(settings.RAG_API_TIMEOUT, "--timeout", help="Request timeout in seconds")
) -> None:
    """Search the library."""
    orchestrator = _build_orchestrator(base_url, timeout)

    async def run() -> List[Book]:
        await orchestrator.initialize()
        return await orchestrator.search_books(query)

    found = asyncio.run(run())
    if orchestrator.error:
        console.print(f"[red]Error:[/] {orchestrator.error}")
        raise typer.Exit(code=1)
    print_books(found, title=f"Results for '{query}'")


if __name__ == "__main__":
    app()
