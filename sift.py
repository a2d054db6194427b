"""Sift CLI — terminal front end to the in-memory search engine.

Five commands: validate, tokenize, index, build, query.
Uses typer for argument parsing and rich for formatted terminal output.
Every command builds a fresh index; nothing is persisted between runs.
"""

from __future__ import annotations

import json
import logging
import time

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from engine.corpus import Corpus, CorpusError, load_corpus
from engine.index import BuildComplete, DocumentStarted, InvertedIndex, TermAdded
from engine.searcher import MATCH, SearchResult, search
from engine.text import tokenize
from engine.validator import find_corpus_warnings, validate_corpus_file

app = typer.Typer(help="Sift: a tiny inverted-index search engine.")
console = Console()

CORPUS_ENVVAR = "SIFT_CORPUS"

OUTCOME_MESSAGES = {
    "no_match": "No results found for: \"{query}\"",
    "empty_query": "Empty query.",
    "no_terms": "Query \"{query}\" contains only stop words or short words.",
    "empty_index": "The corpus is empty; nothing to search.",
    "not_built": "Search is available after indexing completes.",
}


def _corpus_option():
    return typer.Option(
        None,
        "--corpus",
        "-c",
        envvar=CORPUS_ENVVAR,
        help="Path to corpus JSON (default: built-in reference corpus)",
    )


def _load(corpus_path: str | None) -> Corpus:
    try:
        return load_corpus(corpus_path)
    except CorpusError as e:
        console.print(f"[red]Error: could not load corpus '{escape(e.path)}'[/red]")
        for err in e.errors:
            console.print(f"  [red]✗[/red] {escape(err)}")
        raise typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


# ── validate ────────────────────────────────────────────────────────


@app.command()
def validate(corpus_path: str = typer.Argument(..., help="Path to corpus JSON")):
    """Check a corpus file for structural errors and report warnings."""
    passed, errors = validate_corpus_file(corpus_path)

    if not passed:
        console.print(
            Panel("[bold red]✗ Validation failed[/bold red]", border_style="red")
        )
        for err in errors:
            console.print(f"  [red]✗[/red] {escape(err)}")
        raise typer.Exit(code=1)

    console.print(
        Panel("[bold green]✓ Validation passed[/bold green]", border_style="green")
    )
    for warning in find_corpus_warnings(load_corpus(corpus_path)):
        console.print(f"  [yellow]![/yellow] {warning}")


# ── tokenize ────────────────────────────────────────────────────────


@app.command("tokenize")
def tokenize_cmd(text: str = typer.Argument(..., help="Text to normalize")):
    """Show the index terms a piece of text produces."""
    terms = tokenize(text)
    if not terms:
        console.print("[dim]No terms (only stop words or short words).[/dim]")
        return
    console.print(" ".join(f"[cyan]{t}[/cyan]" for t in terms))


# ── index ───────────────────────────────────────────────────────────


def index_table(index: InvertedIndex, highlight: str = "") -> Table:
    table = Table(title="Inverted Index")
    table.add_column("Term", style="cyan")
    table.add_column("Documents", style="green")
    for term, doc_ids in index.enumerate():
        style = "bold yellow" if term == highlight else None
        table.add_row(term, ", ".join(str(i) for i in doc_ids), style=style)
    return table


@app.command()
def index(
    corpus_path: str | None = _corpus_option(),
    as_json: bool = typer.Option(False, "--json", help="Print the index as JSON"),
):
    """Build the index over a corpus and print every term."""
    corpus = _load(corpus_path)
    idx = InvertedIndex().build(corpus)

    if as_json:
        console.print_json(json.dumps(idx.to_dict()))
        return

    console.print(index_table(idx))
    console.print(
        f"\n[bold]Corpus:[/bold] {corpus.name} | "
        f"Documents: {idx.document_count} | Unique terms: {len(idx)}"
    )


# ── build ───────────────────────────────────────────────────────────


@app.command()
def build(
    corpus_path: str | None = _corpus_option(),
    delay: float = typer.Option(0.0, "--delay", min=0.0, help="Seconds to pause per step"),
):
    """Build the index step by step, printing each event."""
    corpus = _load(corpus_path)

    for event in InvertedIndex().iter_build(corpus):
        if isinstance(event, DocumentStarted):
            console.print(
                f"\n[bold blue]Processing Doc {event.doc_id + 1} of {len(corpus)}[/bold blue]: "
                f"{escape(event.text)}"
            )
            console.print(f"  terms: {', '.join(event.terms) or '[dim]none[/dim]'}")
        elif isinstance(event, TermAdded):
            console.print(f"  [green]+[/green] {event.term} → {event.doc_id}")
        elif isinstance(event, BuildComplete):
            console.print(
                Panel(
                    f"[bold green]✓ Index built[/bold green]: "
                    f"{event.documents} documents, {event.terms} terms",
                    border_style="green",
                )
            )
        if delay:
            time.sleep(delay)


# ── query ───────────────────────────────────────────────────────────


def _print_result(result: SearchResult, corpus: Corpus) -> None:
    console.print(f'\n[bold]Query term:[/bold] "{escape(result.query)}"')
    if result.ignored_terms:
        console.print(
            f"[yellow]Only the first term is searched; ignored: "
            f"{', '.join(result.ignored_terms)}[/yellow]"
        )

    if result.outcome != MATCH:
        console.print(OUTCOME_MESSAGES[result.outcome].format(query=escape(result.query)))
        return

    table = Table()
    table.add_column("Doc", style="dim", width=4)
    table.add_column("Text", style="cyan", min_width=30)
    for doc_id in result.sorted_ids():
        table.add_row(str(doc_id), escape(corpus[doc_id].text))
    console.print(table)
    console.print(f"\nFound \"{result.query}\" in {len(result.doc_ids)} document(s)")


@app.command()
def query(
    q: str = typer.Argument(..., help="Search query string"),
    corpus_path: str | None = _corpus_option(),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Build the index, run a single-term query and show matching documents."""
    corpus = _load(corpus_path)
    idx = InvertedIndex().build(corpus)
    result = search(q, idx)

    if as_json:
        console.print_json(json.dumps(result.to_dict()))
        return

    _print_result(result, corpus)


if __name__ == "__main__":
    app()
