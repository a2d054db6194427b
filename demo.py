"""Demo: paced walkthrough of building and querying the inverted index.

Runs the reference corpus through a staged build:
1. Shows each document and the terms it produces
2. Adds terms to the index one at a time, redrawing the index
3. Runs a handful of sample queries, including degenerate ones

Pass a step delay of 0 to run without pauses.
"""

from __future__ import annotations

import sys
import time

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from engine.corpus import Corpus, default_corpus
from engine.index import BuildComplete, DocumentStarted, InvertedIndex, TermAdded
from engine.searcher import MATCH, search
from sift import index_table

console = Console()

STEP_DURATION = 0.8

SAMPLE_QUERIES = [
    "fox",
    "Dogs",
    "lazy",
    "running",
    "the quick fox",
    "the and of",
    "Enter search term...",
    "",
]


def run_build(index: InvertedIndex, corpus: Corpus, delay: float) -> None:
    for event in index.iter_build(corpus):
        if isinstance(event, DocumentStarted):
            console.rule(f"Processing Doc {event.doc_id + 1} of {len(corpus)}")
            console.print(f"[italic]{escape(event.text)}[/italic]")
            console.print(f"Terms after filtering and stemming: [cyan]{', '.join(event.terms)}[/cyan]")
        elif isinstance(event, TermAdded):
            console.print(index_table(index, highlight=event.term))
        elif isinstance(event, BuildComplete):
            console.print(
                Panel(
                    "[bold green]Index built![/bold green] "
                    f"{event.documents} documents, {event.terms} terms. "
                    "Filtered stop words and applied basic stemming.",
                    border_style="green",
                )
            )
        if delay:
            time.sleep(delay)


def run_queries(index: InvertedIndex, corpus: Corpus) -> None:
    for raw in SAMPLE_QUERIES:
        result = search(raw, index)
        console.print(f'\n[bold yellow]→ search[/bold yellow]("{escape(raw)}")')
        if result.outcome == MATCH:
            console.print(
                f'Found "{result.query}" in {len(result.doc_ids)} document(s): '
                f"{result.sorted_ids()}"
            )
            for doc_id in result.sorted_ids():
                console.print(f"  [dim]{doc_id}[/dim] {escape(corpus[doc_id].text)}")
        elif result.query:
            console.print(f'No results found for: "{escape(result.query)}" [dim]({result.outcome})[/dim]')
        else:
            console.print(f"[dim]Empty query ({result.outcome})[/dim]")
        if result.ignored_terms:
            console.print(f"[dim]ignored terms: {', '.join(result.ignored_terms)}[/dim]")


def run_demo(delay: float = STEP_DURATION) -> InvertedIndex:
    corpus = default_corpus()
    index = InvertedIndex()

    console.print(Panel("[bold]Full-text search walkthrough[/bold]", border_style="blue"))
    run_build(index, corpus, delay)
    run_queries(index, corpus)
    return index


if __name__ == "__main__":
    run_demo(float(sys.argv[1]) if len(sys.argv) > 1 else STEP_DURATION)
