"""Query evaluation: raw input → one normalized term → posting set.

Only a single term is ever looked up.  When the query yields several
terms the leftmost one in the input wins and the rest are reported back
as ``ignored_terms``; there is no AND/OR across terms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from engine.index import InvertedIndex
from engine.text import tokenize

logger = logging.getLogger(__name__)

# Placeholder text the input box shows before the user types.
PLACEHOLDER_QUERY = "enter search term..."

MATCH = "match"
NO_MATCH = "no_match"
EMPTY_QUERY = "empty_query"
NO_TERMS = "no_terms"
EMPTY_INDEX = "empty_index"
NOT_BUILT = "not_built"


@dataclass
class SearchResult:
    query: str
    doc_ids: frozenset[int] = frozenset()
    outcome: str = EMPTY_QUERY
    ignored_terms: list[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return self.outcome == MATCH

    def sorted_ids(self) -> list[int]:
        return sorted(self.doc_ids)

    def to_dict(self) -> dict:
        return {
            "query": self.query,
            "doc_ids": self.sorted_ids(),
            "outcome": self.outcome,
            "ignored_terms": list(self.ignored_terms),
        }


def search(raw_query: str, index: InvertedIndex) -> SearchResult:
    """Normalize ``raw_query``, pick its first term and look it up."""
    text = raw_query.strip().lower()
    if not text or text == PLACEHOLDER_QUERY:
        return SearchResult(query="", outcome=EMPTY_QUERY)

    terms = tokenize(text)
    if not terms:
        # Keep the literal input so the caller has something to display.
        return SearchResult(query=text, outcome=NO_TERMS)

    term, ignored = terms[0], terms[1:]
    if ignored:
        logger.debug("Query '%s': using '%s', ignoring %s", text, term, ignored)

    if not index.is_built:
        return SearchResult(query=term, outcome=NOT_BUILT, ignored_terms=ignored)
    if index.document_count == 0:
        return SearchResult(query=term, outcome=EMPTY_INDEX, ignored_terms=ignored)

    doc_ids = index.lookup(term)
    return SearchResult(
        query=term,
        doc_ids=doc_ids,
        outcome=MATCH if doc_ids else NO_MATCH,
        ignored_terms=ignored,
    )
