"""Inverted index: term → set of document ids.

The index is rebuilt from scratch on every build; there is no way to add
or remove a single document.  ``iter_build`` exposes the build one step
at a time for renderers that want to show progress; draining it leaves
the index in exactly the state ``build`` would.

Not thread-safe.  Callers own the instance and must not query it while
a build is running.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from typing import Union

from engine.corpus import Document
from engine.text import tokenize

logger = logging.getLogger(__name__)


# ── Build events ────────────────────────────────────────────────────

@dataclass(frozen=True)
class DocumentStarted:
    doc_id: int
    text: str
    terms: tuple[str, ...]


@dataclass(frozen=True)
class TermAdded:
    doc_id: int
    term: str


@dataclass(frozen=True)
class BuildComplete:
    documents: int
    terms: int


BuildEvent = Union[DocumentStarted, TermAdded, BuildComplete]


# ── Index ───────────────────────────────────────────────────────────

class InvertedIndex:
    def __init__(self) -> None:
        self._postings: dict[str, set[int]] = {}
        self._documents = 0
        self._built = False
        self._building = False

    @property
    def is_built(self) -> bool:
        return self._built

    @property
    def building(self) -> bool:
        return self._building

    @property
    def document_count(self) -> int:
        return self._documents

    def __len__(self) -> int:
        return len(self._postings)

    def __contains__(self, term: object) -> bool:
        return term in self._postings

    def clear(self) -> None:
        self._postings.clear()
        self._documents = 0
        self._built = False
        self._building = False

    def iter_build(self, corpus: Iterable[Document]) -> Iterator[BuildEvent]:
        """Clear the index and rebuild it, yielding each step.

        Order: for each document in corpus order, one DocumentStarted
        followed by a TermAdded per term in tokenizer order; then a
        single BuildComplete.  Each TermAdded is already applied when
        it is yielded.
        """
        self.clear()
        self._building = True

        for doc in corpus:
            terms = tokenize(doc.text)
            logger.debug("Indexing document %d (%d terms)", doc.doc_id, len(terms))
            self._documents += 1
            yield DocumentStarted(doc.doc_id, doc.text, tuple(terms))

            for term in terms:
                self._postings.setdefault(term, set()).add(doc.doc_id)
                yield TermAdded(doc.doc_id, term)

        self._building = False
        self._built = True
        logger.info(
            "Index built: %d documents, %d terms", self._documents, len(self._postings)
        )
        yield BuildComplete(self._documents, len(self._postings))

    def build(
        self,
        corpus: Iterable[Document],
        on_event: Callable[[BuildEvent], None] | None = None,
    ) -> InvertedIndex:
        """Clear and rebuild the index in one pass."""
        for event in self.iter_build(corpus):
            if on_event is not None:
                on_event(event)
        return self

    def lookup(self, term: str) -> frozenset[int]:
        return frozenset(self._postings.get(term, ()))

    def enumerate(self) -> list[tuple[str, list[int]]]:
        """All (term, sorted doc ids) pairs, ordered by term."""
        return [(term, sorted(self._postings[term])) for term in sorted(self._postings)]

    def to_dict(self) -> dict[str, list[int]]:
        return dict(self.enumerate())


def build_index(
    corpus: Iterable[Document],
    on_event: Callable[[BuildEvent], None] | None = None,
) -> InvertedIndex:
    return InvertedIndex().build(corpus, on_event)


def enumerate_index(index: InvertedIndex) -> list[tuple[str, list[int]]]:
    return index.enumerate()
