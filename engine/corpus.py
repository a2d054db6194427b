"""Corpus model and loading.

A corpus is fixed once loaded: document ids are zero-based positions
assigned at load time and are never renumbered.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path

from engine.validator import validate_corpus_data

logger = logging.getLogger(__name__)

DEFAULT_CORPUS_NAME = "reference"

DEFAULT_DOCUMENTS = (
    "The quick brown fox jumps over the lazy dog",
    "A lazy cat sleeps peacefully in the warm sun",
    "The brown dog runs quickly through the green park",
    "Quick reflexes help the clever fox survive in nature",
)


class CorpusError(ValueError):
    """Raised when a corpus file cannot be loaded."""

    def __init__(self, path: str, errors: list[str]):
        self.path = path
        self.errors = errors
        super().__init__(f"Invalid corpus '{path}': " + "; ".join(errors))


@dataclass(frozen=True)
class Document:
    doc_id: int
    text: str


@dataclass(frozen=True)
class Corpus:
    name: str
    documents: tuple[Document, ...]

    @classmethod
    def from_texts(cls, texts: Iterable[str], name: str = DEFAULT_CORPUS_NAME) -> Corpus:
        return cls(name, tuple(Document(i, t) for i, t in enumerate(texts)))

    def __iter__(self) -> Iterator[Document]:
        return iter(self.documents)

    def __len__(self) -> int:
        return len(self.documents)

    def __getitem__(self, doc_id: int) -> Document:
        if doc_id < 0:
            raise IndexError(f"document id out of range: {doc_id}")
        return self.documents[doc_id]

    def texts(self) -> list[str]:
        return [d.text for d in self.documents]


def default_corpus() -> Corpus:
    return Corpus.from_texts(DEFAULT_DOCUMENTS)


def load_corpus(path: str | None = None) -> Corpus:
    """Load a corpus JSON file, or the reference corpus when ``path`` is None.

    Accepts ``{"name": ..., "documents": [...]}`` or a bare list of strings.
    """
    if path is None:
        return default_corpus()

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise CorpusError(path, [f"Corpus file not found: {path}"])
    except json.JSONDecodeError as e:
        raise CorpusError(path, [f"Invalid JSON: {e}"])
    except UnicodeDecodeError as e:
        raise CorpusError(path, [f"Corpus file is not valid UTF-8: {e}"])
    except OSError as e:
        raise CorpusError(path, [f"Cannot read corpus file: {e.strerror or e}"])

    errors = validate_corpus_data(data)
    if errors:
        raise CorpusError(path, errors)

    if isinstance(data, list):
        name, texts = Path(path).stem, data
    else:
        name, texts = data.get("name") or Path(path).stem, data["documents"]

    corpus = Corpus.from_texts(texts, name)
    logger.debug("Loaded corpus '%s' with %d documents from %s", name, len(corpus), path)
    return corpus
