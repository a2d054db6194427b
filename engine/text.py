"""Shared text normalization for indexing and querying.

Documents and queries must go through the same pipeline, otherwise a
query term can never match the postings built from the corpus.
"""

from __future__ import annotations

import re

STOP_WORDS = frozenset(
    "a an and are as at be by for from has he in is it its of on that the to "
    "was will with or but not this these they them their have had do does did "
    "can could should would may might must shall we you i me my our us his "
    "her him she".split()
)

# ASCII word characters only: letters, digits and underscore.
_SPLIT_RE = re.compile(r"\W+", re.ASCII)

# (suffix, length the word must exceed, characters to drop); first match wins.
_SUFFIX_RULES = (
    ("ing", 5, 3),
    ("ed", 4, 2),
    ("er", 4, 2),
    ("est", 5, 3),
    ("ly", 4, 2),
)


def stem(word: str) -> str:
    """Chop one common English suffix off ``word``.

    Deliberately naive: no recoding and no doubled-consonant handling,
    so ``running`` becomes ``runn`` rather than ``run``.
    """
    for suffix, min_len, cut in _SUFFIX_RULES:
        if word.endswith(suffix) and len(word) > min_len:
            return word[:-cut]
    if word.endswith("s") and not word.endswith("ss") and len(word) > 3:
        return word[:-1]
    return word


def split_words(text: str) -> list[str]:
    """Lowercase → split on runs of non-word characters → drop empties."""
    return [w for w in _SPLIT_RE.split(text.lower()) if w]


def tokenize(text: str) -> list[str]:
    """Return the unique index terms of ``text`` in first-occurrence order.

    Words of length <= 1 and stop words are dropped before stemming.
    """
    terms: dict[str, None] = {}
    for word in split_words(text):
        if len(word) <= 1 or word in STOP_WORDS:
            continue
        terms.setdefault(stem(word), None)
    return list(terms)


def term_set(text: str) -> frozenset[str]:
    """Unordered form of ``tokenize`` for set comparisons."""
    return frozenset(tokenize(text))
