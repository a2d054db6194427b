"""Corpus file validation.

Syntactic = structure and types; any error fails the file.
Warnings   = documents that are valid but contribute nothing useful
             to the index (empty after tokenizing, duplicated text).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from engine.text import tokenize

if TYPE_CHECKING:
    from engine.corpus import Corpus


# ── Syntactic Validation ────────────────────────────────────────────

def validate_corpus_data(data: object) -> list[str]:
    """Check corpus structure and types.  Returns list of error strings."""
    errors: list[str] = []

    if isinstance(data, list):
        documents = data
    elif isinstance(data, dict):
        name = data.get("name")
        if name is not None and (not isinstance(name, str) or not name):
            errors.append("'name' must be a non-empty string if provided.")
        if "documents" not in data:
            errors.append("'documents' is required.")
            return errors
        documents = data["documents"]
    else:
        return ["Corpus must be a JSON object or a list of strings."]

    if not isinstance(documents, list):
        errors.append("'documents' must be a list of strings.")
        return errors

    for i, doc in enumerate(documents):
        if not isinstance(doc, str):
            errors.append(f"'documents[{i}]' must be a string, got {type(doc).__name__}.")

    return errors


# ── Warnings ────────────────────────────────────────────────────────

def find_corpus_warnings(corpus: Corpus) -> list[str]:
    """Report documents that index to nothing and duplicated texts."""
    warnings: list[str] = []
    seen: dict[str, int] = {}

    for doc in corpus:
        if not tokenize(doc.text):
            warnings.append(f"Document {doc.doc_id} produces no index terms.")
        first = seen.setdefault(doc.text, doc.doc_id)
        if first != doc.doc_id:
            warnings.append(f"Document {doc.doc_id} duplicates document {first}.")

    return warnings


# ── Top-level validate ──────────────────────────────────────────────

def validate_corpus_file(corpus_path: str) -> tuple[bool, list[str]]:
    """Run syntactic validation on a corpus file.

    Returns (passed, errors).
    """
    path = Path(corpus_path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        return False, [f"Invalid JSON: {e}"]
    except FileNotFoundError:
        return False, [f"Corpus file not found: {corpus_path}"]
    except UnicodeDecodeError as e:
        return False, [f"Corpus file is not valid UTF-8: {e}"]
    except OSError as e:
        return False, [f"Cannot read corpus file: {e.strerror or e}"]

    errors = validate_corpus_data(data)
    if errors:
        return False, errors

    return True, []
