import json

import pytest

from engine.corpus import default_corpus
from engine.index import InvertedIndex


@pytest.fixture
def corpus():
    return default_corpus()


@pytest.fixture
def index(corpus):
    return InvertedIndex().build(corpus)


@pytest.fixture
def write_corpus(tmp_path):
    def _write(data, name="corpus.json"):
        path = tmp_path / name
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)

    return _write
