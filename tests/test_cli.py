import json

from typer.testing import CliRunner

import demo
from sift import app

runner = CliRunner()


def test_index_json():
    result = runner.invoke(app, ["index", "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["fox"] == [0, 3]
    assert list(data) == sorted(data)


def test_index_table():
    result = runner.invoke(app, ["index"])
    assert result.exit_code == 0
    assert "Inverted Index" in result.output
    assert "Unique terms: 21" in result.output


def test_query_json():
    result = runner.invoke(app, ["query", "Dogs", "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "query": "dog",
        "doc_ids": [0, 2],
        "outcome": "match",
        "ignored_terms": [],
    }


def test_query_table_and_ignored_terms():
    result = runner.invoke(app, ["query", "lazy fox"])
    assert result.exit_code == 0
    assert 'Found "lazy" in 2 document(s)' in result.output
    assert "ignored: fox" in result.output


def test_query_no_match():
    result = runner.invoke(app, ["query", "zebra"])
    assert result.exit_code == 0
    assert 'No results found for: "zebra"' in result.output


def test_query_with_corpus_file(write_corpus):
    path = write_corpus({"name": "pets", "documents": ["cats purr", "dogs bark"]})
    result = runner.invoke(app, ["query", "cat", "--corpus", path, "--json"])
    assert result.exit_code == 0
    assert json.loads(result.output)["doc_ids"] == [0]


def test_corpus_from_environment(write_corpus):
    path = write_corpus(["penguins waddle"])
    result = runner.invoke(app, ["index", "--json"], env={"SIFT_CORPUS": path})
    assert result.exit_code == 0
    assert json.loads(result.output) == {"penguin": [0], "waddle": [0]}


def test_bad_corpus_exits_nonzero(write_corpus):
    result = runner.invoke(app, ["index", "--corpus", write_corpus({"documents": [1]})])
    assert result.exit_code == 1
    assert "could not load corpus" in result.output


def test_validate(write_corpus):
    ok = runner.invoke(app, ["validate", write_corpus(["brown fox", "brown fox"])])
    assert ok.exit_code == 0
    assert "Validation passed" in ok.output
    assert "duplicates document 0" in ok.output

    bad = runner.invoke(app, ["validate", write_corpus("[1, 2")])
    assert bad.exit_code == 1
    assert "Validation failed" in bad.output


def test_tokenize():
    result = runner.invoke(app, ["tokenize", "The dogs were running"])
    assert result.exit_code == 0
    assert "dog" in result.output
    assert "runn" in result.output

    empty = runner.invoke(app, ["tokenize", "the of a"])
    assert "No terms" in empty.output


def test_build_prints_each_step():
    result = runner.invoke(app, ["--verbose", "build"])
    assert result.exit_code == 0
    assert "Processing Doc 1 of 4" in result.output
    assert "Processing Doc 4 of 4" in result.output
    assert "Index built" in result.output


def test_demo_runs_without_delay():
    index = demo.run_demo(delay=0)
    assert index.is_built
    assert index.lookup("fox") == {0, 3}


def test_query_with_markup_like_input():
    result = runner.invoke(app, ["query", "[/]"])
    assert result.exit_code == 0
    assert 'Query "[/]" contains only stop words' in result.output

    result = runner.invoke(app, ["query", "[bold]"])
    assert result.exit_code == 0
    assert 'No results found for: "bold"' in result.output


def test_query_only_stop_words():
    result = runner.invoke(app, ["query", "the and of"])
    assert result.exit_code == 0
    assert 'Query "the and of" contains only stop words' in result.output


def test_query_empty_and_placeholder():
    for raw in ["", "Enter search term..."]:
        result = runner.invoke(app, ["query", raw])
        assert result.exit_code == 0
        assert "Empty query." in result.output


def test_directory_corpus_exits_nonzero(tmp_path):
    result = runner.invoke(app, ["index", "--corpus", str(tmp_path)])
    assert result.exit_code == 1
    assert "could not load corpus" in result.output
