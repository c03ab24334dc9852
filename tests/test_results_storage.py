from __future__ import annotations

import json

import pytest

from tests.factories import make_result, make_violation
from vpat.errors import InputError
from vpat.results_storage import ResultsStorage


def test_save_and_load(tmp_path) -> None:
    results = [
        make_result("https://example.com", [make_violation("image-alt", "critical", ["<img>", "<img>"])]),
        make_result("https://example.com/about", [make_violation("region", "moderate")]),
    ]
    storage = ResultsStorage()

    path = storage.save_results(results, str(tmp_path / "nested" / "results.json"))

    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["summary"]["pages"] == 2
    assert data["summary"]["violations"] == 2
    assert data["summary"]["impact_breakdown"]["critical"] == 1
    assert data["summary"]["impact_breakdown"]["moderate"] == 1
    assert "timestamp" in data

    loaded = storage.load_results(str(path))
    assert [r.url for r in loaded] == ["https://example.com", "https://example.com/about"]
    assert loaded[0].violations[0].rule_id == "image-alt"
    assert len(loaded[0].violations[0].nodes) == 2
    assert loaded[0].violations[0].help == results[0].violations[0].help


def test_load_bare_list_and_single_object(tmp_path) -> None:
    axe_result = {"url": "https://example.com", "violations": [{"id": "document-title", "impact": "serious",
                                                               "nodes": [{"html": "<html>"}]}]}
    as_list = tmp_path / "list.json"
    as_list.write_text(json.dumps([axe_result, axe_result]), encoding="utf-8")
    single = tmp_path / "single.json"
    single.write_text(json.dumps(axe_result), encoding="utf-8")

    storage = ResultsStorage()
    assert len(storage.load_results(str(as_list))) == 2
    loaded = storage.load_results(str(single))
    assert len(loaded) == 1
    assert loaded[0].violations[0].rule_id == "document-title"


@pytest.mark.parametrize("content", ['{"pages": 3}', "42", "[1, 2]", "{broken"])
def test_load_rejects_unexpected_content(tmp_path, content) -> None:
    path = tmp_path / "results.json"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(InputError) as exc_info:
        ResultsStorage().load_results(str(path))
    assert exc_info.value.path == str(path)


def test_load_missing_file(tmp_path) -> None:
    with pytest.raises(InputError, match="Error reading results"):
        ResultsStorage().load_results(str(tmp_path / "nope.json"))
