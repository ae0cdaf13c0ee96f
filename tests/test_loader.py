from __future__ import annotations

import json
from pathlib import Path

import pytest

from tracefile.errors import ModelError
from tracefile.loader import coverage_from_payload, load_coverage


def _snapshot() -> dict:
    return {
        "source_files": [
            {
                "source_file": "foo.cc",
                "functions": [
                    {"name": "bar", "line": 10, "execution_count": 3},
                    {"name": "only_declared", "line": 20},
                    {"name": "only_counted", "execution_count": 0},
                ],
                "branches": [
                    {"line": 12, "block": 0, "branch": 1, "executed": True, "execution_count": 2},
                    {"line": 14, "executed": False},
                ],
                "lines": [
                    {"line": 10, "execution_count": 3},
                    {"line": 11, "execution_count": 0, "checksum": "abc"},
                ],
            },
            {"source_file": "empty.cc"},
        ]
    }


def test_load_coverage_builds_model(tmp_path: Path) -> None:
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(_snapshot()), encoding="utf-8")

    coverage = load_coverage(path)

    foo, empty = coverage.all_source_files()
    assert foo.source_file_name == "foo.cc"
    assert foo.all_line_numbers() == [("bar", 10), ("only_declared", 20)]
    assert foo.all_execution_counts() == [("bar", 3), ("only_counted", 0)]
    assert foo.branches[0].has_block_and_branch
    assert foo.branches[0].execution_count == 2
    assert (foo.branches[1].block_number, foo.branches[1].branch_number) == (-1, -1)
    assert foo.line_executions[1].checksum == "abc"
    assert foo.line_executions[0].checksum is None
    assert empty.instrumented_lines == 0


def test_missing_file_is_model_error(tmp_path: Path) -> None:
    with pytest.raises(ModelError, match="Could not read"):
        load_coverage(tmp_path / "nope.json")


def test_invalid_json_is_model_error(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ModelError, match="not valid JSON"):
        load_coverage(path)


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ([], "must be a JSON object"),
        ({"source_files": {}}, "'source_files' must be a list"),
        ({"source_files": [{}]}, "missing 'source_file'"),
        ({"source_files": [{"source_file": "a", "lines": [{"line": "1", "execution_count": 0}]}]}, "'line' must be an integer"),
        ({"source_files": [{"source_file": "a", "lines": [{"line": 1}]}]}, "missing 'execution_count'"),
        ({"source_files": [{"source_file": "a", "branches": [{"line": True}]}]}, "'line' must be an integer"),
        ({"source_files": [{"source_file": "a", "functions": [{"line": 1}]}]}, "missing 'name'"),
        ({"source_files": [{"source_file": "a", "lines": [{"line": 1, "execution_count": 1, "checksum": 5}]}]}, "'checksum'"),
    ],
)
def test_structural_problems_name_the_entry(payload: object, message: str) -> None:
    with pytest.raises(ModelError, match=message):
        coverage_from_payload(payload)


def test_negative_counts_are_loaded_unchanged() -> None:
    coverage = coverage_from_payload(
        {"source_files": [{"source_file": "a", "lines": [{"line": 1, "execution_count": -4}]}]}
    )

    assert coverage.all_source_files()[0].line_executions[0].execution_count == -4


def test_empty_source_file_name_is_loaded() -> None:
    coverage = coverage_from_payload({"source_files": [{"source_file": ""}]})

    assert coverage.all_source_files()[0].source_file_name == ""
