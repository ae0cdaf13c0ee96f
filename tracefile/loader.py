"""Build a Coverage from the JSON model snapshot written by the aggregation stage."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ModelError
from .model import UNKNOWN, BranchCoverage, Coverage, LineCoverage, SourceFileCoverage


def load_coverage(path: Path) -> Coverage:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ModelError(f"Could not read coverage snapshot {path}: {exc}") from exc
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ModelError(f"Coverage snapshot {path} is not valid JSON: {exc}") from exc
    return coverage_from_payload(payload, origin=str(path))


def coverage_from_payload(payload: Any, *, origin: str = "<payload>") -> Coverage:
    if not isinstance(payload, dict):
        raise ModelError(f"{origin}: snapshot must be a JSON object.")
    entries = payload.get("source_files", [])
    if not isinstance(entries, list):
        raise ModelError(f"{origin}: 'source_files' must be a list.")

    coverage = Coverage()
    for index, entry in enumerate(entries):
        coverage.add(_source_file_from_entry(entry, f"{origin}: source_files[{index}]"))
    return coverage


def _source_file_from_entry(entry: Any, where: str) -> SourceFileCoverage:
    if not isinstance(entry, dict):
        raise ModelError(f"{where}: expected an object.")
    name = entry.get("source_file")
    if not isinstance(name, str):
        raise ModelError(f"{where}: missing 'source_file'.")
    where = f"{where} ({name})"

    line_numbers: dict[str, int] = {}
    execution_counts: dict[str, int] = {}
    for index, function in enumerate(_list_field(entry, "functions", where)):
        item = f"{where}: functions[{index}]"
        if not isinstance(function, dict):
            raise ModelError(f"{item}: expected an object.")
        function_name = function.get("name")
        if not isinstance(function_name, str) or not function_name:
            raise ModelError(f"{item}: missing 'name'.")
        if "line" in function:
            line_numbers[function_name] = _int_field(function, "line", item)
        if "execution_count" in function:
            execution_counts[function_name] = _int_field(function, "execution_count", item)

    branches: list[BranchCoverage] = []
    for index, branch in enumerate(_list_field(entry, "branches", where)):
        item = f"{where}: branches[{index}]"
        if not isinstance(branch, dict):
            raise ModelError(f"{item}: expected an object.")
        branches.append(
            BranchCoverage(
                line_number=_int_field(branch, "line", item),
                block_number=_int_field(branch, "block", item, default=UNKNOWN),
                branch_number=_int_field(branch, "branch", item, default=UNKNOWN),
                was_executed=bool(branch.get("executed", False)),
                execution_count=_int_field(branch, "execution_count", item, default=0),
            )
        )

    lines: list[LineCoverage] = []
    for index, line in enumerate(_list_field(entry, "lines", where)):
        item = f"{where}: lines[{index}]"
        if not isinstance(line, dict):
            raise ModelError(f"{item}: expected an object.")
        checksum = line.get("checksum")
        if checksum is not None and not isinstance(checksum, str):
            raise ModelError(f"{item}: 'checksum' must be a string or null.")
        lines.append(
            LineCoverage(
                line_number=_int_field(line, "line", item),
                execution_count=_int_field(line, "execution_count", item),
                checksum=checksum,
            )
        )

    return SourceFileCoverage(
        source_file_name=name,
        function_line_numbers=line_numbers,
        function_execution_counts=execution_counts,
        branches=tuple(branches),
        line_executions=tuple(lines),
    )


def _list_field(entry: dict, key: str, where: str) -> list:
    value = entry.get(key, [])
    if not isinstance(value, list):
        raise ModelError(f"{where}: '{key}' must be a list.")
    return value


def _int_field(entry: dict, key: str, where: str, *, default: int | None = None) -> int:
    if key not in entry or entry[key] is None:
        if default is None:
            raise ModelError(f"{where}: missing '{key}'.")
        return default
    value = entry[key]
    # bool is an int subclass; reject it explicitly.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ModelError(f"{where}: '{key}' must be an integer, got {value!r}.")
    return value
