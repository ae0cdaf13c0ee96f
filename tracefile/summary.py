"""Summary report: found/hit totals per source file, written next to the tracefile."""
from __future__ import annotations

import json
from pathlib import Path

from .model import Coverage, SourceFileCoverage

_KINDS = ("lines", "functions", "branches")


def _counts(source_file: SourceFileCoverage) -> dict[str, dict[str, int]]:
    return {
        "lines": {"found": source_file.instrumented_lines, "hit": source_file.lines_hit},
        "functions": {"found": source_file.functions_found, "hit": source_file.functions_hit},
        "branches": {"found": source_file.branches_found, "hit": source_file.branches_hit},
    }


def build_summary(coverage: Coverage) -> dict:
    files = []
    totals = {kind: {"found": 0, "hit": 0} for kind in _KINDS}
    for source_file in coverage.all_source_files():
        counts = _counts(source_file)
        for kind in _KINDS:
            totals[kind]["found"] += counts[kind]["found"]
            totals[kind]["hit"] += counts[kind]["hit"]
        files.append({"source_file": source_file.source_file_name, **counts})
    return {
        "records": len(files),
        "totals": totals,
        "source_files": files,
    }


def write_summary(path: Path, summary: dict) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2), encoding="utf-8")
