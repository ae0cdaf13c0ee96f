from __future__ import annotations

from .errors import ValidationError
from .model import UNKNOWN, Coverage, SourceFileCoverage


def validate_coverage(coverage: Coverage) -> None:
    """
    Check a coverage model for data the tracefile consumers would reject.

    All problems are collected and reported in a single ValidationError. The
    encoder itself never calls this; it prints whatever the model holds.
    """
    problems: list[str] = []

    seen: dict[str, int] = {}
    for source_file in coverage.all_source_files():
        name = source_file.source_file_name
        seen[name] = seen.get(name, 0) + 1
        if not name:
            problems.append("source file with an empty name")
        problems.extend(_source_file_problems(source_file))

    for name in sorted(n for n, count in seen.items() if count > 1):
        problems.append(f"{name}: duplicate source file ({seen[name]} records)")

    if problems:
        raise ValidationError("Coverage validation failed:\n" + "\n".join(problems))


def _source_file_problems(source_file: SourceFileCoverage) -> list[str]:
    name = source_file.source_file_name
    problems: list[str] = []

    for function, line_number in source_file.all_line_numbers():
        if line_number <= 0:
            problems.append(f"{name}: function '{function}' starts at non-positive line {line_number}")
    for function, count in source_file.all_execution_counts():
        if count < 0:
            problems.append(f"{name}: function '{function}' has negative execution count {count}")

    for branch in source_file.all_branches():
        if branch.line_number <= 0:
            problems.append(f"{name}: branch at non-positive line {branch.line_number}")
        if branch.execution_count < 0:
            problems.append(
                f"{name}: branch at line {branch.line_number} has negative execution count "
                f"{branch.execution_count}"
            )
        if (branch.block_number == UNKNOWN) != (branch.branch_number == UNKNOWN):
            problems.append(
                f"{name}: branch at line {branch.line_number} mixes block {branch.block_number} "
                f"and branch {branch.branch_number}"
            )

    for line in source_file.all_line_executions():
        if line.line_number <= 0:
            problems.append(f"{name}: non-positive line number {line.line_number}")
        if line.execution_count < 0:
            problems.append(
                f"{name}: line {line.line_number} has negative execution count {line.execution_count}"
            )

    return problems
