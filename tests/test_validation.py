from __future__ import annotations

import pytest

from tracefile.errors import ValidationError
from tracefile.model import BranchCoverage, Coverage, LineCoverage, SourceFileCoverage
from tracefile.validation import validate_coverage


def test_valid_coverage_passes() -> None:
    coverage = Coverage(
        [
            SourceFileCoverage(
                source_file_name="ok.cc",
                function_line_numbers={"f": 1},
                function_execution_counts={"f": 1},
                branches=(BranchCoverage.create(2, True),),
                line_executions=(LineCoverage(1, 1),),
            )
        ]
    )

    validate_coverage(coverage)


def test_all_problems_reported_together() -> None:
    coverage = Coverage(
        [
            SourceFileCoverage(
                source_file_name="bad.cc",
                function_line_numbers={"f": 0},
                function_execution_counts={"f": -1},
                branches=(BranchCoverage(line_number=3, block_number=1, branch_number=-1),),
                line_executions=(LineCoverage(-2, 1), LineCoverage(4, -3)),
            ),
            SourceFileCoverage(source_file_name="dup.cc"),
            SourceFileCoverage(source_file_name="dup.cc"),
        ]
    )

    with pytest.raises(ValidationError) as excinfo:
        validate_coverage(coverage)

    message = str(excinfo.value)
    assert "function 'f' starts at non-positive line 0" in message
    assert "function 'f' has negative execution count -1" in message
    assert "mixes block 1 and branch -1" in message
    assert "non-positive line number -2" in message
    assert "line 4 has negative execution count -3" in message
    assert "dup.cc: duplicate source file (2 records)" in message


def test_empty_source_file_name_is_reported() -> None:
    coverage = Coverage([SourceFileCoverage(source_file_name="")])

    with pytest.raises(ValidationError, match="source file with an empty name"):
        validate_coverage(coverage)
