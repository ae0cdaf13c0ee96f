"""In-memory coverage model: Coverage, SourceFileCoverage, BranchCoverage, LineCoverage."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

UNKNOWN = -1


@dataclass(frozen=True, slots=True)
class BranchCoverage:
    """One branch fact. Block and branch numbers of -1 mean "unknown"."""

    line_number: int
    block_number: int = UNKNOWN
    branch_number: int = UNKNOWN
    was_executed: bool = False
    execution_count: int = 0

    @classmethod
    def create(cls, line_number: int, was_executed: bool) -> BranchCoverage:
        """Branch fact with unknown block and branch numbers (printed as BA)."""
        return cls(line_number=line_number, was_executed=was_executed)

    @classmethod
    def create_with_block_and_branch(
        cls,
        line_number: int,
        block_number: int,
        branch_number: int,
        was_executed: bool,
        execution_count: int,
    ) -> BranchCoverage:
        """Branch fact located by block and branch number (printed as BRDA)."""
        return cls(
            line_number=line_number,
            block_number=block_number,
            branch_number=branch_number,
            was_executed=was_executed,
            execution_count=execution_count,
        )

    @property
    def has_block_and_branch(self) -> bool:
        # A half-known location is treated the same as a fully unknown one.
        return self.block_number != UNKNOWN and self.branch_number != UNKNOWN

    @property
    def was_hit(self) -> bool:
        if not self.was_executed:
            return False
        if self.has_block_and_branch:
            return self.execution_count > 0
        return True


@dataclass(frozen=True, slots=True)
class LineCoverage:
    line_number: int
    execution_count: int
    checksum: str | None = None


@dataclass(frozen=True, slots=True)
class SourceFileCoverage:
    """
    Coverage facts for a single source file.

    The two function mappings are independent: a function may be declared
    without an execution count and vice versa. Iteration order of every view
    is the order the facts were supplied in.
    """

    source_file_name: str
    function_line_numbers: dict[str, int] = field(default_factory=dict)
    function_execution_counts: dict[str, int] = field(default_factory=dict)
    branches: tuple[BranchCoverage, ...] = ()
    line_executions: tuple[LineCoverage, ...] = ()

    def __post_init__(self) -> None:
        # Freeze the sequences so repeated views stay identical.
        object.__setattr__(self, "function_line_numbers", dict(self.function_line_numbers))
        object.__setattr__(self, "function_execution_counts", dict(self.function_execution_counts))
        object.__setattr__(self, "branches", tuple(self.branches))
        object.__setattr__(self, "line_executions", tuple(self.line_executions))

    def all_line_numbers(self) -> list[tuple[str, int]]:
        """Return (function name, start line) pairs in declaration order."""
        return list(self.function_line_numbers.items())

    def all_execution_counts(self) -> list[tuple[str, int]]:
        """Return (function name, execution count) pairs in insertion order."""
        return list(self.function_execution_counts.items())

    def all_branches(self) -> tuple[BranchCoverage, ...]:
        return self.branches

    def all_line_executions(self) -> tuple[LineCoverage, ...]:
        return self.line_executions

    @property
    def functions_found(self) -> int:
        return len(self.function_line_numbers)

    @property
    def functions_hit(self) -> int:
        return sum(1 for count in self.function_execution_counts.values() if count != 0)

    @property
    def branches_found(self) -> int:
        return len(self.branches)

    @property
    def branches_hit(self) -> int:
        return sum(1 for branch in self.branches if branch.was_hit)

    @property
    def instrumented_lines(self) -> int:
        return len(self.line_executions)

    @property
    def lines_hit(self) -> int:
        return sum(1 for line in self.line_executions if line.execution_count != 0)


@dataclass(slots=True)
class Coverage:
    """Ordered collection of per-file coverage; order becomes record order."""

    source_files: list[SourceFileCoverage] = field(default_factory=list)

    def add(self, source_file: SourceFileCoverage) -> None:
        self.source_files.append(source_file)

    def all_source_files(self) -> tuple[SourceFileCoverage, ...]:
        return tuple(self.source_files)

    def __iter__(self) -> Iterator[SourceFileCoverage]:
        return iter(self.all_source_files())

    def __len__(self) -> int:
        return len(self.source_files)
