"""
Encoder for the lcov tracefile format.

Prints the coverage data held in a ``Coverage`` as one record per source file,
following the geninfo tracefile grammar
(http://ltp.sourceforge.net/coverage/lcov/geninfo.1.php).
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import BinaryIO, TextIO

from . import constants as c
from .model import Coverage, SourceFileCoverage

_LOGGER = logging.getLogger(__name__)

WRITE_FAILURE_MESSAGE = "Could not write to output file."


class TracefileEncoder:
    """
    Writes tracefile records to an already opened text sink.

    The encoder neither opens nor closes the sink. Each output line is a single
    ``write`` call, so a failing sink stops the output at the failing line.
    """

    def __init__(self, sink: TextIO) -> None:
        self._sink = sink

    def encode(self, coverage: Coverage) -> None:
        for source_file in coverage.all_source_files():
            self.encode_source_file(source_file)

    def encode_source_file(self, source_file: SourceFileCoverage) -> None:
        """Print one record. Raises ``OSError`` or ``ValueError`` if the sink fails."""
        self._write_sf_line(source_file)
        self._write_fn_lines(source_file)
        self._write_fnda_lines(source_file)
        self._write_fnf_line(source_file)
        self._write_fnh_line(source_file)
        self._write_branch_lines(source_file)
        self._write_brf_line(source_file)
        self._write_brh_line(source_file)
        self._write_da_lines(source_file)
        self._write_lh_line(source_file)
        self._write_lf_line(source_file)
        self._write_line(c.END_OF_RECORD_MARKER)

    def _write_line(self, marker: str, *fields: object) -> None:
        body = c.DELIMITER.join(str(value) for value in fields)
        self._sink.write(f"{marker}{body}{c.NEWLINE}")

    # SF:<path to the source file>
    def _write_sf_line(self, source_file: SourceFileCoverage) -> None:
        self._write_line(c.SF_MARKER, source_file.source_file_name)

    # FN:<line number of function start>,<function name>
    def _write_fn_lines(self, source_file: SourceFileCoverage) -> None:
        for name, line_number in source_file.all_line_numbers():
            self._write_line(c.FN_MARKER, line_number, name)

    # FNDA:<execution count>,<function name>
    def _write_fnda_lines(self, source_file: SourceFileCoverage) -> None:
        for name, execution_count in source_file.all_execution_counts():
            self._write_line(c.FNDA_MARKER, execution_count, name)

    # FNF:<number of functions found>
    def _write_fnf_line(self, source_file: SourceFileCoverage) -> None:
        self._write_line(c.FNF_MARKER, source_file.functions_found)

    # FNH:<number of functions hit>
    def _write_fnh_line(self, source_file: SourceFileCoverage) -> None:
        self._write_line(c.FNH_MARKER, source_file.functions_hit)

    # BRDA:<line number>,<block number>,<branch number>,<taken>
    # BA:<line number>,<taken>
    def _write_branch_lines(self, source_file: SourceFileCoverage) -> None:
        for branch in source_file.all_branches():
            if branch.has_block_and_branch:
                taken = branch.execution_count if branch.was_executed else c.NOT_TAKEN
                self._write_line(
                    c.BRDA_MARKER,
                    branch.line_number,
                    branch.block_number,
                    branch.branch_number,
                    taken,
                )
            else:
                # Only "not executed" and "taken" are distinguished here.
                taken = c.BA_TAKEN if branch.was_executed else c.BA_NOT_EXECUTED
                self._write_line(c.BA_MARKER, branch.line_number, taken)

    # BRF:<number of branches found>
    def _write_brf_line(self, source_file: SourceFileCoverage) -> None:
        if source_file.branches_found > 0:
            self._write_line(c.BRF_MARKER, source_file.branches_found)

    # BRH:<number of branches hit>
    def _write_brh_line(self, source_file: SourceFileCoverage) -> None:
        # Gated on branches found, not hit.
        if source_file.branches_found > 0:
            self._write_line(c.BRH_MARKER, source_file.branches_hit)

    # DA:<line number>,<execution count>[,<checksum>]
    def _write_da_lines(self, source_file: SourceFileCoverage) -> None:
        for line in source_file.all_line_executions():
            if line.checksum is None:
                self._write_line(c.DA_MARKER, line.line_number, line.execution_count)
            else:
                self._write_line(
                    c.DA_MARKER, line.line_number, line.execution_count, line.checksum
                )

    # LH:<number of lines with a non-zero execution count>
    def _write_lh_line(self, source_file: SourceFileCoverage) -> None:
        self._write_line(c.LH_MARKER, source_file.lines_hit)

    # LF:<number of instrumented lines>
    def _write_lf_line(self, source_file: SourceFileCoverage) -> None:
        self._write_line(c.LF_MARKER, source_file.instrumented_lines)


def encode(
    sink: TextIO,
    coverage: Coverage,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """
    Encode ``coverage`` into an open text sink.

    Returns False on the first write failure (an ``OSError``, or a ``ValueError``
    from a closed sink or an unencodable name); output written before the
    failure is left in the sink.
    """
    log = logger or _LOGGER
    try:
        TracefileEncoder(sink).encode(coverage)
    except (OSError, ValueError):
        log.error(WRITE_FAILURE_MESSAGE)
        return False
    return True


def print_tracefile(
    output: BinaryIO,
    coverage: Coverage,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """
    Print ``coverage`` as UTF-8 tracefile text to a binary stream.

    The stream is closed before returning, whether or not the write succeeded.
    """
    log = logger or _LOGGER
    try:
        with io.TextIOWrapper(output, encoding="utf-8", newline="") as writer:
            TracefileEncoder(writer).encode(coverage)
    except (OSError, ValueError):
        log.error(WRITE_FAILURE_MESSAGE)
        return False
    return True


def write_tracefile(
    path: Path | str,
    coverage: Coverage,
    *,
    logger: logging.Logger | None = None,
) -> bool:
    """Print ``coverage`` to the file at ``path``, replacing any existing content."""
    log = logger or _LOGGER
    try:
        output = Path(path).open("wb")
    except (OSError, ValueError):
        log.error(WRITE_FAILURE_MESSAGE)
        return False
    return print_tracefile(output, coverage, logger=log)
