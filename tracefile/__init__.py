"""Serialize in-memory coverage results to the lcov tracefile format."""

from .encoder import TracefileEncoder, encode, print_tracefile, write_tracefile
from .errors import ModelError, TracefileError, ValidationError, WriteError
from .model import BranchCoverage, Coverage, LineCoverage, SourceFileCoverage

__all__ = [
    "BranchCoverage",
    "Coverage",
    "LineCoverage",
    "ModelError",
    "SourceFileCoverage",
    "TracefileEncoder",
    "TracefileError",
    "ValidationError",
    "WriteError",
    "encode",
    "print_tracefile",
    "write_tracefile",
]
