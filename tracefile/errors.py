from __future__ import annotations


class TracefileError(Exception):
    """Base error for all tracefile conversion failures."""


class ModelError(TracefileError):
    """Errors raised while building the coverage model from a snapshot."""


class ValidationError(TracefileError):
    """Errors raised by strict validation of a coverage model."""


class WriteError(TracefileError):
    """Errors raised when the tracefile could not be written to its destination."""
