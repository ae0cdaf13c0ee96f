from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .encoder import write_tracefile
from .errors import TracefileError, WriteError
from .loader import load_coverage
from .model import Coverage
from .summary import build_summary, write_summary
from .validation import validate_coverage

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ConversionOptions:
    """Everything one conversion run needs; checked when it is built."""

    input_path: Path
    output_path: Path
    summary_path: Path | None = None
    strict: bool = False

    def __post_init__(self) -> None:
        if self.input_path is None or str(self.input_path).strip() in ("", "."):
            raise ValueError("input_path is required.")
        if self.output_path is None or str(self.output_path).strip() in ("", "."):
            raise ValueError("output_path is required.")
        object.__setattr__(self, "input_path", Path(self.input_path))
        object.__setattr__(self, "output_path", Path(self.output_path))
        if self.summary_path is not None:
            object.__setattr__(self, "summary_path", Path(self.summary_path))


@dataclass(slots=True)
class ConversionResult:
    coverage: Coverage
    output_path: Path
    summary: dict
    summary_path: Path | None = None


def run_conversion(
    options: ConversionOptions,
    *,
    logger: logging.Logger | None = None,
) -> ConversionResult:
    log = logger or _LOGGER
    try:
        coverage = load_coverage(options.input_path)
        if options.strict:
            validate_coverage(coverage)
    except TracefileError:
        raise
    except Exception as exc:  # pragma: no cover
        raise TracefileError(
            f"Failed to prepare conversion from input={options.input_path} "
            f"to output={options.output_path}"
        ) from exc
    log.debug("Loaded %d source file(s) from %s", len(coverage), options.input_path)

    try:
        options.output_path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Could not create output directory for {options.output_path}") from exc
    if not write_tracefile(options.output_path, coverage, logger=log):
        raise WriteError(f"Could not write tracefile to {options.output_path}")
    log.info("Wrote %d record(s) to %s", len(coverage), options.output_path)

    summary = build_summary(coverage)
    if options.summary_path is not None:
        try:
            write_summary(options.summary_path, summary)
        except OSError as exc:
            raise WriteError(f"Could not write summary report to {options.summary_path}") from exc
        log.info("Wrote summary report: %s", options.summary_path)

    return ConversionResult(
        coverage=coverage,
        output_path=options.output_path,
        summary=summary,
        summary_path=options.summary_path,
    )
