"""Diagnostics sink for recoverable data-quality problems.

Soft errors (circular variable references, edition key collisions, malformed
records) never raise. They are recorded here and logged, so callers and tests
can inspect what was recovered from.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator

logger = logging.getLogger(__name__)

CIRCULAR_REFERENCE = "CIRCULAR_REFERENCE"
EDITION_COLLISION = "EDITION_COLLISION"
MALFORMED_RECORD = "MALFORMED_RECORD"

VALID_CODES = frozenset({CIRCULAR_REFERENCE, EDITION_COLLISION, MALFORMED_RECORD})


@dataclass(frozen=True)
class Diagnostic:
    """A single recovered problem.

    Attributes:
        code: One of VALID_CODES
        message: Human-readable description
        key: Variable name, edition key, or series key involved
    """

    code: str
    message: str
    key: str = ""


@dataclass
class Diagnostics:
    """Collects Diagnostic records and mirrors them to the log."""

    records: list[Diagnostic] = field(default_factory=list)

    def emit(self, code: str, message: str, key: str = "") -> Diagnostic:
        """Record a diagnostic and log it at WARNING."""
        if code not in VALID_CODES:
            raise ValueError(f"Invalid diagnostic code '{code}'. Must be one of: {VALID_CODES}")
        diagnostic = Diagnostic(code=code, message=message, key=key)
        self.records.append(diagnostic)
        logger.warning("%s: %s", code, message)
        return diagnostic

    def count(self, code: str | None = None) -> int:
        """Number of diagnostics emitted, optionally filtered by code."""
        if code is None:
            return len(self.records)
        return sum(1 for d in self.records if d.code == code)

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.records if d.code == code]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
