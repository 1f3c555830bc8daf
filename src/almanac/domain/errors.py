"""Typed failures raised by the domain layer.

Every error carries a stable ``code`` so the service layer can convert it
into a :class:`~almanac.services.result.ServiceError` without string matching.
Nothing here is retryable: the pipeline is deterministic, so the same input
always fails the same way.
"""

from __future__ import annotations

from typing import Any


class AlmanacError(ValueError):
    """Base class for all almanac domain failures."""

    code = "ALMANAC_ERROR"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class ParseError(AlmanacError):
    """A numeric token failed to convert to an unsigned 64-bit integer."""

    code = "PARSE_ERROR"


class StructuralError(AlmanacError):
    """The input has the wrong shape (missing headers, bad token counts, ...)."""

    code = "STRUCTURAL_ERROR"


class DomainInconsistencyError(AlmanacError):
    """The input parsed, but violates an invariant the pipeline relies on."""

    code = "DOMAIN_INCONSISTENCY"


class OverlappingRulesError(DomainInconsistencyError):
    """Two rules in the same stage have intersecting source windows."""

    code = "OVERLAPPING_RULES"


class CoverageError(DomainInconsistencyError):
    """A stage produced a range set whose total length differs from its input."""

    code = "COVERAGE_VIOLATION"


class EmptyResultError(AlmanacError):
    """A minimum was requested from an empty range set."""

    code = "EMPTY_RESULT"
