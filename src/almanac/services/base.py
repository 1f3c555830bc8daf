"""BaseService — shared foundation for almanac services.

Every service receives the frozen :class:`AlmanacSettings` at construction
time. Services parse their own input, own the worker pool for the duration
of one operation, and translate domain failures into ServiceResult.
"""

from __future__ import annotations

from collections.abc import Generator
from concurrent.futures import Executor, ThreadPoolExecutor
from contextlib import contextmanager
from typing import TYPE_CHECKING

import structlog

from almanac.domain.errors import AlmanacError
from almanac.domain.parsing import Almanac, parse_almanac
from almanac.services.result import ServiceResult
from almanac.services.telemetry import trace_span

if TYPE_CHECKING:
    from almanac.config.settings import AlmanacSettings

log = structlog.get_logger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class SolveService(BaseService):
            def solve(self, text: str) -> ServiceResult:
                try:
                    almanac = self._parse(text)
                except AlmanacError as exc:
                    return self._domain_failure("solve", exc)
                ...
    """

    def __init__(self, settings: AlmanacSettings) -> None:
        self._settings = settings

    def _parse(self, text: str) -> Almanac:
        with trace_span("parse") as span:
            almanac = parse_almanac(text)
            if span is not None:
                span.annotate("seeds", len(almanac.seeds))
                span.annotate("stages", len(almanac.pipeline.stages))
        return almanac

    @contextmanager
    def _executor(self, workers: int | None = None) -> Generator[Executor | None]:
        """Yield a thread pool when more than one worker is configured."""
        count = workers or self._settings.pipeline.workers
        if count <= 1:
            yield None
            return
        with ThreadPoolExecutor(max_workers=count, thread_name_prefix="almanac") as pool:
            yield pool

    @staticmethod
    def _domain_failure(op: str, exc: AlmanacError) -> ServiceResult:
        """Convert a domain exception into a failed ServiceResult."""
        log.debug("domain.failure", op=op, code=exc.code, message=exc.message)
        return ServiceResult.failure(op, exc.code, exc.message, **exc.detail)
