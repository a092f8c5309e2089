from __future__ import annotations

import logging
from logging import Logger, getLogger
from typing import Any

import attr

#: The numeric level of the extra-verbose ``TRACE`` level used for bulk vector operations.
TRACE = 5


@attr.s(slots=True, frozen=True, kw_only=True)
class LoggerWithTrace:
    """
    Wraps a stdlib logger with a ``trace`` method below ``DEBUG``.
    """

    logger: Logger = attr.ib()

    @classmethod
    def get(cls, name: str) -> LoggerWithTrace:
        return LoggerWithTrace(logger=getLogger(name))

    @property
    def is_tracing(self) -> bool:
        """
        Returns True if trace messages would be emitted. Callers formatting per-word detail
        should check this first.
        """

        return self.logger.isEnabledFor(TRACE)

    def debug(self, *args: Any, **kwargs: Any) -> None:
        self.logger.debug(*args, **kwargs)

    def trace(self, message: str, *args: Any, **kws: Any) -> None:
        self.logger.log(TRACE, message, *args, **kws)


def install_trace_level() -> None:
    """
    Registers the ``TRACE`` level name with the logging module.
    """

    if logging.getLevelName(TRACE) != "TRACE":
        logging.addLevelName(TRACE, "TRACE")
