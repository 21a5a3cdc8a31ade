"""Diagnostics on stderr through structlog.

Library modules log with plain ``logging.getLogger(__name__)``; this module
routes those records and any structlog loggers through one stderr handler,
rendered either for a terminal or as one JSON object per line
(``--log-json``). stdout is left to command results.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Applied to structlog events and to stdlib records alike.
_PRE_CHAIN: tuple[Processor, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
)


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler. Safe to call more than once.

    ``depstrata.*`` loggers pass DEBUG when *verbose*, WARNING otherwise.
    Other libraries (networkx, rich) stay at WARNING either way.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=list(_PRE_CHAIN),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)
    logging.getLogger("depstrata").setLevel(logging.DEBUG if verbose else logging.WARNING)
