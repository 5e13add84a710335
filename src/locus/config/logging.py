"""Logging setup: stdlib ``logging`` records rendered by structlog on stderr.

Services log through ``logging.getLogger(__name__)``; the records pass
through structlog's ``ProcessorFormatter`` so they render the same way as
structlog events, either for a console or as JSON lines (``--log-json``).

Per-invocation fields (command, task root, repo scope) are bound once with
:func:`bind_log_context` and merged into every record.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

_LOCUS_LOGGER = "locus"

# Libraries whose debug chatter never belongs in locus output.
_QUIET_LIBRARIES: tuple[str, ...] = ("ruamel.yaml",)


def _level_for(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Route locus log records to stderr.

    Args:
        verbose: Show DEBUG records from locus (wins over *quiet*).
        quiet: Show only ERROR records, so ``-q`` output stays bare.
        log_json: One JSON object per line instead of console output.
    """
    structlog.contextvars.clear_contextvars()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(_LOCUS_LOGGER).setLevel(_level_for(verbose=verbose, quiet=quiet))
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_log_context(**fields: Any) -> None:
    """Attach *fields* to every later log record; ``None`` values are skipped."""
    structlog.contextvars.bind_contextvars(
        **{key: value for key, value in fields.items() if value is not None}
    )
