"""Opt-in log output for validated_method diagnostics.

The package emits ``unexpected_parameter`` warnings through structlog and
debug records through stdlib loggers under ``validated_method``. Nothing is
printed until an application either configures logging itself or calls
:func:`configure_logging`, which attaches a single handler to the
``validated_method`` logger and leaves the root logger alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog

PACKAGE_LOGGER = "validated_method"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> logging.Logger:
    """Render validated_method diagnostics to *stream* (stderr by default).

    Repeated calls replace the handler installed by the previous call.
    The package logger stops propagating so records are not rendered twice
    by handlers the host application put on the root logger.

    Args:
        verbose: Also emit the engine's DEBUG records for rejected calls.
        log_json: One JSON object per line instead of console output.
        stream: Destination; defaults to ``sys.stderr`` at call time.

    Returns:
        The configured ``validated_method`` logger.
    """
    target = stream if stream is not None else sys.stderr
    shared = _shared_processors()

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=target.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for old in package_logger.handlers[:]:
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False
    return package_logger
