"""Diagnostic logging for mdsite.

Diagnostics go to stderr through structlog, rendered for a terminal by
default or as one JSON object per line with ``--log-json``. Only the
``mdsite.*`` logger tree follows ``--verbose``; template loading and
YAML parsing libraries stay at WARNING so ``-v`` shows what mdsite did
(files discovered, pages rendered, outputs removed) and nothing else.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Libraries whose debug chatter never belongs in mdsite's output
_QUIET_LOGGERS = ("jinja2", "markupsafe", "ruamel.yaml", "pydantic", "pydantic_settings")


def _processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route stdlib and structlog records from ``mdsite.*`` to stderr.

    Safe to call repeatedly: the root handler is replaced, not stacked.

    Args:
        verbose: Let ``mdsite.*`` loggers emit DEBUG records.
        log_json: Render JSON lines instead of console text.
    """
    shared = _processors()
    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("mdsite").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
