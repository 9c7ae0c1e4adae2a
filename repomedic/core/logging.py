"""Structured logging for the CLI and MCP server: structlog over stdlib logging."""

from __future__ import annotations

import logging
import logging.config
import os
import sys

import structlog


def _shared_processors(with_timestamps: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if with_timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    return processors


def setup_logging(verbose: bool = False) -> None:
    """Route structlog and stdlib records to stderr.

    Environment:
        REPOMEDIC_LOG_LEVEL    level for ``repomedic.*`` loggers
                               (default WARNING, DEBUG with *verbose*)
        REPOMEDIC_LOG_FORMAT   console | json (default console)

    stdout is reserved for reports and the MCP stdio transport.  JSON
    records carry timestamps; console records are colourised only when
    stderr is a terminal.
    """
    level = os.environ.get("REPOMEDIC_LOG_LEVEL", "DEBUG" if verbose else "WARNING").upper()
    as_json = os.environ.get("REPOMEDIC_LOG_FORMAT", "console").lower() == "json"

    shared = _shared_processors(with_timestamps=as_json)
    if as_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "structlog": {
                    "()": structlog.stdlib.ProcessorFormatter,
                    "foreign_pre_chain": shared,
                    "processors": [
                        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                        renderer,
                    ],
                },
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "stream": "ext://sys.stderr",
                    "formatter": "structlog",
                },
            },
            # third-party libraries stay at WARNING whatever repomedic's level
            "root": {"handlers": ["stderr"], "level": "WARNING"},
            "loggers": {
                "repomedic": {"level": level},
            },
        }
    )
