# src/ruletree/core/logging.py
"""Structured logging for ruletree.

structlog renders every record through one ``ProcessorFormatter`` on the
root handler, so stdlib loggers (dynaconf, pluggy) and structlog loggers
share a format. Logs go to stderr; stdout belongs to command output.

Events are snake_case names. Context such as the rule type is bound once:

    log = get_logger(__name__, rule_type="sharding")
    log.debug("rule_tuple_unmatched", path="/rules/sharding/future_field")
"""

import logging
import sys
from typing import IO, Any

import structlog
from structlog.stdlib import ProcessorFormatter

# Held at WARNING or above even when ruletree runs at DEBUG
_NOISY_LOGGERS: tuple[str, ...] = ("dynaconf", "pluggy")

# Runs for structlog events and, as foreign_pre_chain, for stdlib records
_PRE_CHAIN: list[Any] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
]


def _render_chain(json_output: bool) -> list[Any]:
    if json_output:
        return [
            ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    return [
        ProcessorFormatter.remove_processors_meta,
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: IO[str] | None = None,
) -> None:
    """Install the ruletree handler on the root logger.

    Args:
        json_output: JSON lines instead of console rendering
        level: Root log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Destination, stderr when omitted
    """
    level_number = logging.getLevelNamesMapping()[level.upper()]

    structlog.configure(
        processors=[*_PRE_CHAIN, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Reconfigurable: the CLI callback and tests call this repeatedly
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(ProcessorFormatter(processors=_render_chain(json_output), foreign_pre_chain=_PRE_CHAIN))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level_number)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level_number, logging.WARNING))


def get_logger(name: str, **context: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger for a module, optionally with context bound to every event."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name, **context)
    return logger
