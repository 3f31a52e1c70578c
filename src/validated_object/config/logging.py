"""structlog configuration for validated_object, driven by settings.

Library modules log through stdlib ``logging.getLogger(__name__)``. The
ProcessorFormatter installed here renders those records (validation
failures at DEBUG, skipped batch records at WARNING) as console lines or
JSON lines on stderr, depending on :class:`ValidatedObjectSettings`.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from validated_object.config.settings import ValidatedObjectSettings

PACKAGE_LOGGER = "validated_object"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(settings: ValidatedObjectSettings) -> structlog.types.Processor:
    if settings.log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(
    settings: ValidatedObjectSettings | None = None,
    /,
    **overrides: Any,
) -> ValidatedObjectSettings:
    """Route package logs through structlog according to *settings*.

    Args:
        settings: Settings to apply. When omitted they are read from
            ``VALIDATED_OBJECT_*`` env vars, with *overrides* taking priority.
        **overrides: Field overrides (``verbose``, ``log_json``) applied on
            top of *settings* or of the env.

    Returns:
        The settings that were applied.
    """
    if settings is None:
        settings = ValidatedObjectSettings.from_env(**overrides)
    elif overrides:
        settings = settings.model_copy(update=overrides)

    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(settings),
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(settings.log_level)
    return settings
