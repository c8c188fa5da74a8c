"""structlog setup for the htmlsafe CLI.

Only the ``htmlsafe`` logger tree is configured: it gets its own stderr
handler and stops propagating, so embedding applications keep control of
the root logger. Records from stdlib ``logging`` (the plugin manager) and
from structlog share one formatter, console or JSON per the settings.
"""

from __future__ import annotations

import logging
import sys

import structlog

from htmlsafe.config.settings import HtmlSafeSettings

PACKAGE_LOGGER = "htmlsafe"

_PRE_CHAIN: list[structlog.types.Processor] = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
]


class _PackageHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Marker type so reconfiguration replaces our handler and nothing else."""


def _renderer(settings: HtmlSafeSettings) -> structlog.types.Processor:
    if settings.log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(settings: HtmlSafeSettings) -> logging.Logger:
    """Point the ``htmlsafe`` logger at stderr using *settings*.

    ``settings.verbose`` selects DEBUG, otherwise WARNING.
    ``settings.log_json`` selects JSON lines over console output.

    Returns the configured package logger.
    """
    structlog.configure(
        processors=[*_PRE_CHAIN, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = _PackageHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_PRE_CHAIN,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings),
            ],
        )
    )

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in [h for h in pkg_logger.handlers if isinstance(h, _PackageHandler)]:
        pkg_logger.removeHandler(existing)
    pkg_logger.addHandler(handler)
    pkg_logger.propagate = False
    pkg_logger.setLevel(logging.DEBUG if settings.verbose else logging.WARNING)
    return pkg_logger
