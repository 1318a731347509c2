"""Logging setup shared by the library, the CLI and the share server."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

from tocideator.config import TOC_IDEATOR_LOG_LEVEL

# Attributes present on every LogRecord; anything else came in through ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "extra_context"}


class ExtraFieldsFilter(logging.Filter):
    """Render ``extra={...}`` context into ``record.extra_context`` as ``key=value`` pairs."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        context = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
        record.extra_context = f" | {context}" if context else ""  # type: ignore[attr-defined]
        return True


def configure_logging(level: str | None = None) -> None:
    """Configure root logging once; later calls only adjust the level.

    Args:
        level: Logging level name. Defaults to ``TOC_IDEATOR_LOG_LEVEL``.
    """
    root = logging.getLogger()
    root.setLevel((level or TOC_IDEATOR_LOG_LEVEL).upper())

    # Avoid duplicate handlers if configure_logging is called multiple times
    if any(isinstance(h, RichHandler) for h in root.handlers):
        return

    handler = RichHandler(
        console=Console(stderr=True),
        rich_tracebacks=True,
        show_time=True,
        show_level=True,
        show_path=False,
    )
    handler.addFilter(ExtraFieldsFilter())
    handler.setFormatter(logging.Formatter(fmt="%(name)s: %(message)s%(extra_context)s", datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(handler)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)
