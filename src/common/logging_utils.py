"""Logging helpers shared by the manifest package and the CLI.

Modules log through ``logging.getLogger(__name__)``; this module only owns
root configuration and the structured ``extra=`` payloads used for DEBUG traces.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict

from constants import Constants

_HANDLER_NAME = "cratefind-console"


def configure_logging() -> None:
    """Attach a console handler to the root logger once.

    The level is read from ``CRATEFIND_LOG_LEVEL`` and defaults to WARNING so
    library callers are not flooded by INFO records.
    """
    root = logging.getLogger()
    level_name = os.environ.get(Constants.ENV_LOG_LEVEL, "WARNING").strip().upper()
    root.setLevel(getattr(logging, level_name, logging.WARNING))

    if any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload, dropping fields whose value is None."""
    return {k: v for k, v in fields.items() if v is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records from ``logger`` would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)
