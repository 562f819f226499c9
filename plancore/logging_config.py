"""Logger naming for the plancore library.

The library only emits records; handlers and formatting belong to the
process that embeds it (see api.observability for the service).
"""

from __future__ import annotations

import logging


def get_logger(name: str) -> logging.Logger:
    """Get a named logger under the plancore namespace."""
    if name.startswith("plancore"):
        return logging.getLogger(name)
    return logging.getLogger(f"plancore.{name}")
