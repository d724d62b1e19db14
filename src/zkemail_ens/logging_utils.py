"""Console and audit-file logging for claim validation.

Every module logs to the ``zkemail_ens`` logger and attaches ``event`` and
``data`` extras. The console shows the message; the optional audit file keeps
one JSON object per decision.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console
from rich.logging import RichHandler

from .constants import LOGGER_NAME

_AUDIT_EXTRAS = ("event", "data")


def configure_logging(log_file: Optional[str] = None, *, level: int | str = logging.INFO) -> logging.Logger:
    """Install a rich console handler, plus a JSON-lines file when ``log_file`` is set.

    Calling it again replaces the handlers installed by the previous call.
    """

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    console_handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console_handler)

    if log_file:
        audit_path = Path(log_file)
        audit_path.parent.mkdir(parents=True, exist_ok=True)
        audit_handler = logging.FileHandler(audit_path, encoding="utf-8")
        audit_handler.setFormatter(StructuredJsonFormatter())
        logger.addHandler(audit_handler)

    logger.debug("Logging configured", extra={"event": "logging_configured", "data": {"audit_file": log_file}})
    return logger


class StructuredJsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        entry: Dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _AUDIT_EXTRAS:
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


__all__ = ["configure_logging", "StructuredJsonFormatter"]
