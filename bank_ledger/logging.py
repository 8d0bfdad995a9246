"""Logging setup for the bank-ledger CLI.

Ledger operations attach their account numbers and amounts with
:func:`log_fields`; the JSON formatter emits them as top-level keys and the
standard formatter leaves them out.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

# LogRecord attribute that carries ledger fields
FIELDS_ATTR = "ledger_fields"


def setup_logging(
    level: str = "INFO",
    format_type: str = "standard",
) -> None:
    """Configure the root logger to write to stderr.

    Parameters
    ----------
    level : str
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Unknown names
        fall back to INFO.
    format_type : str
        Format type: "standard" or "json".
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if format_type == "json":
        formatter: logging.Formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Menu output goes to stdout, so logs go to stderr
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    logging.getLogger("bank_ledger").setLevel(log_level)

    logging.getLogger("faker").setLevel(logging.WARNING)


def log_fields(**fields: Any) -> dict[str, Any]:
    """Build the ``extra`` argument for a logging call.

    Example::

        logger.info("Deposited %s into %s", amount, number,
                    extra=log_fields(account_number=number, amount=amount))
    """
    return {FIELDS_ATTR: fields}


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        fields = getattr(record, FIELDS_ATTR, None)
        if fields:
            log_data.update(fields)

        # Decimal amounts are written as strings
        return json.dumps(log_data, default=str)
