"""Logging setup for the payroll ledger."""
import json
import logging
import sys

# Fields the ledger passes through ``extra=`` on its log calls.
LEDGER_FIELDS = ("row_count", "shift_count", "cleansing_count", "shift_id")


class JSONFormatter(logging.Formatter):
    """One JSON object per line, carrying any ledger fields set on the record."""

    def format(self, record):
        entry = {
            "time": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for name in LEDGER_FIELDS:
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def setup_logging(level: str = "INFO", json_output: bool = True):
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s"))
    root.handlers = [handler]

    logging.getLogger("werkzeug").setLevel(logging.WARNING)
