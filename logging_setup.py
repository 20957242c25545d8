import logging
from typing import Optional

from config import settings

# Parent of every module logger in the service (docmgr.backend, docmgr.documents, ...)
APP_LOGGER = "docmgr"

# Chatty at INFO: one line per upstream request / sqlite call
QUIET_LOGGERS = ("httpx", "httpcore", "aiosqlite")

_RECORD_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {"message", "asctime"}


class KeyValueFormatter(logging.Formatter):
    """time=... level=... logger=... message=..., then any fields passed via `extra=`."""

    def format(self, record: logging.LogRecord) -> str:
        base = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                base[key] = value
        if record.exc_info:
            base["exc_info"] = self.formatException(record.exc_info)
        ts = self.formatTime(record, self.datefmt)
        kv = [f"time={ts}"] + [f"{k}={v}" for k, v in base.items()]
        return " ".join(kv)


def configure_logging(level: Optional[str] = None) -> None:
    level = (level or settings.log_level).upper()
    logging.basicConfig(level=level, format="%(message)s")
    formatter = KeyValueFormatter()
    for h in logging.getLogger().handlers:
        h.setFormatter(formatter)
    logging.getLogger(APP_LOGGER).setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
