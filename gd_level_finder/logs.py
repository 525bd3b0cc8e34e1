"""
Logging setup shared by the entry points
"""
import logging
from datetime import datetime, timezone

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
DATE_FORMAT = "%Y/%m/%d %H:%M:%S"

# Chatty third-party loggers
QUIET_LOGGERS = ("httpx", "httpcore", "discord.gateway", "discord.client")


class MillisecondFormatter(logging.Formatter):
    """Custom formatter with milliseconds as :XXXX format"""
    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        """Override formatTime to include milliseconds with : separator"""
        ct = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if datefmt:
            s = ct.strftime(datefmt)
            ms = int((record.created % 1) * 10000)
            return f"{s}:{ms:04d}"
        return super().formatTime(record, datefmt)


def configure_logging(level: str = "INFO") -> None:
    """Configure the root logger (stderr) for a process entry point"""
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=DATE_FORMAT)

    for handler in logging.root.handlers:
        handler.setFormatter(MillisecondFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
