"""
Logging configuration for the application.

One stdout handler with a pipe-separated format. Session tokens that
end up in a message (a logged header, an echoed SQL parameter) are
masked before the record is written.
Logging must not change program behavior.
"""

import logging
import re
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# header.payload.signature, each part base64url; JWT headers start with "eyJ"
_JWT_PATTERN = re.compile(r"eyJ[\w-]+\.[\w-]+\.[\w-]+")
REDACTED = "<redacted-token>"


class TokenRedactionFilter(logging.Filter):
    """Replace anything shaped like a JWT in the rendered message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if _JWT_PATTERN.search(message):
            record.msg = _JWT_PATTERN.sub(REDACTED, message)
            record.args = None
        return True


def configure_logging(level: str = "INFO", sql_echo: bool = False) -> None:
    """Configure application logging.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
        sql_echo: Emit every SQL statement through the sqlalchemy.engine logger.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    handler.addFilter(TokenRedactionFilter())

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if sql_echo else logging.WARNING
    )
