"""Logging setup for sitebuild.

Build steps log through ``logging.getLogger(__name__)``; the CLI calls
``setup_logging`` once. GitHub tokens never reach a handler unredacted.
"""

import json
import logging
import re

REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"gh[pousr]_[A-Za-z0-9]{20,}"), "[REDACTED_GH_TOKEN]"),
    (re.compile(r"github_pat_[A-Za-z0-9_]+"), "[REDACTED_GH_PAT]"),
    (re.compile(r"Bearer\s+[A-Za-z0-9_\-.]+"), "Bearer [REDACTED]"),
    (re.compile(r"\b[0-9a-f]{40}\b"), "[REDACTED_GH_TOKEN]"),
    (re.compile(r"(Authorization[\"']?:\s*[\"']?)[^\s,'\"}\]]+", re.IGNORECASE), r"\1[REDACTED]"),
    (re.compile(r"(access_token=)[^&\s]+", re.IGNORECASE), r"\1[REDACTED]"),
)

TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def redact_secrets(text: str) -> str:
    """Replace GitHub tokens and credential headers in text."""
    for pattern, replacement in REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


class SecretRedactingFilter(logging.Filter):
    """Redact tokens from log messages and their string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = redact_secrets(str(record.msg))
        if isinstance(record.args, tuple):
            record.args = tuple(
                redact_secrets(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, for CI log collectors."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "time": self.formatTime(record, DATE_FORMAT),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    quiet: bool = False,
) -> None:
    """Configure root logging.

    Args:
        verbose: Log at DEBUG.
        json_format: Emit JSON lines instead of the pipe-separated format.
        quiet: Only log warnings and errors. Ignored when verbose is set.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    logging.basicConfig(level=level, format=TEXT_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers:
        if json_format:
            handler.setFormatter(JsonFormatter())
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(SecretRedactingFilter())

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name."""
    return logging.getLogger(name)
