import os
import sys
import logging

# ---------------- Configuration Constants ----------------


def _positive_int_env(name, default):
    """Read a byte count from the environment; it must be a positive integer."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be greater than zero, got {value}")
    return value


DEFAULT_CHUNK_SIZE = _positive_int_env("FILESPLIT_CHUNK_SIZE", 1024 * 1024)  # 1 MiB
COPY_BUFFER_SIZE = _positive_int_env("FILESPLIT_BUFFER_SIZE", 64 * 1024)  # piece size for streamed copies
LOG_DIR = os.getenv("FILESPLIT_LOG_DIR") or None
LOG_LEVEL = os.getenv("FILESPLIT_LOG_LEVEL", "INFO").upper()

LOGGER_NAME = "filesplit"

_LOG_FORMAT = "[%(context)s] [%(asctime)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class _ContextFilter(logging.Filter):
    """Fills in the upper-case context tag used by the log format."""

    def filter(self, record):
        if not hasattr(record, "context"):
            record.context = record.name.rsplit(".", 1)[-1].upper()
        return True


# ---------------- Shared Logging Functions ----------------

def setup_logging(log_level=None, log_dir=None, stream=None):
    """
    Attach handlers to the package logger.

    Messages go to stdout and, when a log directory is configured, are also
    appended to ``<context>.log`` inside it.

    Args:
        log_level (str): DEBUG, INFO, WARNING or ERROR. Defaults to LOG_LEVEL.
        log_dir (str): Directory for per-context log files. Defaults to LOG_DIR.
        stream: Stream for console output (default: sys.stdout).

    Returns:
        logging.Logger: The configured package logger.
    """
    level = getattr(logging, (log_level or LOG_LEVEL).upper(), logging.INFO)
    log_dir = log_dir or LOG_DIR

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT)

    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(formatter)
    console.addFilter(_ContextFilter())
    logger.addHandler(console)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        logger.addHandler(_PerContextFileHandler(log_dir, formatter))

    logger.propagate = False
    return logger


class _PerContextFileHandler(logging.Handler):
    """Appends each record to ``<log_dir>/<context>.log``."""

    def __init__(self, log_dir, formatter):
        super().__init__()
        self.log_dir = log_dir
        self.setFormatter(formatter)
        self.addFilter(_ContextFilter())

    def emit(self, record):
        try:
            log_file = os.path.join(self.log_dir, f"{record.context.lower()}.log")
            with open(log_file, "a") as f:
                f.write(self.format(record) + "\n")
        except Exception:
            self.handleError(record)


def log(message, context="GLOBAL", level=logging.INFO):
    logging.getLogger(f"{LOGGER_NAME}.{context.lower()}").log(
        level, message, extra={"context": context.upper()}
    )

# ---------------- Public API ----------------

__all__ = [
    "DEFAULT_CHUNK_SIZE",
    "COPY_BUFFER_SIZE",
    "LOG_DIR",
    "LOG_LEVEL",
    "LOGGER_NAME",
    "setup_logging",
    "log",
]
