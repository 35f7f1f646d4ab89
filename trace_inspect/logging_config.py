"""
Logging configuration for trace_inspect.
Supports normal mode (concise) and debug mode (verbose with file output).
"""
import logging
import sys
from pathlib import Path

from .config.protocol_config import is_debug_enabled

# Debug mode: set INSPECTOR_DEBUG=1 to enable verbose inspector logging
INSPECTOR_DEBUG = is_debug_enabled()

# Debug log file path
DEBUG_LOG_PATH = Path.cwd() / 'inspector_debug.log'

INSPECTORS_LOGGER = 'trace_inspect.services.inspectors'


class ConciseFormatter(logging.Formatter):
    """Single-line, concise log format."""

    FORMATS = {
        logging.DEBUG: "\033[90m[D]\033[0m %(name)s: %(message)s",
        logging.INFO: "\033[32m[I]\033[0m %(message)s",
        logging.WARNING: "\033[33m[W]\033[0m %(message)s",
        logging.ERROR: "\033[31m[E]\033[0m %(name)s: %(message)s",
        logging.CRITICAL: "\033[31;1m[!]\033[0m %(name)s: %(message)s",
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, self.FORMATS[logging.INFO])
        formatter = logging.Formatter(log_fmt)
        return formatter.format(record)


class VerboseFormatter(logging.Formatter):
    """Detailed format for debug file logging."""
    def __init__(self):
        super().__init__(
            fmt='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def setup_logging(level=logging.INFO, debug: bool = False):
    """
    Configure logging for the command-line tool.
    Call this once at startup.

    Set INSPECTOR_DEBUG=1 (or pass debug=True) to write verbose inspector
    logs to inspector_debug.log.
    """
    noisy_loggers = [
        'urllib3', 'websockets', 'asyncio', 'httpcore', 'httpx', 'aiohttp',
        'web3', 'web3.providers', 'web3.RequestManager',
    ]
    for logger_name in noisy_loggers:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ConciseFormatter())
    root.addHandler(handler)

    app_logger = logging.getLogger('trace_inspect')
    app_logger.setLevel(level)

    if debug or INSPECTOR_DEBUG:
        setup_inspector_debug_logging()
        app_logger.info(f"INSPECTOR_DEBUG enabled - verbose logs written to {DEBUG_LOG_PATH}")

    return app_logger


def setup_inspector_debug_logging():
    """
    Send DEBUG output of every inspector module to inspector_debug.log.
    """
    file_handler = logging.FileHandler(DEBUG_LOG_PATH, mode='w', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(VerboseFormatter())
    file_handler.name = 'inspector_debug_file'

    # Child loggers (decoder, uniswap, erc20, ...) propagate here
    parent_logger = logging.getLogger(INSPECTORS_LOGGER)
    parent_logger.setLevel(logging.DEBUG)
    if not any(getattr(h, 'name', None) == 'inspector_debug_file' for h in parent_logger.handlers):
        parent_logger.addHandler(file_handler)
