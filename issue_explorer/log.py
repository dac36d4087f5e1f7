"""Error log for issue-explorer.

Nothing is written to the terminal from here: the curses screen owns it while
a session runs. Records go to an append-only file instead.
"""

import logging
from pathlib import Path
from typing import Any

from issue_explorer.errors import ConfigError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("issue_explorer")


def setup_logging(config: dict[str, Any]) -> Path:
    """Attach the log file handler to the package logger, once.

    Raises:
        ConfigError: If the [log] level is not a logging level name
    """
    log_config = config.get("log", {})
    log_file = Path(log_config.get("file", "issue-explorer.log")).expanduser()
    level = str(log_config.get("level", "WARNING")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"invalid log level in config: {level}")

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)

    handler = logging.FileHandler(log_file, mode="a", delay=True, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    # urllib3 is chatty at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    return log_file.resolve()


def append_error_log(err: BaseException) -> None:
    """Record an uncaught error together with its traceback."""
    logger.error("%s: %s", type(err).__name__, err, exc_info=err)
