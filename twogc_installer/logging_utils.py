from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional

DEFAULT_LOG_PATH = str(Path(tempfile.gettempdir()) / "twogc-installer.log")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(
    log_path: str = DEFAULT_LOG_PATH,
    level: int = logging.INFO,
    also_console: bool = True,
) -> str:
    """Configure logging.

    Every command, download and outcome is recorded to the log file. The
    console handler only shows warnings and above so that operator prompts
    stay readable; the file always gets ``level``.

    If the requested log location is not writable we fall back to a file in
    the current working directory, and if that fails too only the console
    handler is installed.

    Returns the actual file path being used, or "" when logging to the
    console only.
    """

    logger = logging.getLogger()
    logger.setLevel(level)

    # Avoid duplicate handlers if configure_logging() is called multiple times.
    if getattr(logger, "_twogc_configured", False):
        return getattr(logger, "_twogc_log_path", log_path)

    handlers: list[logging.Handler] = []

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S%z")

    file_handler: Optional[logging.Handler] = None
    try:
        Path(os.path.dirname(log_path) or ".").mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        chosen_path = log_path
    except OSError:
        # Fall back to a writable location, then to console only.
        fallback = str(Path.cwd() / "twogc-installer.log")
        try:
            file_handler = logging.FileHandler(fallback, encoding="utf-8")
            chosen_path = fallback
        except OSError:
            file_handler = None
            chosen_path = ""
    if file_handler is not None:
        file_handler.setFormatter(fmt)
        handlers.append(file_handler)

    if also_console:
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        console.setLevel(level if level <= logging.DEBUG else logging.WARNING)
        handlers.append(console)

    for h in handlers:
        logger.addHandler(h)

    setattr(logger, "_twogc_configured", True)
    setattr(logger, "_twogc_log_path", chosen_path)

    logging.getLogger(__name__).info(
        "Logging initialized (requested=%s, actual=%s)", log_path, chosen_path
    )
    return chosen_path
