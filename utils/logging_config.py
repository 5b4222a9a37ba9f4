"""
Logging setup for the CNC line annotator.
"""
import logging
import logging.handlers
import tempfile
from pathlib import Path
from typing import Optional

from config.app_config import get_settings_dir

LOG_DIRNAME = "logs"
LOG_FILENAME = "annotator.log"


def _handler_exists(logger: logging.Logger, name: str) -> bool:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return True
    return False


def get_log_dir() -> Path:
    """Resolve the directory for log files (creates it if needed)."""
    log_dir = get_settings_dir() / LOG_DIRNAME
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        return log_dir
    except OSError:
        fallback = Path(tempfile.gettempdir()) / "cnc_annotator_logs"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def setup_logging(level: str = "INFO", log_dir: Optional[Path] = None) -> logging.Logger:
    """Attach a console handler and a rotating file handler to the root logger."""
    log_dir = log_dir or get_log_dir()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    if not _handler_exists(root, "annotator_console"):
        console = logging.StreamHandler()
        console.setLevel(getattr(logging, level.upper(), logging.INFO))
        console.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(message)s", datefmt="%H:%M:%S")
        )
        console.set_name("annotator_console")
        root.addHandler(console)

    if not _handler_exists(root, "annotator_file"):
        file_handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILENAME,
            maxBytes=2_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
        )
        file_handler.set_name("annotator_file")
        root.addHandler(file_handler)

    return root
