"""
Logging setup shared by the habit API and the metrics server.
"""
import logging
from pathlib import Path

from habit_tracker.constants import LOG_DIR, LOG_FILE, DEFAULT_LOG_DIRECTORY_DEV


def configure_logging(log_dir: str = LOG_DIR, log_file: str = LOG_FILE) -> Path:
    """
    Configure root logging with a file handler and a console handler.

    Falls back to a local directory when the configured one is not writable.

    Returns:
        Path of the log file in use
    """
    try:
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / log_file
        file_handler = logging.FileHandler(log_path)
    except PermissionError:
        log_dir = DEFAULT_LOG_DIRECTORY_DEV
        Path(log_dir).mkdir(parents=True, exist_ok=True)
        log_path = Path(log_dir) / log_file
        file_handler = logging.FileHandler(log_path)

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            file_handler,
            logging.StreamHandler()  # Also log to console
        ]
    )
    return log_path
