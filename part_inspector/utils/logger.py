"""
Centralized Logging Configuration
Console logging for the inspection loop, with an optional daily log file.
"""

import logging
import sys
from pathlib import Path
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level=logging.INFO, log_to_file=False, log_dir="logs"):
    """
    Setup centralized logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_to_file: If True, also log to a daily file under log_dir
        log_dir: Directory for the log file
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True
    )

    if log_to_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(exist_ok=True)
        log_filename = log_dir / f"inspection_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_filename, encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
        logging.getLogger().addHandler(file_handler)

    # Qt prints its own plugin chatter through the root logger
    logging.getLogger('PyQt6').setLevel(logging.WARNING)
