import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path


def setup_logger(log_file: str = "data/habits.log", max_bytes: int = 1_000_000, backup_count: int = 3):
    Path(log_file).parent.mkdir(exist_ok=True, parents=True)
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    # streamlit re-executes the script on every interaction
    if any(getattr(h, "baseFilename", None) == str(Path(log_file).resolve()) for h in logger.handlers):
        return logger
    handler = RotatingFileHandler(log_file, maxBytes=max_bytes, backupCount=backup_count, encoding="utf-8")
    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    return logger
