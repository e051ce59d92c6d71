import os
import logging
from logging.handlers import RotatingFileHandler

from config import LOG_DIR, LOG_FILE, LOG_LEVEL

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(log_dir: str = LOG_DIR, level: str = LOG_LEVEL) -> logging.Logger:
    """
    Attach console + rotating file handlers to the root logger.
    Streamlit re-executes the script on every interaction, so this only
    adds handlers the first time it runs in a process.
    """
    root = logging.getLogger()
    root.setLevel(level)

    fmt = logging.Formatter(LOG_FORMAT)

    if not any(isinstance(h, RotatingFileHandler) for h in root.handlers):
        os.makedirs(log_dir, exist_ok=True)
        handler = RotatingFileHandler(
            os.path.join(log_dir, LOG_FILE),
            maxBytes=5 * 1024 * 1024,   # 5 MB
            backupCount=5               # keep 5 logs
        )
        handler.setFormatter(fmt)
        root.addHandler(handler)

    if not any(type(h) is logging.StreamHandler for h in root.handlers):
        console = logging.StreamHandler()
        console.setFormatter(fmt)
        root.addHandler(console)

    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root
