# diffy/utils/logger.py

import logging
import os
import sys
from pathlib import Path
from platformdirs import user_log_dir

from diffy.config import APP_NAME, APP_AUTHOR

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger():
    """
    App-wide logger, silent by default.

    DIFFY_DEBUG=1 writes app.debug.log into the user log dir;
    DIFFY_DEBUG=stderr prints to the console instead (handy with the CLI).
    """
    logger = logging.getLogger(APP_NAME)
    mode = os.environ.get("DIFFY_DEBUG", "").strip().lower()

    if not mode:
        logger.setLevel(logging.CRITICAL)
        if not any(isinstance(h, logging.NullHandler) for h in logger.handlers):
            logger.addHandler(logging.NullHandler())
        logger.propagate = False
        return logger

    logger.setLevel(logging.DEBUG)
    if mode == "stderr":
        if not any(type(h) is logging.StreamHandler for h in logger.handlers):
            sh = logging.StreamHandler(sys.stderr)
            sh.setFormatter(logging.Formatter(_FORMAT))
            logger.addHandler(sh)
    elif not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        log_dir = Path(user_log_dir(appname=APP_NAME, appauthor=APP_AUTHOR))
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / "app.debug.log", encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(fh)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Child of the app logger, e.g. 'DiffyInAJiffy.aligner'."""
    return logger.getChild(name)


logger = setup_logger()
