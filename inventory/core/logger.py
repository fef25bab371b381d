import logging
from logging.handlers import RotatingFileHandler

from .settings import Settings, settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def build_logger(config: Settings, name: str = "inventory") -> logging.Logger:
    """
    Returns the named logger, attaching a rotating file handler under
    ``config.LOG_DIR`` and a console handler the first time it is built.
    """
    log = logging.getLogger(name)
    log.setLevel(config.LOG_LEVEL)

    if not log.handlers:
        config.LOG_DIR.mkdir(parents=True, exist_ok=True)
        formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

        file_handler = RotatingFileHandler(
            config.LOG_DIR / config.LOG_FILE,
            maxBytes=config.LOG_MAX_BYTES,
            backupCount=config.LOG_BACKUP_COUNT,
        )
        file_handler.setFormatter(formatter)
        log.addHandler(file_handler)

        console = logging.StreamHandler()
        console.setFormatter(formatter)
        log.addHandler(console)

    return log


logger = build_logger(settings)
