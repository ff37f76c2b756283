import logging

from richtext.config import env_config

logger = logging.getLogger("richtext")

DEFAULT_LOG_LEVEL = "WARNING"

# Create a custom logging level
DETAIL = 15
logging.addLevelName(DETAIL, "DETAIL")


# Create a custom log method for the "DETAIL" level
def detail(self, message, *args, **kws):
    if self.isEnabledFor(DETAIL):
        self._log(DETAIL, message, args, **kws)


# Add the custom log method to the logging.Logger class
logging.Logger.detail = detail  # type: ignore


def get_logger(level: str = "") -> logging.Logger:
    """Configure the package logger from `level` or the LOG_LEVEL environment variable.

    Only one stream handler is ever attached, so calling this repeatedly (e.g. once per CLI
    invocation) just resets the level.
    """
    level_name = (level or env_config.LOG_LEVEL or DEFAULT_LOG_LEVEL).upper()
    logger.setLevel(logging.getLevelName(level_name))
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(name)s %(levelname)s: %(message)s"))
        logger.addHandler(handler)
    return logger
