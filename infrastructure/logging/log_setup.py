# infrastructure/logging/log_setup.py
from loguru import logger

LOG_FORMAT = "{time:HH:mm:ss.SSS} | {level: <7} | {message}"


def setup_console_logging(level: str = "INFO") -> None:
    logger.remove()
    logger.add(lambda msg: print(msg, end=""), level=level.upper(), format=LOG_FORMAT)
