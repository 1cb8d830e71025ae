import logging

# Lambda attaches its own handler to the root logger
logger = logging.getLogger()
logger.setLevel(logging.INFO)

LOCAL_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def get_logger(name: str = None) -> logging.Logger:
    """
    Get a stream logger for running the handler outside Lambda.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger writing formatted records to stderr
    """
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOCAL_FORMAT))
        log.addHandler(handler)
    log.setLevel(logging.INFO)
    return log
