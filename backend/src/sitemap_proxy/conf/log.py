import logging

LOG_FORMAT = "[%(asctime)s] %(levelname)-8s  %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(level: str = "INFO", reset: bool = False):
    """Configure console logging for the relay.

    Calling it again is a no-op unless ``reset`` is set, so uvicorn's own
    handlers or a test harness are not clobbered.
    """
    root = logging.getLogger()
    if root.handlers and not reset:
        root.setLevel(level)
        return
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt=DATE_FORMAT,
        handlers=[logging.StreamHandler()],
        force=reset,
    )
    # uvicorn's access log duplicates the request middleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
