"""Logging configuration helpers."""

import logging

_QUIET_LIBRARIES = ("httpx", "openai")


def configure_logging(level: int = logging.INFO) -> None:
    """Attach one stream handler to the package logger.

    HTTP client libraries are held at WARNING so request lines never repeat
    what the chat service already logs in redacted form.
    """
    logger = logging.getLogger("fresh_keeper")
    logger.setLevel(level)
    for name in _QUIET_LIBRARIES:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
