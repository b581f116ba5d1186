import logging


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr with a single shared format.

    Only the process entry point calls this; library modules just use
    ``logging.getLogger(__name__)``.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
