# Standard library
import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Configure root logging for command-line runs."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
