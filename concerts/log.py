import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level="INFO"):
    """Setup basic logging configuration.

    The Lambda runtime installs its own root handler, in which case only the
    level is changed.
    """
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(level)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    return logging.getLogger("concerts")
