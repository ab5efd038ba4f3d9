import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure le logging racine une seule fois, au démarrage."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
