import logging

from .config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(level: str = None) -> None:
    logging.basicConfig(level=(level or settings.LOG_LEVEL).upper(), format=LOG_FORMAT)
    # SQL statements are logged through DB_ECHO instead
    logging.getLogger("sqlalchemy.engine").propagate = settings.DB_ECHO
