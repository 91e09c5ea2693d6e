import logging
import sys

from infra.settings import settings

LOG_FORMAT = "%(asctime)s [{service}] %(levelname)s %(name)s - %(message)s"


def configure_logging(level: str | None = None, service: str | None = None) -> None:
    """Install one stream handler on the root logger.

    Every line carries the service marker so entries from this service are easy to
    pick out of a shared gateway log.
    """
    fmt = LOG_FORMAT.format(service=service or settings.SERVICE_NAME)
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=fmt,
        stream=sys.stdout,
        force=True,
    )
