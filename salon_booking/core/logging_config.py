import logging
import sys

from salon_booking.core.config import settings


def setup_logging(level: str = None) -> None:
    """Configure root logging from LOG_LEVEL. Debug exposes scheduling traces."""
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=(level or settings.LOG_LEVEL).upper(),
    )
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)
