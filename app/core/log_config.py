import logging
import sys

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logging.basicConfig(
    level=settings.log_level.upper(),
    format=LOG_FORMAT,
    stream=sys.stdout,
)

logger = logging.getLogger("rooms_api")
