import logging
import sys
from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# libraries that only need to report problems
QUIET_LOGGERS = ("uvicorn", "asyncio", "multipart", "python_multipart", "jinja2")


def setup_logging() -> None:
    """Configure application logging.

    The `app` logger tree follows LOG_LEVEL, everything else reports
    warnings only.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)]
    )

    logging.getLogger("app").setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
