import logging
from contextvars import ContextVar

from colorlog import ColoredFormatter
from oilshop.core.settings import settings

# "-" outside of a request (startup, scripts, tests)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

LOG_FORMAT = (
    "%(log_color)s[%(asctime)s] [%(levelname)-8s] "
    "%(reset)s%(blue)s%(name)s%(reset)s %(purple)s[%(request_id)s]%(reset)s %(message)s"
)


class RequestIdFilter(logging.Filter):
    """Stamps every record with the id of the request being served."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


formatter = ColoredFormatter(
    LOG_FORMAT,
    datefmt="%Y-%m-%d %H:%M:%S",
    reset=True,
    log_colors={
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    },
)

handler = logging.StreamHandler()
handler.setFormatter(formatter)
# on the handler so records from child loggers are stamped too
handler.addFilter(RequestIdFilter())

logger = logging.getLogger("oilshop")
logger.setLevel(settings.LOG_LEVEL.upper())
logger.addHandler(handler)
logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Child of the ``oilshop`` logger, e.g. ``oilshop.http``."""
    return logger.getChild(name)
