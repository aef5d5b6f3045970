import logging
import sys
from typing import Optional

logger: logging.Logger = logging.getLogger("uipath_trigger")

_LOG_FORMAT = "[%(asctime)s - %(name)s:%(lineno)d - %(levelname)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(should_debug: Optional[bool] = None) -> None:
    logger.setLevel(logging.DEBUG if should_debug else logging.INFO)
    logger.propagate = False

    for handler in logger.handlers:
        if getattr(handler, "_uipath_trigger", False):
            # stderr may have been swapped since the handler was created
            handler.stream = sys.stderr  # type: ignore[attr-defined]
            return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt=_DATE_FORMAT))
    handler._uipath_trigger = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
