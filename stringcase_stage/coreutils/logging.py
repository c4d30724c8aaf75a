import logging
import os
from datetime import datetime
from typing import Optional


def setup_logging(level=logging.INFO, log_dir: Optional[str] = "logs"):
    """Setup basic logging configuration

    Logs go to stderr and, when log_dir is set, to a dated file in that directory.
    """
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handlers.insert(
            0,
            logging.FileHandler(
                os.path.join(
                    log_dir, f"stringcase_{datetime.now().strftime('%Y-%m-%d')}.log"
                )
            ),
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
        handlers=handlers,
        force=True,
    )
    return logging.getLogger(__name__)


def log_function_call(func_name: str, **kwargs):
    """Log function calls with parameters"""
    logger = logging.getLogger(__name__)
    logger.info(f"Calling {func_name} with params: {kwargs}")
