import logging

from app.core.config import get_log_level


def configure_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, get_log_level(), logging.INFO),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )
