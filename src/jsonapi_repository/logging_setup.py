import logging
from typing import Optional

from jsonapi_repository.settings import get_settings


def setup_logging(level: Optional[str] = None) -> None:
    """
    Console logging for applications using the repository.

    Without an explicit level, JSONAPI_LOG_LEVEL is read through
    HttpClientSettings, so a value in .env counts as well.
    """
    level_name = (level or get_settings().log_level).upper()
    level_value = logging.getLevelName(level_name)
    if not isinstance(level_value, int):
        raise ValueError(f"Unknown log level: {level!r}")

    logging.basicConfig(
        level=level_value,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
