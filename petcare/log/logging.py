"""
Loguru logger setup shared by the whole service.

Structured fields are passed as keyword arguments and end up in the
record's ``extra`` dict, e.g.::

    logger.info("Application submitted", event_type="application_submitted", pet_id=pet_id)
"""
import sys

from loguru import logger

from petcare.core.config import settings

TEXT_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[app_name]}</cyan> | "
    "<level>{message}</level> | {extra}"
)


def configure_logging(config: dict) -> None:
    """
    (Re)configure the global loguru logger.

    Args:
        config: Output of ``Settings.logging_config``.
    """
    logger.remove()
    logger.configure(extra={"app_name": config["app_name"]})

    if config["json_logs"]:
        logger.add(sys.stdout, level=config["log_level"], serialize=True, backtrace=False)
    else:
        logger.add(
            sys.stderr,
            level=config["log_level"],
            format=TEXT_FORMAT,
            colorize=True,
            backtrace=False,
        )


configure_logging(settings.logging_config)

__all__ = ["logger", "configure_logging"]
