"""Logger configuration for program tools.

Modules log through the shared loguru ``logger`` with structured keyword
extras (``logger.info("Operation applied", operation_id=..., kind=...)``);
the sinks configured here render those extras after the message.
"""

import sys
from pathlib import Path

from loguru import logger

from program_tools.core.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> | {extra}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    *,
    json_logs: bool | None = None,
    rotation: str = "10 MB",
    retention: str = "7 days",
) -> None:
    """Configure loguru with a console sink and an optional rotating file sink.

    Args:
        level: Logging level; defaults to PROGRAM_TOOLS_LOG_LEVEL
        log_file: Optional log file path; defaults to PROGRAM_TOOLS_LOG_FILE
        json_logs: Emit one JSON object per record on the console instead of
            the colored format; defaults to PROGRAM_TOOLS_LOG_JSON
        rotation: Log rotation size (e.g., "10 MB", "1 day")
        retention: Log retention period (e.g., "7 days", "1 month")
    """
    level = (level or settings.log_level).upper()
    log_file = log_file or settings.log_file
    json_logs = settings.log_json if json_logs is None else json_logs

    logger.remove()

    if json_logs:
        logger.add(sys.stderr, level=level, serialize=True)
    else:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=rotation,
            retention=retention,
            compression="zip",
            backtrace=True,
            diagnose=False,
        )

    logger.debug("Logger initialized", level=level, log_file=log_file, json_logs=json_logs)


# Host applications that own their sinks set PROGRAM_TOOLS_CONFIGURE_LOGGING=false
if settings.configure_logging:
    setup_logger()
