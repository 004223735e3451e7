"""
Logging configuration for the chain-rule elimination toolkit.
"""
import sys
from pathlib import Path
from loguru import logger
from chainfree.config import config


def setup_logging():
    """Setup logging configuration."""
    # Remove default handler
    logger.remove()

    # Get logging config
    log_level = config.get('logging.level', 'INFO')
    console_level = config.get('logging.console_level', log_level)
    log_format = config.get('logging.format',
                           "{time:YYYY-MM-DD HH:mm:ss} | {level} | {name}:{function}:{line} - {message}")
    log_file = config.get('logging.log_file', './logs/chainfree.log')

    # Add console handler
    logger.add(
        sys.stdout,
        format=log_format,
        level=console_level,
        colorize=True
    )

    # Add file handler (an empty log_file disables it)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            format=log_format,
            level=log_level,
            rotation="10 MB",
            retention="7 days",
            compression="zip"
        )

    return logger


# Initialize logging
app_logger = setup_logging()
