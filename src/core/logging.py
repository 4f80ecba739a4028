import sys
from typing import List, Optional
from loguru import logger
import os

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)

def setup_logging(
    debug_mode: bool = True,
    log_dir: Optional[str] = "logs",
    console: bool = True
) -> List[int]:
    """
    Configures Loguru sinks for the editor.

    Args:
        debug_mode: DEBUG on the console when set (link transitions are
            logged at this level), INFO otherwise
        log_dir: Directory for rotating log files; None disables file output
        console: Add the stderr sink

    Returns:
        Handler ids of the sinks that were added
    """
    # Remove default handler
    logger.remove()
    handler_ids = []

    level = "DEBUG" if debug_mode else "INFO"
    if console:
        handler_ids.append(logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT))

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler_ids.append(logger.add(
            os.path.join(log_dir, "linkgraph_{time}.log"),
            rotation="10 MB",
            retention="1 week",
            level="DEBUG",
        ))

    logger.info(f"Logging initialized ({level}, files: {log_dir or 'off'})")
    return handler_ids
