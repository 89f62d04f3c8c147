import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(log_file="outbreak.log", level=logging.DEBUG):
    """
    Configures the root logger to write to a file.

    The curses screen owns the terminal, so nothing is logged to the console.

    Args:
        log_file (str): The path to the log file; its directory is created if needed.
        level (int): Minimum level to record.
    """
    log_dir = os.path.dirname(log_file)
    if log_dir and not os.path.exists(log_dir):
        os.makedirs(log_dir)

    logging.basicConfig(
        filename=log_file,
        filemode='w', # Overwrite log on each run
        level=level,
        format=LOG_FORMAT
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging initialized (level %s).", logging.getLevelName(level))
