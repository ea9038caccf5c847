import logging
import sys


def setup_logging(verbose: bool = False):
    """
    Configure the application's root logger.

    Uses the format "timestamp - logger name - level - message" for records and attaches a StreamHandler that writes logs to stdout.

    Parameters:
        verbose (bool): Log at DEBUG level instead of INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ],
        force=True,
    )
