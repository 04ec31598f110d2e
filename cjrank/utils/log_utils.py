"""logging setup for command line entry points"""
import sys
import logging


def setup_logging(level=logging.INFO) -> logging.Logger:
    """attach a stdout handler to the cjrank logger"""
    logger = logging.getLogger('cjrank')
    if not logger.handlers:
        stream_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)
    logger.setLevel(level)
    return logger
