import logging
import sys

from dcas_cli.config.settings import get_settings

# ANSI color codes for colorful logs
COLORS = {
    'RED': '\033[0;31m',
    'GREEN': '\033[0;32m',
    'YELLOW': '\033[0;33m',
    'BLUE': '\033[0;34m',
    'CYAN': '\033[0;36m',
    'BOLD_RED': '\033[1;31m',
    'BOLD_GREEN': '\033[1;32m',
    'BOLD_YELLOW': '\033[1;33m',
    'BOLD_BLUE': '\033[1;34m',
    'RESET': '\033[0m',
}

PLAIN_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'

# Custom formatter to add colors based on log level
class ColoredFormatter(logging.Formatter):
    FORMATS = {
        logging.DEBUG: COLORS['BLUE'] + '%(asctime)s ' + COLORS['BOLD_BLUE'] + '[%(levelname)s]' + COLORS['RESET'] + ' %(name)s: %(message)s',
        logging.INFO: COLORS['GREEN'] + '%(asctime)s ' + COLORS['BOLD_GREEN'] + '[%(levelname)s]' + COLORS['RESET'] + ' %(name)s: ' + COLORS['CYAN'] + '%(message)s' + COLORS['RESET'],
        logging.WARNING: COLORS['YELLOW'] + '%(asctime)s ' + COLORS['BOLD_YELLOW'] + '[%(levelname)s]' + COLORS['RESET'] + ' %(name)s: %(message)s',
        logging.ERROR: COLORS['RED'] + '%(asctime)s ' + COLORS['BOLD_RED'] + '[%(levelname)s]' + COLORS['RESET'] + ' %(name)s: %(message)s',
        logging.CRITICAL: COLORS['BOLD_RED'] + '%(asctime)s [%(levelname)s] %(name)s: %(message)s' + COLORS['RESET'],
    }

    def format(self, record):
        log_fmt = self.FORMATS.get(record.levelno, PLAIN_FORMAT)
        formatter = logging.Formatter(log_fmt, datefmt='%H:%M:%S')
        return formatter.format(record)

# Configure logging
def setup_logging(level: str = None):
    log_level = (level or get_settings().LOG_LEVEL).upper()

    # Log to stderr; stdout carries the command output
    logging.basicConfig(level=getattr(logging, log_level, logging.WARNING), stream=sys.stderr)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level, logging.WARNING))

    # Set higher log level for some verbose modules
    logging.getLogger('urllib3').setLevel(logging.WARNING)

    logger = logging.getLogger('dcas_cli')

    # Colors only when attached to a terminal
    if root_logger.handlers:
        handler = root_logger.handlers[0]
        if sys.stderr.isatty():
            handler.setFormatter(ColoredFormatter())
        else:
            handler.setFormatter(logging.Formatter(PLAIN_FORMAT, datefmt='%H:%M:%S'))

    return logger

# Initialize logger
logger = setup_logging()
