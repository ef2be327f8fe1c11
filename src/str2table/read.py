import logging
import sys

from .errors import InputError

logger = logging.getLogger(__name__)


def read_input(path=None):
    """Read the whole input text.

    Args:
        path (str): File to read, or None for standard input

    Returns:
        str: The text, line terminators kept as written
    """
    if path is None:
        logger.debug("Reading input from stdin")
        return sys.stdin.read()
    try:
        with open(path, 'r', encoding='utf-8', newline='') as file:
            text = file.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputError(f"'{path}'", reason=str(e)) from e
    logger.debug("Read %d character(s) from %s", len(text), path)
    return text
