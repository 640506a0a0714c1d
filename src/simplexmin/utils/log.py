import logging

from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(filename: Optional[Union[str, Path]] = None, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger for a minimization script.

    Logs go to ``filename`` (overwritten) when given, otherwise to stderr.
    The library itself only creates module loggers and never calls this on import.
    """
    if filename is not None:
        logging.basicConfig(filename=Path(filename).as_posix(),
                            filemode='w',
                            level=level,
                            format=LOG_FORMAT,
                            encoding='utf-8',
                            force=True)
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    return logging.getLogger("simplexmin")
