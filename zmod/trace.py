import os
import sys
from typing import Optional, TextIO

_dest : Optional[TextIO] = None


def logging(on : bool, *, dest : TextIO = sys.stderr) -> None:
    """Whether to log the slow paths taken by ``zmod`` (widening fallbacks in
    addition and multiplication, Chinese remaindering).

    :param on: ``True`` to start logging, ``False`` to stop.
    :param dest: Stream the log lines are written to, ``sys.stderr`` by default.
    """
    global _dest
    _dest = dest if on else None


def is_logging() -> bool:
    return _dest is not None


def log(message : str) -> None:
    if _dest is not None:
        print(f'[zmod] {message}', file=_dest, flush=True)


if os.getenv('ZMOD_TRACE'):
    logging(on=True)
