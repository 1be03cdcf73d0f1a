"""Single-line terminal display and the tick loop driving it."""

import logging
import sys
import threading
from typing import TextIO

from pistats.errors import HardwareQueryError
from pistats.monitor import StatsAggregator
from pistats.settings import ON_ERROR_ABORT, ON_ERROR_POLICIES

logger = logging.getLogger(__name__)

ERASE_LINE = "\x1b[2K"


class StatusLine:
    """Rewrites the current terminal line in place. Assumes an ANSI terminal."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._dirty = False

    def show(self, text: str) -> None:
        """Clear the line, write text and return the cursor to column 0."""
        self._stream.write(ERASE_LINE)
        self._stream.write(f"{text}\r")
        self._stream.flush()
        self._dirty = True

    def finish(self) -> None:
        """Move past the status line so later output starts on a fresh line."""
        if self._dirty:
            self._stream.write("\n")
            self._stream.flush()
            self._dirty = False


def run_status_line(
    aggregator: StatsAggregator,
    display: StatusLine,
    interval: float = 1.0,
    on_error: str = ON_ERROR_ABORT,
    stop_event: threading.Event | None = None,
) -> int:
    """
    Sample, display and sleep until stop_event is set.

    A failed tick renders nothing. Under the "abort" policy the loop ends
    with status 1, under "retry" it tries again after the interval.

    Returns:
        The process exit status.
    """
    if on_error not in ON_ERROR_POLICIES:
        raise ValueError(f"unknown error policy: {on_error!r}")
    stop = stop_event if stop_event is not None else threading.Event()

    while not stop.is_set():
        try:
            line = aggregator.render()
        except HardwareQueryError as exc:
            if on_error == ON_ERROR_ABORT:
                display.finish()
                logger.error("Giving up: %s", exc, extra={"metric": exc.metric})
                return 1
            logger.warning("Skipping tick: %s", exc, extra={"metric": exc.metric})
        else:
            display.show(line)

        stop.wait(timeout=interval)

    display.finish()
    return 0
