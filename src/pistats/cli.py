"""Command line entry point for pistats."""

import logging
import signal
import threading
from enum import Enum
from typing import Optional

import typer

from pistats.display import StatusLine, run_status_line
from pistats.errors import HardwareQueryError
from pistats.logging_config import configure_logging
from pistats.monitor import StatsAggregator
from pistats.settings import get_settings

logger = logging.getLogger(__name__)


class ErrorPolicy(str, Enum):
    ABORT = "abort"
    RETRY = "retry"


class LogLevel(str, Enum):
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


app = typer.Typer(
    help="Show CPU frequency, CPU temperature and available memory on one line.",
    context_settings={"help_option_names": ["-h", "--help"]},
    add_completion=False,
)


def _make_aggregator() -> StatsAggregator:
    return StatsAggregator()


def _install_sigterm(stop: threading.Event) -> None:
    def _handler(signum, frame) -> None:
        stop.set()

    signal.signal(signal.SIGTERM, _handler)


@app.command()
def main(
    interval: Optional[float] = typer.Option(
        None,
        "--interval",
        "-i",
        min=0.1,
        help="Seconds between samples (defaults to PISTATS_INTERVAL env or 1.0).",
    ),
    on_error: Optional[ErrorPolicy] = typer.Option(
        None,
        "--on-error",
        case_sensitive=False,
        help="What to do when a frequency or memory query fails (defaults to PISTATS_ON_ERROR env or abort).",
    ),
    once: bool = typer.Option(False, "--once", help="Print a single sample and exit."),
    tui: bool = typer.Option(False, "--tui", help="Use the full-screen Textual interface."),
    log_level: Optional[LogLevel] = typer.Option(
        None,
        "--log-level",
        case_sensitive=False,
        help="Logging level (defaults to LOG_LEVEL env or WARNING).",
    ),
) -> None:
    """Continuously display the hardware stats line."""
    settings = get_settings()
    configure_logging(log_level.value if log_level is not None else None)
    interval = interval if interval is not None else settings.interval
    policy = on_error.value if on_error is not None else settings.on_error

    aggregator = _make_aggregator()

    if once:
        try:
            typer.echo(aggregator.render())
        except HardwareQueryError as exc:
            logger.error("%s", exc, extra={"metric": exc.metric})
            raise typer.Exit(code=1)
        return

    if tui:
        from pistats.app import PistatsApp

        tui_app = PistatsApp(aggregator, interval=interval, on_error=policy)
        tui_app.run()
        raise typer.Exit(code=tui_app.return_code or 0)

    stop = threading.Event()
    _install_sigterm(stop)
    display = StatusLine()
    try:
        code = run_status_line(aggregator, display, interval=interval, on_error=policy, stop_event=stop)
    except KeyboardInterrupt:
        display.finish()
        code = 0
    raise typer.Exit(code=code)


def run() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
