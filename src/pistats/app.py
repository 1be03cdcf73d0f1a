"""pistats - Textual front end."""

from queue import Empty, Queue

from textual.app import App, ComposeResult
from textual.widgets import Footer, Static

from pistats.errors import HardwareQueryError
from pistats.models import Snapshot
from pistats.monitor import MonitorUpdate, StatsAggregator, StatsMonitor
from pistats.settings import ON_ERROR_ABORT, ON_ERROR_POLICIES


class StatusLineWidget(Static):
    """Widget showing the latest stats line."""

    DEFAULT_CSS = """
    StatusLineWidget {
        height: auto;
        padding: 1;
        background: $surface;
    }
    """

    def __init__(self, *args, **kwargs) -> None:
        """Initialize StatusLineWidget."""
        super().__init__("Sampling...", *args, markup=False, **kwargs)
        self._snapshot: Snapshot | None = None
        self._error: HardwareQueryError | None = None

    @property
    def snapshot(self) -> Snapshot | None:
        return self._snapshot

    @property
    def error(self) -> HardwareQueryError | None:
        return self._error

    def show_snapshot(self, snapshot: Snapshot) -> None:
        self._snapshot = snapshot
        self._error = None
        self.update(str(snapshot))

    def show_error(self, error: HardwareQueryError) -> None:
        self._error = error
        self.update(f"error: {error}")


class PistatsApp(App):
    """Main pistats application."""

    TITLE = "pistats"
    SUB_TITLE = "CPU / Temperature / Memory"

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        aggregator: StatsAggregator | None = None,
        interval: float = 1.0,
        on_error: str = ON_ERROR_ABORT,
    ) -> None:
        """Initialize the PistatsApp."""
        super().__init__()
        if on_error not in ON_ERROR_POLICIES:
            raise ValueError(f"unknown error policy: {on_error!r}")
        self._on_error = on_error
        self._update_queue: Queue[MonitorUpdate] = Queue()
        self._monitor = StatsMonitor(
            aggregator if aggregator is not None else StatsAggregator(),
            self._update_queue,
            poll_rate=interval,
        )

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield StatusLineWidget(id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        """Start the stats monitor when the app is mounted."""
        self._monitor.start()
        self.set_interval(0.25, self._check_for_updates)

    def _check_for_updates(self) -> None:
        """Drain the queue and show the most recent update."""
        latest: MonitorUpdate | None = None
        while True:
            try:
                latest = self._update_queue.get_nowait()
            except Empty:
                break
            if isinstance(latest, HardwareQueryError) and self._on_error == ON_ERROR_ABORT:
                self._abort(latest)
                return

        if latest is not None:
            self._apply_update(latest)

    def _apply_update(self, update: MonitorUpdate) -> None:
        status = self.query_one("#status-line", StatusLineWidget)
        if isinstance(update, HardwareQueryError):
            status.show_error(update)
        else:
            status.show_snapshot(update)

    def _abort(self, error: HardwareQueryError) -> None:
        self._monitor.stop()
        self.exit(return_code=1, message=str(error))

    def action_quit(self) -> None:
        """Handle quit action with graceful cleanup."""
        self._monitor.stop()
        self.exit()
