"""Stats sampling engine for pistats."""

import logging
import threading
from queue import Queue

from pistats.errors import HardwareQueryError
from pistats.hardware import HardwareQueries, PsutilHardware
from pistats.models import Snapshot
from pistats.sensors import resolve_temperature

logger = logging.getLogger(__name__)

HZ_PER_MHZ = 1_000_000
BYTES_PER_MIB = 1_048_576
MIN_POLL_RATE = 0.1

MonitorUpdate = Snapshot | HardwareQueryError


class StatsAggregator:
    """
    Gathers CPU frequency, temperature and available memory into a Snapshot.

    Nothing is cached between calls: each sample rebuilds the sensor table
    from scratch.
    """

    def __init__(self, hardware: HardwareQueries | None = None) -> None:
        """
        Initialize the StatsAggregator.

        Args:
            hardware: Source of the hardware queries. Defaults to psutil.
        """
        self._hardware = hardware if hardware is not None else PsutilHardware()

    @property
    def hardware(self) -> HardwareQueries:
        return self._hardware

    def sample(self) -> Snapshot:
        """
        Take one snapshot.

        Raises:
            HardwareQueryError: The frequency or memory query failed.
        """
        try:
            frequency_hz = self._hardware.cpu_frequency_hz()
        except Exception as exc:
            raise HardwareQueryError("frequency", exc) from exc

        temperature = resolve_temperature(self._hardware.temperature_sensors())

        try:
            memory_bytes = self._hardware.available_memory_bytes()
        except Exception as exc:
            raise HardwareQueryError("memory", exc) from exc

        return Snapshot(
            cpu_frequency_mhz=frequency_hz / HZ_PER_MHZ,
            temperature_celsius=temperature,
            memory_available_mebibytes=memory_bytes / BYTES_PER_MIB,
        )

    def render(self) -> str:
        """Sample and format the status line."""
        return str(self.sample())


class StatsMonitor:
    """
    Background sampler feeding a thread-safe Queue.

    Each tick puts either a Snapshot or the HardwareQueryError that failed
    it on the queue; the consumer owns the error policy. One daemon thread
    samples then waits, so ticks never overlap.
    """

    def __init__(
        self,
        aggregator: StatsAggregator,
        update_queue: Queue[MonitorUpdate],
        poll_rate: float = 1.0,
    ) -> None:
        self._aggregator = aggregator
        self._queue = update_queue
        self.poll_rate = poll_rate
        self._wake = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Seconds waited after each tick, never below MIN_POLL_RATE."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, seconds: float) -> None:
        self._poll_rate = seconds if seconds > MIN_POLL_RATE else MIN_POLL_RATE

    @property
    def is_running(self) -> bool:
        thread = self._thread
        return bool(thread and thread.is_alive())

    def start(self) -> bool:
        """Spawn the sampling thread. Returns False if one is already alive."""
        if self.is_running:
            return False
        self._wake.clear()
        self._thread = threading.Thread(target=self._poll_loop, name="StatsMonitor", daemon=True)
        self._thread.start()
        logger.debug("Stats monitor started")
        return True

    def stop(self, timeout: float | None = 5.0) -> None:
        """Ask the sampling thread to finish and wait up to timeout seconds for it."""
        self._wake.set()
        thread, self._thread = self._thread, None
        if thread is not None:
            thread.join(timeout)

    def _poll_loop(self) -> None:
        while not self._wake.is_set():
            try:
                update: MonitorUpdate = self._aggregator.sample()
            except HardwareQueryError as exc:
                logger.warning("Sample failed: %s", exc, extra={"metric": exc.metric})
                update = exc
            self._queue.put(update)

            # Sleep measured from the end of this tick's work
            self._wake.wait(self._poll_rate)
