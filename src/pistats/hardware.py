"""Hardware queries backed by psutil."""

import logging
import math
from collections.abc import Iterator
from typing import Protocol

import psutil

from pistats.errors import SensorReadError
from pistats.sensors import TemperatureSensor

logger = logging.getLogger(__name__)


class HardwareQueries(Protocol):
    """The OS queries the stats aggregator depends on."""

    def cpu_frequency_hz(self) -> float: ...

    def available_memory_bytes(self) -> int: ...

    def temperature_sensors(self) -> Iterator[TemperatureSensor]: ...


class PsutilTemperatureSensor:
    """Adapter exposing a psutil ``shwtemp`` entry as a TemperatureSensor."""

    __slots__ = ("_chip", "_entry")

    def __init__(self, chip: str, entry) -> None:
        self._chip = chip
        self._entry = entry

    @property
    def label(self) -> str | None:
        # psutil reports a missing label as an empty string
        return self._entry.label or None

    def current(self) -> float:
        value = self._entry.current
        if value is None or math.isnan(value):
            raise SensorReadError(f"{self._chip}/{self._entry.label or '?'} has no reading")
        return float(value)

    def __repr__(self) -> str:
        return f"PsutilTemperatureSensor(chip={self._chip!r}, label={self.label!r})"


class PsutilHardware:
    """
    HardwareQueries implementation using psutil.

    Errors from the frequency and memory queries propagate to the caller.
    Sensor enumeration never raises: platforms without sensor support
    simply report no sensors.
    """

    def cpu_frequency_hz(self) -> float:
        """Get the current CPU frequency in Hz."""
        freq = psutil.cpu_freq()
        if freq is None:
            raise RuntimeError("CPU frequency is not available on this platform")
        # psutil reports MHz with at most kHz resolution, so this is exact
        return round(freq.current * 1_000_000)

    def available_memory_bytes(self) -> int:
        """Get memory available to new allocations without swapping, in bytes."""
        return psutil.virtual_memory().available

    def temperature_sensors(self) -> Iterator[TemperatureSensor]:
        """Lazily enumerate every temperature sensor across all chips."""
        sensors_temperatures = getattr(psutil, "sensors_temperatures", None)
        if sensors_temperatures is None:
            logger.debug("Temperature sensors are not supported on this platform")
            return
        try:
            chips = sensors_temperatures()
        except OSError as exc:
            logger.warning("Could not enumerate temperature sensors: %s", exc)
            return
        for chip, entries in chips.items():
            for entry in entries:
                yield PsutilTemperatureSensor(chip, entry)
