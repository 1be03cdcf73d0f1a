"""CPU temperature resolution from the sensors reported by the OS."""

import logging
from collections.abc import Iterable
from typing import Protocol

from pistats.models import SensorTable, TemperatureReading

logger = logging.getLogger(__name__)

UNKNOWN_LABEL = "unknown"
COMPOSITE_LABEL = "Composite"
CPU_LABEL = "CPU"
DEFAULT_CELSIUS = 0.0

# Highest priority first
PREFERRED_LABELS = (COMPOSITE_LABEL, CPU_LABEL)


class TemperatureSensor(Protocol):
    """A temperature sensor entry as enumerated by the OS."""

    @property
    def label(self) -> str | None: ...

    def current(self) -> float:
        """Return the current reading in degrees Celsius or raise SensorReadError."""
        ...


def read_sensor(sensor: TemperatureSensor) -> TemperatureReading:
    """Read a sensor, filing unlabeled entries under "unknown"."""
    return TemperatureReading(label=sensor.label or UNKNOWN_LABEL, celsius=sensor.current())


def build_sensor_table(sensors: Iterable[TemperatureSensor]) -> SensorTable:
    """
    Drain the sensor enumeration into a label -> reading table.

    Any sensor that fails to read is skipped. When several sensors share
    a label the last one read wins.
    """
    table: SensorTable = {}
    for sensor in sensors:
        try:
            reading = read_sensor(sensor)
        except Exception as exc:
            logger.debug("Skipping unreadable sensor: %s", exc, extra={"label": sensor.label})
            continue
        table[reading.label] = reading.celsius
    return table


def select_temperature(table: SensorTable) -> float:
    """Pick "Composite", then "CPU", falling back to 0.0."""
    for label in PREFERRED_LABELS:
        if label in table:
            return table[label]
    return DEFAULT_CELSIUS


def resolve_temperature(sensors: Iterable[TemperatureSensor]) -> float:
    """Best-effort CPU temperature. Never raises for a finite sequence."""
    return select_temperature(build_sensor_table(sensors))
