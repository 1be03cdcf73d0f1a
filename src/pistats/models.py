"""Data models for pistats."""

import math
from dataclasses import dataclass
from decimal import Decimal

# Sensor label -> latest reading in degrees Celsius
SensorTable = dict[str, float]


@dataclass(slots=True, frozen=True)
class TemperatureReading:
    """A single labelled temperature reading."""

    label: str
    celsius: float


def format_number(value: float) -> str:
    """
    Render a number in its natural decimal form.

    Integral values drop the fractional part and other values use the
    shortest round-trip digits, never scientific notation.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format(Decimal(repr(value)).normalize(), "f")


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Immutable snapshot of the hardware stats for one tick."""

    cpu_frequency_mhz: float
    temperature_celsius: float  # 0.0 when no usable sensor is found
    memory_available_mebibytes: float

    def __str__(self) -> str:
        return (
            f"{format_number(self.cpu_frequency_mhz)} Mhz / "
            f"{format_number(self.temperature_celsius)} C / "
            f"{format_number(self.memory_available_mebibytes)} MiB"
        )
