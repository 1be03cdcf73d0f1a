"""Shared fakes for pistats tests."""

from collections.abc import Iterator

import pytest

from pistats.errors import SensorReadError
from pistats.settings import get_settings


class FakeSensor:
    """Temperature sensor returning a fixed value, or failing when value is None."""

    def __init__(self, label: str | None, value: float | None) -> None:
        self.label = label
        self._value = value
        self.reads = 0

    def current(self) -> float:
        self.reads += 1
        if self._value is None:
            raise SensorReadError(f"{self.label} unreadable")
        return self._value


class BrokenSensor:
    """Temperature sensor whose read raises the given exception."""

    def __init__(self, label: str | None, error: Exception) -> None:
        self.label = label
        self._error = error

    def current(self) -> float:
        raise self._error


class FakeHardware:
    """HardwareQueries stand-in. Exceptions given as values are raised instead."""

    def __init__(
        self,
        frequency_hz: float | Exception = 1_500_000_000,
        memory_bytes: int | Exception = 536_870_912,
        sensors: list[FakeSensor] | None = None,
    ) -> None:
        self.frequency_hz = frequency_hz
        self.memory_bytes = memory_bytes
        self.sensors = sensors if sensors is not None else [FakeSensor("CPU", 45.0)]
        self.calls: list[str] = []

    def cpu_frequency_hz(self) -> float:
        self.calls.append("frequency")
        if isinstance(self.frequency_hz, Exception):
            raise self.frequency_hz
        return self.frequency_hz

    def available_memory_bytes(self) -> int:
        self.calls.append("memory")
        if isinstance(self.memory_bytes, Exception):
            raise self.memory_bytes
        return self.memory_bytes

    def temperature_sensors(self) -> Iterator[FakeSensor]:
        self.calls.append("sensors")
        yield from self.sensors


@pytest.fixture
def hardware() -> FakeHardware:
    return FakeHardware()


@pytest.fixture(autouse=True)
def _fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
