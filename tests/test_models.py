"""Tests for pistats data models."""

import pytest

from pistats.models import Snapshot, TemperatureReading, format_number


def test_snapshot_creation():
    """Test Snapshot dataclass creation."""
    snapshot = Snapshot(
        cpu_frequency_mhz=1500.0,
        temperature_celsius=45.0,
        memory_available_mebibytes=512.0,
    )

    assert snapshot.cpu_frequency_mhz == 1500.0
    assert snapshot.temperature_celsius == 45.0
    assert snapshot.memory_available_mebibytes == 512.0


def test_snapshot_is_frozen():
    """Test that Snapshot is immutable (frozen)."""
    snapshot = Snapshot(1500.0, 45.0, 512.0)

    try:
        snapshot.temperature_celsius = 99.0
        raise AssertionError("Should have raised FrozenInstanceError")
    except AttributeError:
        pass  # Expected behavior for frozen dataclass


def test_snapshot_uses_slots():
    """Test that Snapshot uses __slots__."""
    snapshot = Snapshot(1500.0, 45.0, 512.0)

    # Slots-based dataclasses don't have __dict__
    assert not hasattr(snapshot, "__dict__")


def test_temperature_reading_is_frozen():
    """Test that TemperatureReading is immutable."""
    reading = TemperatureReading(label="CPU", celsius=45.0)

    with pytest.raises(AttributeError):
        reading.celsius = 50.0


def test_snapshot_str():
    """Test the rendered status line."""
    assert str(Snapshot(1500.0, 45.0, 512.0)) == "1500 Mhz / 45 C / 512 MiB"


def test_snapshot_str_fractional_values():
    """Test fractional values keep their digits."""
    snapshot = Snapshot(1496.2, 47.25, 3801.5)
    assert str(snapshot) == "1496.2 Mhz / 47.25 C / 3801.5 MiB"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1800.0, "1800"),
        (3.0, "3"),
        (0.0, "0"),
        (45.5, "45.5"),
        (0.1 + 0.2, "0.30000000000000004"),
        (1e-05, "0.00001"),
        (1e16, "10000000000000000"),
        (7, "7"),
        (float("inf"), "inf"),
        (float("-inf"), "-inf"),
        (float("nan"), "NaN"),
    ],
)
def test_format_number(value, expected):
    """Test natural decimal rendering."""
    assert format_number(value) == expected
