"""Exceptions raised by pistats."""


class PistatsError(Exception):
    """Base class for pistats errors."""


class SensorReadError(PistatsError):
    """A single temperature sensor could not be read."""


class HardwareQueryError(PistatsError):
    """
    A required hardware query failed.

    Attributes:
        metric: Name of the metric that failed ("frequency" or "memory").
        cause: The underlying exception.
    """

    def __init__(self, metric: str, cause: BaseException) -> None:
        super().__init__(f"{metric} query failed: {cause}")
        self.metric = metric
        self.cause = cause
