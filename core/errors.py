"""Exceptions raised by the estimation and simulation engines."""


class InvalidConfigurationError(ValueError):
    """Simulation parameters that cannot produce a meaningful result."""


class BatchAbortedError(RuntimeError):
    """A batch was stopped before any shoe completed."""
