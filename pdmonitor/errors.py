"""
Error taxonomy for the trend analytics core.
"""


class PDMonitorError(Exception):
    """Base class for every error raised by pdmonitor."""


class InsufficientDataError(PDMonitorError, ValueError):
    """Series is empty or malformed, so moving averages cannot be computed."""


class UnknownSeverityError(PDMonitorError, KeyError):
    """Value outside the enumerated severity set (integration error)."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown severity level: {value!r}")

    def __str__(self):
        # KeyError quotes its argument, keep the plain message instead
        return self.args[0]


class InvalidProjectScope(PDMonitorError, LookupError):
    """
    Project scope references an id that is not in the supplied projects.

    The population filter never raises this, it degrades to an empty result.
    Hosts that want to reject a scope up front can call
    `pdmonitor.engines.population.validate_project_scope`.
    """

    def __init__(self, scope):
        self.scope = scope
        super().__init__(f"Project scope {scope!r} is not a known project")
