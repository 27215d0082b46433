"""Exceptions raised by TimeFlo's host-side code.

The timer core never raises.  These cover settings and sound I/O, which
are caught and logged at the host boundary.
"""


class TimeFloError(Exception):
    """Base class for all TimeFlo errors."""


class SettingsError(TimeFloError):
    """The settings file could not be read or parsed."""


class AlertError(TimeFloError):
    """The completion alert sound could not be prepared."""
