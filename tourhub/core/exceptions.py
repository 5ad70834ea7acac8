# tourhub/core/exceptions.py


class TourhubError(Exception):
    """Base class for errors raised by tourhub."""


class InvalidReportPeriod(TourhubError, ValueError):
    """A report period selector could not be understood."""

    def __init__(self, value, reason: str = "invalid period"):
        self.value = value
        self.reason = reason
        super().__init__(f"{reason}: {value!r}")
