class TibcalError(Exception):
    """Base error."""

class AlgorithmInvariantError(TibcalError):
    """Raised when the month table or the day reckoning contradicts itself.

    Indicates a coefficient or logic defect, never bad user input.
    """

class DateOutOfRangeError(TibcalError, ValueError):
    """Raised when a Gregorian date lies outside the supported rabjungs."""
