from __future__ import annotations


class CovidTrendError(ValueError):
    """Base class for validation failures on series input or window parameters."""


class EmptyInputError(CovidTrendError):
    def __init__(self, what: str = "observations"):
        super().__init__(f"no {what} supplied; cannot derive a date range")


class InvalidWindowError(CovidTrendError):
    def __init__(self, width):
        self.width = width
        super().__init__(f"window width must be a positive integer, got {width!r}")


class NonContiguousSeriesError(CovidTrendError):
    """Raised when a raw observation sequence has gaps, duplicates or is unsorted."""


class IncompleteWindowMarker:
    """Stands in for a statistic whose window lacks enough history.

    Falsy, compares equal only to itself, and is a process-wide singleton so
    ``value is INCOMPLETE`` is the canonical check.
    """

    _instance: "IncompleteWindowMarker | None" = None

    def __new__(cls) -> "IncompleteWindowMarker":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "INCOMPLETE"

    def __reduce__(self):
        return (IncompleteWindowMarker, ())


INCOMPLETE = IncompleteWindowMarker()
