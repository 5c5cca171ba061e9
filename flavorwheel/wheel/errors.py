"""Errors raised by the aggregation and layout engine.

All of them are local validation failures. The API layer turns the empty
cases into a "no data yet" response instead of a server error.
"""

from __future__ import annotations


class FlavorWheelError(Exception):
    """Base class for flavor wheel engine errors."""


class EmptyInputError(FlavorWheelError):
    """The aggregator received zero descriptor records."""

    def __init__(self, message: str = "No descriptor records to aggregate") -> None:
        super().__init__(message)


class EmptyWheelError(FlavorWheelError):
    """The layout engine received a wheel with no categories."""

    def __init__(self, message: str = "Flavor wheel has no categories to lay out") -> None:
        super().__init__(message)


class InvalidHierarchyError(FlavorWheelError):
    """A wheel node violates the count invariants of its parent."""


class InvalidScopeError(FlavorWheelError, ValueError):
    """A scope type was requested without the filter field it needs."""
