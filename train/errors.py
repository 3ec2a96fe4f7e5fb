"""Domain-specific errors for the training engine.

This module defines error classes for each stage (plan generation,
movement catalog access, workout reconciliation, persistence),
enabling precise error handling and debugging.
"""


class TrainError(Exception):
    """Base exception for all training engine errors."""

    pass


class IncompletePreferencesError(TrainError):
    """Raised when plan generation is requested with incomplete preferences."""

    pass


class InvalidPlanInputError(TrainError):
    """Raised when plan input is out of range (e.g., zero days per week)."""

    pass


class MovementNotFoundError(TrainError):
    """Raised when a strict movement lookup finds no catalog entry."""

    pass


class MovementLibraryError(TrainError):
    """Raised when the movement catalog file is missing or malformed."""

    pass


class ReconciliationError(TrainError):
    """Raised when duplicate reconciliation input is invalid (e.g., negative tolerance)."""

    pass


class PlanNotFoundError(TrainError):
    """Raised when a stored plan cannot be found."""

    pass
