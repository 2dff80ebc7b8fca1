#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Custom exceptions for pmapper.
"""

from typing import Optional


class PmapperException(Exception):
    """Base exception for all pmapper errors."""
    pass


class ConfigurationError(PmapperException):
    """Raised when there's a configuration issue."""
    pass


class ValidationError(PmapperException):
    """Raised when a map call is rejected before any work is dispatched."""
    pass


class InsufficientItemsError(ValidationError):
    """Raised when the input sequence has fewer than two items."""

    def __init__(self, n_items: int):
        self.n_items = n_items
        super().__init__(
            f"parallel map needs more than one item, got {n_items}"
        )


class UnknownDataArgumentError(ValidationError):
    """Raised when the data argument is not a parameter of the function."""

    def __init__(self, data_arg: str, func_name: str, parameters: list):
        self.data_arg = data_arg
        self.func_name = func_name
        self.parameters = list(parameters)
        super().__init__(
            f"'{data_arg}' is not a parameter of {func_name}() "
            f"(parameters: {', '.join(self.parameters) or 'none'})"
        )


class ArgumentCountError(ValidationError):
    """Raised when the extra arguments don't fit the function's parameters."""
    pass


class MapExecutionError(PmapperException):
    """Raised when a dispatched map call fails."""

    def __init__(self, message: str, start_index: Optional[int] = None):
        self.start_index = start_index
        super().__init__(message)


class ArgumentMismatchError(MapExecutionError):
    """Raised when calling the function raises a TypeError."""
    pass


class WorkerFailedError(MapExecutionError):
    """Raised when the function raises anything other than a TypeError."""
    pass


class TargetImportError(PmapperException):
    """Raised when a MODULE:FUNCTION target can't be resolved."""
    pass
