"""Exception types raised by safelog.

Malformed input is never an error: serializers hand it back untouched.
These exceptions cover the conditions that cannot be serialized safely
(cycles, runaway nesting, runaway cause chains) and bad configuration.
"""

from __future__ import annotations


class SafeLogError(Exception):
    """Base class for all safelog errors."""


class CyclicReferenceError(SafeLogError):
    """An object graph or exception chain refers back to itself."""

    def __init__(self, where: str) -> None:
        super().__init__(f"Cyclic reference detected while traversing {where}.")
        self.where = where


class MaxDepthExceededError(SafeLogError):
    """An object graph is nested deeper than the configured limit."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Object graph exceeds maximum depth of {max_depth}.")
        self.max_depth = max_depth


class CauseChainTooLongError(SafeLogError):
    """An exception cause chain is longer than the configured limit."""

    def __init__(self, max_causes: int) -> None:
        super().__init__(f"Exception cause chain exceeds {max_causes} links.")
        self.max_causes = max_causes


class ConfigError(SafeLogError):
    """Configuration file or values are invalid."""


__all__ = [
    "SafeLogError",
    "CyclicReferenceError",
    "MaxDepthExceededError",
    "CauseChainTooLongError",
    "ConfigError",
]
