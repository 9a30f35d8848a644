"""Exception types raised by the decision engine.

Collisions and missing paths are normal game outcomes and are never raised.
"""


class SnakeDecisionError(Exception):
    """Base class for all package errors."""


class InvalidConfigurationError(SnakeDecisionError, ValueError):
    """A board, snake, food or config value violates its contract."""


class BoardFullError(SnakeDecisionError):
    """No free cell is left to place food on."""
