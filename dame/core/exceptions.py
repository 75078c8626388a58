"""
Custom exceptions shared by all layers.

The engine itself signals expected rule outcomes (illegal move, nothing to undo) with plain return values.
These exceptions are raised where a layer has to refuse a request outright.
"""


class GameError(Exception):
    """Top-level exception: every custom exception of the application derives from this one."""


class BoardStateError(GameError):
    """A persisted board or position payload cannot be decoded."""


class GameStateError(GameError):
    """The command is not allowed in the current state of the game or match."""


class IllegalMoveError(GameError):
    """The requested move does not resolve to a legal move."""


class NotYourTurnError(GameError):
    """A player tried to act while waiting for the opponent."""


class RepositoryError(GameError):
    """Record could not be found / stored."""


class InvalidRequestError(GameError):
    """Request data failed validation."""
