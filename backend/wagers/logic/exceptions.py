"""Typed domain exceptions for wager rule violations.

All domain-level failures use subclasses of WagerError rather than raw
ValueError. Each carries an error code and an HTTP-style status so the
caller can convert it into a response without inspecting the message.
Incomplete scores are never an error: scorers model them as missing
outcomes.
"""

from wagers.logic.enums import WagerErrorCode


class WagerError(Exception):
    """Base exception for rejected wager requests.

    Raised by the engine when a request cannot be honored. Never fatal to
    the process; the failure is scoped to the single request.
    """

    code: WagerErrorCode = WagerErrorCode.VALIDATION_ERROR
    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidGameConfigError(WagerError):
    """Wrong player count, bet amount out of bounds, or bad side data."""


class UnknownGameTypeError(WagerError):
    """Game type tag is not one of the supported games."""

    code = WagerErrorCode.UNKNOWN_GAME_TYPE


class DuplicateGameTypeError(WagerError):
    """A round carries two games of the same type."""

    code = WagerErrorCode.DUPLICATE_GAME_TYPE


class InvalidPressError(WagerError):
    """Press request violates press rules (segment, start hole, parent, duplicate)."""

    code = WagerErrorCode.INVALID_PRESS


class PressNotActiveError(InvalidPressError):
    """Press has already reached a terminal state."""


class PressPermissionError(WagerError):
    """Requester may not change this press."""

    code = WagerErrorCode.FORBIDDEN
    status_code = 403


class RoundNotFoundError(WagerError):
    """Round does not exist in storage."""

    code = WagerErrorCode.NOT_FOUND
    status_code = 404


class RoundAlreadyFinalizedError(WagerError):
    """Round is already completed; a second finalization is refused."""

    code = WagerErrorCode.CONFLICT
    status_code = 409


class SettlementsAlreadyExistError(RoundAlreadyFinalizedError):
    """Settlement records already exist for the round."""


class SettlementLimitError(WagerError):
    """A settlement or the round total exceeds the configured maximum."""


class InvalidSettlementError(WagerError):
    """Settlement arithmetic produced an impossible value (negative amount)."""

    code = WagerErrorCode.INVALID_SETTLEMENT
    status_code = 500


class FinalizationFailedError(WagerError):
    """Storage rejected the finalization; the round is left as it was."""

    code = WagerErrorCode.FINALIZATION_FAILED
    status_code = 500
