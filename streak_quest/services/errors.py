"""Game errors. Each one aborts the whole call; nothing is partially applied."""


class GameError(Exception):
    code = "game_error"
    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.code)


class InsufficientFee(GameError):
    code = "insufficient_fee"
    status_code = 402


class AlreadyJoined(GameError):
    code = "already_joined"
    status_code = 409


class NotActive(GameError):
    code = "not_active"
    status_code = 403


class NotFound(GameError):
    code = "not_found"
    status_code = 404


class TaskNotFound(NotFound):
    code = "task_not_found"


class TaskInactive(GameError):
    code = "task_inactive"
    status_code = 409


class DailyLimitReached(GameError):
    code = "daily_limit_reached"
    status_code = 429


class Unauthorized(GameError):
    code = "unauthorized"
    status_code = 403


class SettlementAlreadyDone(GameError):
    code = "settlement_already_done"
    status_code = 409


class SettlementError(GameError):
    """Treasury could not build a valid payout plan for a week."""

    code = "settlement_failed"
    status_code = 500
