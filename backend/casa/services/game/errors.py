class GameError(Exception):
    """Base class for rule violations reported to the client as HTTP 400."""

    message = 'Invalid request'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


# Timer
class InvalidDuration(GameError):
    message = 'Invalid duration'


class TimerAlreadyRunning(GameError):
    message = 'A timer is already running'


class NoActiveTimer(GameError):
    message = 'No active timer'


class TimerCancelled(GameError):
    message = 'Timer was cancelled'


class TimerNotFinished(GameError):
    message = 'Timer has not finished yet'


# Purchases
class MissingSlot(GameError):
    message = 'Slot is required'


class MissingItem(GameError):
    message = 'Item is required'


class InvalidSlot(GameError):
    message = 'Invalid slot'


class InvalidItem(GameError):
    message = 'Invalid item'


class SlotMismatch(GameError):
    message = 'Item does not belong to that slot'


class InsufficientPoints(GameError):
    message = 'Not enough points'


# Theme
class InvalidTheme(GameError):
    message = 'Invalid theme'
