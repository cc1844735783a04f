"""Domain errors raised by the session and player services."""


class BankrollError(Exception):
    """Base class for bankroll tracker errors."""


class ValidationError(BankrollError):
    """Input failed validation."""


class InvalidDateRangeError(ValidationError):
    """A date range preset or bound could not be parsed."""


class SessionNotFoundError(BankrollError):
    """The requested session does not exist."""


class PlayerNotFoundError(BankrollError):
    """The requested player does not exist."""


class TransactionNotFoundError(BankrollError):
    """The player has no transaction row in the session."""


class SessionCompletedError(BankrollError):
    """The session is completed and can no longer be modified."""


class UnbalancedSessionError(BankrollError):
    """Total buy-ins do not equal total cash-outs."""


class DuplicatePlayerError(BankrollError):
    """A player with the same name already exists."""
