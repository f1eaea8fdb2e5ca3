"""
Error taxonomy of the scoring core.

Everything here is recoverable at the call site. Storage errors are not
wrapped: SQLAlchemy exceptions reach the caller unchanged.
"""
from dataclasses import dataclass


class PitwallError(Exception):
    """Base class for rejections raised by the services."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class InvalidBetSubmission(PitwallError):
    pass


class InvalidConfiguration(PitwallError):
    pass


class InvalidResult(PitwallError):
    pass


class UnresolvedDriver(PitwallError):
    def __init__(self, names: list[str]):
        super().__init__(f"Unresolved drivers: {', '.join(names)}")
        self.names = names


class NotFound(PitwallError, LookupError):
    pass


class UnknownSession(NotFound):
    pass


@dataclass(frozen=True)
class ParseFailure:
    """Returned (not raised) when a pasted table yields nothing usable."""
    reason: str
