class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when an identity token cannot be verified."""


class NoUserError(DomainError):
    """Raised when a shift operation is invoked without an authenticated user."""


class ShiftSequenceError(DomainError):
    """Start/end called out of order. Local, no store call involved."""


class AlreadyStartedError(ShiftSequenceError):
    pass


class NotStartedError(ShiftSequenceError):
    pass


class StoreError(DomainError):
    """Remote record store failure."""


class StoreWriteError(StoreError):
    pass


class StoreNotFoundError(StoreError):
    pass


class StoreReadError(StoreError):
    pass


class ShiftTransitionError(DomainError):
    """A start/end write was rejected by the store.

    The store error is kept untouched in ``cause`` (and ``__cause__``).
    """

    def __init__(self, cause: StoreError):
        super().__init__(str(cause))
        self.cause = cause


class StartFailedError(ShiftTransitionError):
    pass


class EndFailedError(ShiftTransitionError):
    pass
