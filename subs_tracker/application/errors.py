"""
Subscription error taxonomy shared by use cases, repository and HTTP layer.
"""


class SubscriptionError(Exception):
    pass


class InvalidPeriodError(SubscriptionError, ValueError):
    pass


class InvalidPaginationError(SubscriptionError, ValueError):
    pass


class InvalidSubscriptionError(SubscriptionError, ValueError):
    pass


class InvalidIDError(SubscriptionError, ValueError):
    pass


class SubscriptionNotFoundError(SubscriptionError, LookupError):
    pass


class StorageError(SubscriptionError):
    """Opaque failure of the record store; the original exception is chained."""
    pass
