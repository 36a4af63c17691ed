class NewsletterException(Exception):
    """Base class for errors raised by the newsletter service."""


class SubscriptionPersistenceError(NewsletterException):
    """A subscription could not be written to the store.

    The underlying driver error is kept as ``__cause__`` for server-side
    logging only; callers never see it.
    """

    def __init__(self, message: str = "Failed to save new subscriber"):
        super().__init__(message)
        self.message = message
