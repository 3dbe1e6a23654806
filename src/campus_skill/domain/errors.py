"""Domain errors for the campus marketplace."""


class BackendError(Exception):
    """Raised when a request to the hosted backend fails.

    ``message`` carries the provider's own error text so it can be shown to
    the visitor unchanged.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
