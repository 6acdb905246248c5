"""Base exception for the application's domain errors."""


class AppException(Exception):
    """Root of every domain exception raised by the service layer."""

    def __init__(self, message: str = "An internal error occurred"):
        """
        Initialize the exception with a human-readable message.

        Parameters:
            message (str): Description of the failure; also available as `message`.
        """
        self.message = message
        super().__init__(message)
