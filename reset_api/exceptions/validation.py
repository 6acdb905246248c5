"""Password reset token validation exceptions."""

from reset_api.exceptions.base import AppException


class TokenValidationError(AppException):
    """Base class for reset token validation failures."""

    pass


class MissingParameterError(TokenValidationError):
    """The token or the email was not supplied."""

    def __init__(self, message: str = "缺少必要参数"):
        """
        Initialize the MissingParameterError.

        Parameters:
            message (str): Client-facing message; defaults to "缺少必要参数" (missing required parameters).
        """
        super().__init__(message)


class TokenInvalidOrExpiredError(TokenValidationError):
    """No live record matches the token and email.

    Raised alike for unknown tokens, expired tokens and failed lookups.
    """

    def __init__(self, message: str = "重置令牌无效或已过期"):
        super().__init__(message)


class MalformedRequestError(AppException):
    """The request payload could not be parsed."""

    def __init__(self, details: str, message: str = "验证令牌失败"):
        """
        Initialize the MalformedRequestError with the underlying parse failure.

        Parameters:
            details (str): Message of the underlying error, returned to the client as `details`.
            message (str): Client-facing summary; defaults to "验证令牌失败" (token validation failed).
        """
        self.details = details
        super().__init__(message)
