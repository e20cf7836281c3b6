"""Exception hierarchy raised by the data layer."""


class Network20Error(Exception):
    """Base exception for data layer errors.

    Carries a human-readable message suitable for showing as UI error text
    and an error type for programmatic handling.
    """

    def __init__(self, message: str, error_type: str = "network20_error") -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            error_type: Error category for caller handling.
        """
        self.message = message
        self.error_type = error_type
        super().__init__(message)


class AuthenticationError(Network20Error):
    """A mutating remote operation was attempted without a signed-in user."""

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message=message, error_type="authentication_error")


class BackendNotConfiguredError(Network20Error):
    """A remote-only operation was invoked while running on local storage."""

    def __init__(self, message: str = "Remote backend is not configured") -> None:
        super().__init__(message=message, error_type="backend_not_configured")


class BackendError(Network20Error):
    """Transport or query failure reported by the remote backend."""

    def __init__(self, message: str = "Backend request failed") -> None:
        super().__init__(message=message, error_type="backend_error")


class ValidationError(Network20Error):
    """Input rejected by the backend (duplicate email, weak password, ...)."""

    def __init__(self, message: str = "Validation error") -> None:
        super().__init__(message=message, error_type="validation_error")
