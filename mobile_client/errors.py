class TaskClientError(Exception):
    """Base error for everything the client surfaces to the user."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ApiError(TaskClientError):
    """
    A task API call failed.

    `status_code` is None when no response arrived at all (network failure).
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class LoadError(TaskClientError):
    pass


class IdentityError(TaskClientError):
    """The identity provider refused a sign-in, sign-up or token refresh."""


class AuthFormError(TaskClientError):
    pass


class FormError(TaskClientError):
    pass


class InvalidTransition(TaskClientError):
    pass
