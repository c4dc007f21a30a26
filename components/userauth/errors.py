class UserAuthError(Exception):
    """Base error for the userauth component."""


class EmailAlreadyExistsError(UserAuthError):
    """Raised by a user store when the email is already registered."""


class InvalidTokenError(UserAuthError):
    """Token is malformed, has a bad signature, or has expired."""
