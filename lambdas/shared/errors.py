"""Request-fatal errors raised by the admin functions.

Each error carries the HTTP status and the message returned to the caller.
Per-user sign-out failures are not errors at this level; they are collected
into the sweep report instead.
"""


class SignOutError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthenticated(SignOutError):
    """No bearer credential, or the credential failed verification."""
    status_code = 401


class Forbidden(SignOutError):
    """Valid credential, but the caller is not on the admin allow-list."""
    status_code = 403


class UpstreamError(SignOutError):
    """The identity provider could not be reached or refused the call."""
    status_code = 500
