"""Operation outcomes.

Every step of the login flow and every catalog call returns an
:class:`Outcome` instead of raising on protocol mismatches. A failed
outcome carries a :class:`Failure` naming what went wrong and an empty
value, so that "no applications published" and "the list could not be
read" can be told apart.
"""

from enum import Enum

from storefrontpy.exceptions import StorefrontPyAPIResponseException


class Failure(Enum):
    """Named reasons for a failed outcome."""

    LOGIN_FAILED = "Gateway login failed, no gateway session cookie"
    NOT_LOGGED_IN = "Not logged in to the gateway"
    CSRF_TOKEN_MISSING = "No CSRF token returned by the configuration endpoint"
    AUTH_CHALLENGE_MISSING = "Resource list did not answer with an unauthorized challenge"
    AUTH_METHOD_UNAVAILABLE = "Requested authentication method is not offered"
    AUTHENTICATION_FAILED = "StoreFront login failed, no catalog session cookie"
    NOT_AUTHENTICATED = "Not authenticated with the StoreFront"
    UNAUTHORIZED = "StoreFront answered unauthorized"
    APPLICATION_NOT_FOUND = "Application is not published"


class Outcome:
    """Result of an operation: a value or a named failure."""

    def __init__(self, value=None, failure=None):
        self.value = value
        self.failure = failure

    @classmethod
    def failed(cls, failure, empty=None):
        """Failed outcome holding ``empty`` as its value."""
        return cls(empty, failure)

    @property
    def ok(self):
        return self.failure is None

    def __bool__(self):
        return self.ok

    def raise_for_failure(self):
        """Raise ``StorefrontPyAPIResponseException`` if the outcome failed."""
        if self.failure is not None:
            raise StorefrontPyAPIResponseException(self.failure.value, self.failure.name)
        return self.value

    def __repr__(self):
        if self.ok:
            return f"<Outcome ok: {self.value!r}>"
        return f"<Outcome failed: {self.failure.name}>"
