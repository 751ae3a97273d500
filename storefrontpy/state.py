"""Per-flow session state."""

import uuid
from logging import getLogger

LOGGER = getLogger(__name__)


def generate_device_id():
    """Random StoreFront device id: ``WR_`` followed by 17 characters."""
    return "WR_" + uuid.uuid4().hex[:17]


class SessionState:
    """State threaded through one login flow.

    ``logged_in`` and ``authenticated`` only ever go from False to True,
    ``csrf_token`` is stored once and ``device_id`` never changes.
    """

    def __init__(self, device_id=None):
        self._device_id = device_id or generate_device_id()
        self._csrf_token = ""
        self._logged_in = False
        self._authenticated = False

    @property
    def device_id(self):
        return self._device_id

    @property
    def csrf_token(self):
        return self._csrf_token

    @property
    def logged_in(self):
        return self._logged_in

    @property
    def authenticated(self):
        return self._authenticated

    def store_csrf_token(self, token):
        """Keep the first non-empty token, ignore later ones."""
        if not token:
            return False
        if self._csrf_token:
            if token != self._csrf_token:
                LOGGER.debug("Ignoring new CSRF token, keeping the first one")
            return False
        self._csrf_token = token
        return True

    def mark_logged_in(self):
        self._logged_in = True

    def mark_authenticated(self):
        self._authenticated = True

    def __repr__(self):
        return (
            f"<SessionState device_id={self._device_id} logged_in={self._logged_in} "
            f"authenticated={self._authenticated}>"
        )
