"""Library tests."""

from requests import Response
from requests.structures import CaseInsensitiveDict

from storefrontpy import base

from .const import (
    GATEWAY_DOMAIN,
    VALID_CSRF_TOKEN,
    VALID_GATEWAY_SESSION,
    VALID_PASSWORD,
    VALID_STORE_SESSION,
    VALID_USERNAME,
)
from .const_auth import (
    AUTH_METHODS,
    AUTHENTICATE_HEADER,
    CONFIGURATION,
    LOGIN_PAGE,
    STORE_PAGE,
    UNAUTHORIZED,
)
from .const_resources import ICA_FILE, RESOURCES_TWO


class ResponseMock(Response):
    """Mocked Response."""

    def __init__(self, result, status_code=200, **kwargs):
        """Init the object."""
        Response.__init__(self)
        self.result = result
        self.status_code = status_code
        self.headers = CaseInsensitiveDict(kwargs.get("headers", {}))

    @property
    def text(self):
        """Text result."""
        return self.result


class StorefrontPySessionMock(base.StorefrontPySession):
    """Mocked StorefrontPySession.

    Answers like a gateway with a StoreFront behind it. The attributes set
    in ``__init__`` change what the mocked servers answer.
    """

    def __init__(self, *args, **kwargs):
        """Init the object."""
        base.StorefrontPySession.__init__(self, *args, **kwargs)
        self.calls = []
        self.csrf_token = VALID_CSRF_TOKEN
        self.challenge = UNAUTHORIZED
        self.authenticate_header = AUTHENTICATE_HEADER
        self.auth_methods_url = "Authentication/GetAuthMethods"
        self.auth_methods = AUTH_METHODS
        self.store_session = VALID_STORE_SESSION
        self.resources = RESOURCES_TWO

    def _set_cookie(self, name, value):
        self.cookies.add(name, value, GATEWAY_DOMAIN)

    def _has_valid_csrf(self, headers):
        return bool(self.csrf_token) and headers.get(base.CSRF_TOKEN_HEADER) == self.csrf_token

    def request(self, method, url, **kwargs):
        """Mock request."""
        self.calls.append((method, url, kwargs))
        headers = kwargs.get("headers") or {}
        data = kwargs.get("data")

        # Gateway
        if url.endswith("/cgi/login") and method == "POST":
            if data == {"login": VALID_USERNAME, "passwd": VALID_PASSWORD}:
                self._set_cookie(base.GATEWAY_SESSION_COOKIE, VALID_GATEWAY_SESSION)
            return ResponseMock(LOGIN_PAGE)

        if "/cgi/setClient?wica" in url and method == "GET":
            return ResponseMock("")

        if self.get_cookie(base.GATEWAY_SESSION_COOKIE) is None:
            return ResponseMock("", status_code=302, headers={"Location": "/vpn/index.html"})

        # StoreFront
        if url.endswith("/Citrix/StoreWeb/") and method == "GET":
            return ResponseMock(STORE_PAGE)

        if url.endswith("Home/Configuration") and method == "POST":
            if self.csrf_token:
                self._set_cookie(base.CSRF_TOKEN_COOKIE, self.csrf_token)
            return ResponseMock(CONFIGURATION)

        if url.endswith("Resources/List") and method == "POST":
            if self.get_cookie(base.STORE_SESSION_COOKIE) and self._has_valid_csrf(headers):
                return ResponseMock(self.resources)
            return ResponseMock(
                self.challenge,
                headers={base.AUTHENTICATE_HEADER: self.authenticate_header},
            )

        if url.endswith(self.auth_methods_url) and method == "POST":
            return ResponseMock(self.auth_methods)

        if url.endswith("GatewayAuth/Login") and method == "POST":
            if self.store_session and self._has_valid_csrf(headers):
                self._set_cookie(base.STORE_SESSION_COOKIE, self.store_session)
            return ResponseMock("")

        if "Resources/LaunchIca/" in url and method == "POST":
            if self.get_cookie(base.STORE_SESSION_COOKIE) and self._has_valid_csrf(headers):
                return ResponseMock(ICA_FILE)
            return ResponseMock(UNAUTHORIZED)

        return ResponseMock("", status_code=404)

    def urls(self):
        """Requested URLs, in order."""
        return [url for _, url, _ in self.calls]


class StorefrontPyServiceMock(base.StorefrontPyService):
    """Mocked StorefrontPyService."""

    session_class = StorefrontPySessionMock
