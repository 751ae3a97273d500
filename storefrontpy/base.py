"""Library base file."""

import logging
from collections import namedtuple
from enum import Enum
from logging import getLogger
from urllib.parse import urlparse

from requests import Session

from storefrontpy.cookies import StorefrontPyCookieJar
from storefrontpy.extract import extract_auth_location, extract_auth_methods, is_unauthorized
from storefrontpy.outcome import Failure, Outcome
from storefrontpy.services import DescriptorService, ResourcesService
from storefrontpy.state import SessionState

LOGGER = getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 6.1; WOW64) AppleWebKit/535.2 (KHTML, like Gecko) "
    "Chrome/15.0.874.121 Safari/535.2"
)

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
XML_ACCEPT = "application/xml, text/xml, */*; q=0.01"
JSON_ACCEPT = "application/json, text/javascript, */*; q=0.01"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

GATEWAY_SESSION_COOKIE = "NSC_AAAC"
CSRF_TOKEN_COOKIE = "CsrfToken"
STORE_SESSION_COOKIE = "CtxsAuthId"
DEVICE_ID_COOKIE = "CtxsDeviceId"
AUTHENTICATE_HEADER = "CitrixWebReceiver-Authenticate"
CSRF_TOKEN_HEADER = "Csrf-Token"

# Set by the gateway's login page scripts in a browser
CLIENT_DETECTION_COOKIES = (
    ("CtxsClientDetectionDone", "true"),
    ("CtxsDesktopAutoLaunchDone", "no"),
    ("CtxsHasUpgradeBeenShown", "true"),
    ("CtxsPasswordChangeAllowed", "true"),
    ("CtxsUserPreferredClient", "Native"),
    ("isGatewaySession", ""),
)

STORE_PATH = "/Citrix/StoreWeb/"
DEFAULT_AUTH_METHODS_URL = "Authentication/GetAuthMethods"
DEFAULT_AUTH_METHOD = "CitrixAGBasic"

# Every module logger, a filter on a parent logger does not see child records
LOGGER_NAMES = (
    "storefrontpy",
    "storefrontpy.base",
    "storefrontpy.certificate",
    "storefrontpy.cmdline",
    "storefrontpy.cookies",
    "storefrontpy.launcher",
    "storefrontpy.state",
    "storefrontpy.services.descriptor",
    "storefrontpy.services.resources",
)

AuthMethod = namedtuple("AuthMethod", ["name", "url"])


class FlowState(Enum):
    """Progress of the login flow."""

    UNAUTHENTICATED = "unauthenticated"
    GATEWAY_LOGGED_IN = "gateway_logged_in"
    CATALOG_AUTHENTICATED = "catalog_authenticated"


class StorefrontPyPasswordFilter(logging.Filter):
    """Password log hider."""

    def __init__(self, password):
        super().__init__(password)

    def filter(self, record):
        message = record.getMessage()
        if self.name and self.name in message:
            record.msg = message.replace(self.name, "*" * 8)
            record.args = []

        return True

    def mask(self, data):
        """Copy of request data with the password replaced."""
        if not self.name:
            return data
        if isinstance(data, dict):
            return {key: "*" * 8 if value == self.name else value for key, value in data.items()}
        if isinstance(data, str):
            return data.replace(self.name, "*" * 8)
        return data

    def install(self):
        """Hide the password from every logger of the library."""
        for name in LOGGER_NAMES:
            logger = getLogger(name)
            if self not in logger.filters:
                logger.addFilter(self)


class StorefrontPySession(Session):
    """Cookie keeping session that looks like an old desktop browser.

    Redirects are never followed: the gateway signals through cookies and
    headers, and following its redirects loses cookies.
    """

    def __init__(self, password_filter=None, cert=None, verify=True, timeout=None):
        super().__init__()
        self.password_filter = password_filter
        self.cookies = StorefrontPyCookieJar()
        self.headers["User-Agent"] = USER_AGENT
        self.cert = cert
        self.verify = verify
        self.timeout = timeout

    def request(self, method, url, **kwargs):  # pylint: disable=arguments-differ
        data = kwargs.get("data", "")
        if self.password_filter:
            self.password_filter.install()
            data = self.password_filter.mask(data)

        LOGGER.debug("%s %s %s", method, url, data)
        kwargs["allow_redirects"] = False
        if self.timeout is not None:
            kwargs.setdefault("timeout", self.timeout)

        response = super().request(method, url, **kwargs)

        LOGGER.debug("%s %s -> %s", method, url, response.status_code)
        return response

    def get_cookie(self, name, domain=None):
        """Value of the most recently set cookie called ``name``, or None."""
        return self.cookies.get_value(name, domain)

    def get_all_cookies(self):
        return self.cookies.snapshot()

    def add_cookie(self, name, value, domain, path="/"):
        self.cookies.add(name, value, domain, path)

    @staticmethod
    def get_response_header(response, header):
        """Value of a response header, "" if the response has none."""
        return response.headers.get(header, "")


class StorefrontPyService:
    """
    A StoreFront behind a NetScaler Gateway.

    Usage:
        from storefrontpy import StorefrontPyService
        storefront = StorefrontPyService('https://gateway.example.com', 'jdoe', 'secret')
        storefront.connect()
        storefront.resources.list_applications()
    """

    session_class = StorefrontPySession

    def __init__(
        self,
        gateway_url,
        username,
        password,
        cert=None,
        verify=True,
        auth_method=DEFAULT_AUTH_METHOD,
        timeout=None,
    ):
        self.gateway_url = gateway_url.rstrip("/")
        self.username = username
        self.password = password
        self.auth_method = auth_method
        self.domain = urlparse(self.gateway_url).hostname

        self.password_filter = StorefrontPyPasswordFilter(password)
        self.password_filter.install()

        self._state = SessionState()
        self.session = self.session_class(self.password_filter, cert, verify, timeout)

        self._resources = None
        self._descriptor = None

    @property
    def store_url(self):
        return self.gateway_url + STORE_PATH

    def store_endpoint(self, path):
        """StoreFront URL of a path or server supplied reference, taken verbatim."""
        return self.store_url + path.lstrip("/")

    @property
    def device_id(self):
        return self._state.device_id

    @property
    def csrf_token(self):
        return self._state.csrf_token

    @property
    def logged_in(self):
        return self._state.logged_in

    @property
    def authenticated(self):
        return self._state.authenticated

    @property
    def state(self):
        if self._state.authenticated:
            return FlowState.CATALOG_AUTHENTICATED
        if self._state.logged_in:
            return FlowState.GATEWAY_LOGGED_IN
        return FlowState.UNAUTHENTICATED

    def connect(self):
        """Log in to the gateway, then authenticate with the StoreFront."""
        outcome = self.login()
        if not outcome:
            return outcome
        return self.authenticate()

    def login(self):
        """Log in to the gateway website.

        Posts the credentials, registers the receiver client and loads the
        StoreFront web page, which is what a browser does before the
        StoreFront API accepts requests.
        """
        if self._state.logged_in:
            return Outcome(True)

        LOGGER.debug("Logging in to %s as %s", self.gateway_url, self.username)
        self.session.post(
            f"{self.gateway_url}/cgi/login",
            data={"login": self.username, "passwd": self.password},
            headers={"Content-Type": FORM_CONTENT_TYPE},
        )
        self._set_client()
        self._load_store()

        if self.session.get_cookie(GATEWAY_SESSION_COOKIE) is None:
            return self._failed(Failure.LOGIN_FAILED)

        self._state.mark_logged_in()
        LOGGER.info("Logged in to gateway %s", self.gateway_url)
        return Outcome(True)

    def authenticate(self):
        """Authenticate StoreFront API requests.

        Needs a gateway login. Fetches the CSRF token, discovers the
        authentication methods and logs in with ``auth_method``.
        """
        if self._state.authenticated:
            return Outcome(True)
        if not self._state.logged_in:
            return self._failed(Failure.NOT_LOGGED_IN)

        outcome = self._load_configuration()
        if not outcome:
            return outcome

        outcome = self._get_auth_methods_url()
        if not outcome:
            return outcome

        methods = self._get_auth_methods(outcome.value).value
        method = methods.get(self.auth_method)
        if method is None:
            LOGGER.debug("Offered authentication methods: %s", ", ".join(methods) or "none")
            return self._failed(Failure.AUTH_METHOD_UNAVAILABLE)

        self._login_to_store(method.url)
        if self.session.get_cookie(STORE_SESSION_COOKIE) is None:
            return self._failed(Failure.AUTHENTICATION_FAILED)

        self._state.mark_authenticated()
        LOGGER.info("Authenticated with StoreFront %s", self.store_url)
        return Outcome(True)

    def _set_client(self):
        # Returns nothing useful, but the gateway expects it after login
        self.session.get(
            f"{self.gateway_url}/cgi/setClient?wica",
            headers=self._get_headers(HTML_ACCEPT, f"{self.gateway_url}/vpn/index.html"),
        )

    def _load_store(self):
        for name, value in CLIENT_DETECTION_COOKIES:
            self.session.add_cookie(name, value, self.domain)
        self.session.add_cookie(DEVICE_ID_COOKIE, self._state.device_id, self.domain)

        self.session.get(
            self.store_url,
            headers=self._get_headers(HTML_ACCEPT, f"{self.gateway_url}/cgi/setClient?wica"),
        )

    def _load_configuration(self):
        self.session.post(
            self.store_endpoint("Home/Configuration"),
            data="",
            headers=self._get_headers(XML_ACCEPT, self.store_url, api=True),
        )
        self._state.store_csrf_token(self.session.get_cookie(CSRF_TOKEN_COOKIE))
        if not self._state.csrf_token:
            return self._failed(Failure.CSRF_TOKEN_MISSING)
        return Outcome(self._state.csrf_token)

    def _get_auth_methods_url(self):
        # The resource list needs authentication, so its challenge tells
        # where the authentication methods are listed.
        response = self.session.post(
            self.store_endpoint("Resources/List"),
            data="format=json",
            headers=self._get_headers(JSON_ACCEPT, self.store_url, api=True, form=True),
        )
        if not is_unauthorized(response.text):
            return self._failed(Failure.AUTH_CHALLENGE_MISSING, "")

        header = self.session.get_response_header(response, AUTHENTICATE_HEADER)
        url = extract_auth_location(header)
        if not url:
            LOGGER.debug("No authentication location in challenge, using %s", DEFAULT_AUTH_METHODS_URL)
            url = DEFAULT_AUTH_METHODS_URL
        return Outcome(url)

    def _get_auth_methods(self, auth_methods_url=DEFAULT_AUTH_METHODS_URL):
        response = self.session.post(
            self.store_endpoint(auth_methods_url),
            data="",
            headers=self._get_headers(XML_ACCEPT, self.store_url, api=True),
        )
        methods = {
            name: AuthMethod(name, url) for name, url in extract_auth_methods(response.text).items()
        }
        return Outcome(methods)

    def _login_to_store(self, auth_url):
        return self.session.post(
            self.store_endpoint(auth_url),
            data="",
            headers=self._get_headers(JSON_ACCEPT, self.store_url, api=True),
        )

    def _get_headers(self, accept, referer, api=False, form=False, overrides=None):
        """Request headers a browser sends for a call of this kind."""
        headers = {
            "Accept": accept,
            "Referer": referer,
        }
        if form:
            headers["Content-Type"] = FORM_CONTENT_TYPE
        headers["Upgrade-Insecure-Requests"] = "1"
        if api:
            headers["X-Citrix-IsUsingHTTPS"] = "Yes"
            headers["X-Requested-With"] = "XMLHttpRequest"
            if self._state.csrf_token:
                headers[CSRF_TOKEN_HEADER] = self._state.csrf_token
        if overrides:
            headers.update(overrides)
        return headers

    def get_api_headers(self, form=False, overrides=None):
        """Headers for a StoreFront API call answering JSON."""
        return self._get_headers(JSON_ACCEPT, self.store_url, api=True, form=form, overrides=overrides)

    @staticmethod
    def _failed(failure, empty=None):
        LOGGER.warning(failure.value)
        return Outcome.failed(failure, empty)

    @property
    def resources(self):
        """Gets the 'Resources' service."""
        if not self._resources:
            self._resources = ResourcesService(self)
        return self._resources

    @property
    def descriptor(self):
        """Gets the 'Descriptor' service."""
        if not self._descriptor:
            self._descriptor = DescriptorService(self)
        return self._descriptor

    def __unicode__(self):
        return f"StoreFront API: {self.username}@{self.domain}"

    def __str__(self):
        return self.__unicode__()

    def __repr__(self):
        return f"<{self}>"
