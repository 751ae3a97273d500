"""Cookie store of the transport."""

from requests.cookies import RequestsCookieJar, create_cookie


class StorefrontPyCookieJar(RequestsCookieJar):
    """Cookie jar that remembers which cookie of a name was set last.

    Cookies are stored per (domain, path, name) like any cookie jar, but
    lookups by name alone return the most recently set cookie of that name,
    whatever its domain. The gateway and the StoreFront share one host, so
    flattening by name is safe there. Pass ``domain`` to a lookup when more
    than one host is involved.
    """

    def __init__(self, policy=None):
        super().__init__(policy)
        self._latest = {}

    def set_cookie(self, cookie, *args, **kwargs):
        result = super().set_cookie(cookie, *args, **kwargs)
        # re-insert so that iteration order follows recency
        self._latest.pop(cookie.name, None)
        self._latest[cookie.name] = cookie
        return result

    def clear(self, domain=None, path=None, name=None):
        super().clear(domain, path, name)
        stored = {id(cookie) for cookie in iter(self)}
        self._latest = {key: cookie for key, cookie in self._latest.items() if id(cookie) in stored}

    def add(self, name, value, domain, path="/"):
        """Add a cookie by hand, as a browser script would."""
        self.set_cookie(create_cookie(name, value, domain=domain, path=path))

    def latest(self, name, domain=None):
        """Most recently set cookie called ``name``, or None."""
        if domain is None:
            return self._latest.get(name)
        found = None
        for cookie in iter(self):
            if cookie.name == name and cookie.domain.lstrip(".") == domain.lstrip("."):
                found = cookie
        return found

    def get_value(self, name, domain=None):
        cookie = self.latest(name, domain)
        return cookie.value if cookie is not None else None

    def snapshot(self):
        """Name to value mapping, the last set value winning."""
        return {name: cookie.value for name, cookie in self._latest.items()}

    def copy(self):
        new_jar = StorefrontPyCookieJar(self._policy)
        for cookie in iter(self):
            new_jar.set_cookie(cookie)
        # keep the recency order of this jar
        new_jar._latest = dict(self._latest)
        return new_jar
