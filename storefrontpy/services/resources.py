"""Resources service."""

from collections import namedtuple
from logging import getLogger

from storefrontpy.extract import extract_applications, is_unauthorized
from storefrontpy.outcome import Failure, Outcome

LOGGER = getLogger(__name__)

AppResource = namedtuple("AppResource", ["name", "launch_reference"])


class ResourcesService:
    """The applications published to the user by the StoreFront."""

    def __init__(self, service):
        self._service = service

    @property
    def url(self):
        return self._service.store_endpoint("Resources/List")

    def list_applications(self):
        """Published applications by name.

        Fails with ``NOT_AUTHENTICATED`` before any request if the service
        has not authenticated, and with ``UNAUTHORIZED`` if the StoreFront
        rejects the session. An empty successful outcome means nothing is
        published.
        """
        if not self._service.authenticated:
            LOGGER.warning(Failure.NOT_AUTHENTICATED.value)
            return Outcome.failed(Failure.NOT_AUTHENTICATED, {})

        response = self._service.session.post(
            self.url,
            data="format=json&resourceDetails=Default",
            headers=self._service.get_api_headers(form=True),
        )
        if is_unauthorized(response.text):
            LOGGER.warning(Failure.UNAUTHORIZED.value)
            return Outcome.failed(Failure.UNAUTHORIZED, {})

        applications = {
            name: AppResource(name, launch_reference)
            for name, launch_reference in extract_applications(response.text).items()
        }
        LOGGER.debug("Found %d published applications", len(applications))
        return Outcome(applications)

    def find(self, app_name):
        """The published application called ``app_name``."""
        outcome = self.list_applications()
        if not outcome:
            return Outcome.failed(outcome.failure)

        application = outcome.value.get(app_name)
        if application is None:
            LOGGER.warning("%s: %s", Failure.APPLICATION_NOT_FOUND.value, app_name)
            return Outcome.failed(Failure.APPLICATION_NOT_FOUND)
        return Outcome(application)

    def __iter__(self):
        return iter(self.list_applications().value)

    def __getitem__(self, app_name):
        return self.find(app_name).raise_for_failure()
