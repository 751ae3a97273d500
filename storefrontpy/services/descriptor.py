"""Descriptor service."""

from logging import getLogger

from storefrontpy.outcome import Failure, Outcome

LOGGER = getLogger(__name__)


class DescriptorService:
    """Fetches the ``.ica`` documents that start remote sessions.

    The content is returned as is; writing it to disk and starting the
    native client is left to :mod:`storefrontpy.launcher`.
    """

    def __init__(self, service):
        self._service = service

    def fetch(self, launch_reference):
        """Raw descriptor of a launch reference."""
        if not self._service.authenticated:
            LOGGER.warning(Failure.NOT_AUTHENTICATED.value)
            return Outcome.failed(Failure.NOT_AUTHENTICATED, "")

        response = self._service.session.post(
            self._service.store_endpoint(launch_reference),
            data="",
            headers=self._service.get_api_headers(),
        )
        return Outcome(response.text)

    def fetch_for_application(self, app_name):
        """Raw descriptor of a published application, looked up by name."""
        outcome = self._service.resources.find(app_name)
        if not outcome:
            return Outcome.failed(outcome.failure, "")
        return self.fetch(outcome.value.launch_reference)
