"""The storefrontpy library."""
import logging

from storefrontpy.base import StorefrontPyService  # noqa: F401

logging.getLogger(__name__).addHandler(logging.NullHandler())
