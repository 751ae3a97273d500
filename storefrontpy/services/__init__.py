# ruff: noqa: F401
"""Services."""

from storefrontpy.services.descriptor import DescriptorService
from storefrontpy.services.resources import AppResource, ResourcesService
