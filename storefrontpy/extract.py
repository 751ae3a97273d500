"""Pattern extraction from StoreFront responses.

The bodies are JSON or XML, but only a handful of fields are needed, so
they are picked out with regular expressions instead of a document
parser. The patterns are tolerant of whatever surrounds the fields and
intolerant of changes to the fields themselves.
"""

import re

UNAUTHORIZED_MARKER = '{"unauthorized": true}'

APPLICATION_PATTERN = re.compile(r'launchurl":"([^"]+)","name":"([^"]+)"')
AUTH_METHOD_PATTERN = re.compile(r'method name="([^"]+)" url="([^"]+)')
AUTH_LOCATION_PATTERN = re.compile(r'location="([^"]+)')


def is_unauthorized(body):
    """True if the body is the StoreFront's unauthorized answer."""
    return bool(body) and UNAUTHORIZED_MARKER in body


def extract_applications(body):
    """Map application names to launch references.

    Names keep the order they are first seen in; a repeated name takes the
    later launch reference. An unauthorized body yields nothing, even if it
    happens to contain matching fragments.
    """
    applications = {}
    if not body or is_unauthorized(body):
        return applications
    for launch_url, name in APPLICATION_PATTERN.findall(body):
        applications[name] = launch_url
    return applications


def extract_auth_methods(body):
    """Map authentication method names to their URLs."""
    methods = {}
    if not body:
        return methods
    for name, url in AUTH_METHOD_PATTERN.findall(body):
        methods[name] = url
    return methods


def extract_auth_location(header):
    """``location`` of a ``CitrixWebReceiver-Authenticate`` header, or ""."""
    if not header:
        return ""
    match = AUTH_LOCATION_PATTERN.search(header)
    return match.group(1) if match else ""
