#! /usr/bin/env python
"""
A terminal tool that logs in to a StoreFront and starts an application.
"""
import argparse
import logging
import sys

from requests.exceptions import RequestException

from storefrontpy import launcher
from storefrontpy.base import StorefrontPyService
from storefrontpy.certificate import load_client_certificate
from storefrontpy.exceptions import StorefrontPyException

LOGGER = logging.getLogger(__name__)


def parse_args(args):
    """All arguments are positional and optional."""
    parser = argparse.ArgumentParser(description="StoreFront Command Line Tool")
    parser.add_argument("gateway_url", nargs="?", default="", help="NetScaler Gateway URL")
    parser.add_argument("username", nargs="?", default="", help="Gateway username")
    parser.add_argument("password", nargs="?", default="", help="Gateway password")
    parser.add_argument("app_name", nargs="?", default="", help="Application to start, lists them if empty")
    parser.add_argument("cert_path", nargs="?", default="", help="PKCS#12 client certificate")
    parser.add_argument("cert_password", nargs="?", default="", help="Client certificate password")
    # everything is positional, even values starting with "-"
    return parser.parse_args(["--", *args])


def main(args=None):
    """Main commandline entrypoint."""
    if args is None:
        args = sys.argv[1:]

    command_line = parse_args(args)
    if not command_line.gateway_url or not command_line.username or not command_line.password:
        return 0

    logging.basicConfig(level=logging.WARNING)

    certificate = None
    try:
        certificate = load_client_certificate(command_line.cert_path, command_line.cert_password)
        storefront = StorefrontPyService(
            command_line.gateway_url,
            command_line.username,
            command_line.password,
            cert=certificate.cert if certificate else None,
        )
        if not storefront.connect():
            return 1

        if not command_line.app_name:
            outcome = storefront.resources.list_applications()
            for name in outcome.value:
                print(name)
            return 0 if outcome else 1

        application = storefront.resources.find(command_line.app_name)
        if not application:
            return 1
        descriptor = storefront.descriptor.fetch(application.value.launch_reference)
        if not descriptor:
            return 1

        path = launcher.write_descriptor(descriptor.value, application.value.launch_reference)
        return 0 if launcher.launch(path) else 1
    except (RequestException, StorefrontPyException) as error:
        LOGGER.error("%s", error)
        return 1
    finally:
        if certificate is not None:
            certificate.cleanup()


if __name__ == "__main__":
    sys.exit(main())
