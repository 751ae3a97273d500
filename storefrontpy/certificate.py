"""Client certificate loading."""

import os
import tempfile
from logging import getLogger

from cryptography.hazmat.primitives.serialization import (
    Encoding,
    NoEncryption,
    PrivateFormat,
    pkcs12,
)

from storefrontpy.exceptions import StorefrontPyCertificateException

LOGGER = getLogger(__name__)


class ClientCertificate:
    """A PKCS#12 bundle unpacked to PEM files for requests.

    ``cert`` is the ``(certificate_file, key_file)`` tuple accepted by
    :class:`requests.Session`. The files live until :meth:`cleanup`.
    """

    def __init__(self, cert_file, key_file):
        self.cert_file = cert_file
        self.key_file = key_file

    @property
    def cert(self):
        return (self.cert_file, self.key_file)

    def cleanup(self):
        for path in (self.cert_file, self.key_file):
            if path and os.path.exists(path):
                os.remove(path)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.cleanup()


def _write_temp(content, suffix):
    handle, path = tempfile.mkstemp(suffix=suffix, prefix="storefrontpy-")
    with os.fdopen(handle, "wb") as f:
        f.write(content)
    return path


def load_client_certificate(cert_path, cert_password):
    """Load a password protected PKCS#12 file.

    Returns None when no certificate is configured: an empty path or
    password, or a path that does not exist.
    """
    if not cert_path or not cert_password or not os.path.isfile(cert_path):
        LOGGER.debug("No client certificate used")
        return None

    with open(cert_path, "rb") as f:
        data = f.read()
    password = cert_password.encode() if isinstance(cert_password, str) else cert_password

    try:
        key, certificate, additional = pkcs12.load_key_and_certificates(data, password)
    except ValueError as error:
        raise StorefrontPyCertificateException(cert_path, str(error)) from error
    if key is None or certificate is None:
        raise StorefrontPyCertificateException(cert_path, "no key or certificate in bundle")

    chain = certificate.public_bytes(Encoding.PEM)
    for extra in additional or []:
        chain += extra.public_bytes(Encoding.PEM)
    key_pem = key.private_bytes(Encoding.PEM, PrivateFormat.PKCS8, NoEncryption())

    LOGGER.debug("Loaded client certificate %s", certificate.subject.rfc4514_string())
    cert_file = _write_temp(chain, ".crt")
    try:
        key_file = _write_temp(key_pem, ".key")
    except OSError:
        os.remove(cert_file)
        raise
    return ClientCertificate(cert_file, key_file)
