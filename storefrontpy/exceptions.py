"""Library exceptions."""


class StorefrontPyException(Exception):
    """Generic StoreFront exception."""


# API
class StorefrontPyAPIResponseException(StorefrontPyException):
    """StoreFront response exception."""

    def __init__(self, reason, code=None):
        self.reason = reason
        self.code = code
        message = reason or ""
        if code:
            message += f" ({code})"

        super().__init__(message)


# Client certificate
class StorefrontPyCertificateException(StorefrontPyException):
    """Client certificate could not be loaded."""

    def __init__(self, cert_path, reason=None):
        self.cert_path = cert_path
        message = f"Unable to load client certificate:{cert_path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
