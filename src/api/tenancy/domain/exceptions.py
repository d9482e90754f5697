"""Domain exceptions for the tenancy bounded context."""


class InvalidHostnameError(ValueError):
    """Raised when a hostname cannot be normalized into a DNS name.

    This is a caller error (a malformed Host header), not a lookup
    failure; the presentation layer maps it to HTTP 400.
    """

    pass
