"""Port-level exceptions for the tenancy bounded context.

These represent failures of the remote tenant directory. They are caught
by the resolver and turned into a ``failed`` resolution; they never mean
"no tenant".
"""


class TenantLookupError(Exception):
    """Raised when the tenant directory could not answer a lookup.

    Covers network errors, query errors, permission errors and payloads
    that cannot be decoded.
    """

    def __init__(self, message: str, field: str | None = None, value: str | None = None):
        super().__init__(message)
        self.field = field
        self.value = value


class TenantLookupTimeoutError(TenantLookupError):
    """Raised when a directory lookup exceeded its time budget."""

    pass
