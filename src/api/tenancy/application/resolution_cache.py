"""Per-resolver cache of hostname resolutions."""

from __future__ import annotations

from collections import OrderedDict

from tenancy.domain.resolution import TenantResolution


class ResolutionCache:
    """Bounded LRU map from normalized hostname to resolution.

    Owned by whoever constructs the resolver, so its lifetime is the
    application's, not the module's. With ``max_entries=1`` a new hostname
    evicts the previous one. Failed resolutions are never stored: the next
    resolve for that hostname retries the lookup.

    Only touched from the event loop, so no locking.
    """

    def __init__(self, max_entries: int = 1024) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._max_entries = max_entries
        self._entries: OrderedDict[str, TenantResolution] = OrderedDict()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def get(self, hostname: str) -> TenantResolution | None:
        """Return the cached resolution for a hostname, if any."""
        resolution = self._entries.get(hostname)
        if resolution is not None:
            self._entries.move_to_end(hostname)
        return resolution

    def put(self, resolution: TenantResolution) -> bool:
        """Cache a resolution under its hostname.

        Returns:
            True if cached, False for failed resolutions (never cached)
        """
        if resolution.is_failure:
            return False
        self._entries[resolution.hostname] = resolution
        self._entries.move_to_end(resolution.hostname)
        while len(self._entries) > self._max_entries:
            self._entries.popitem(last=False)
        return True

    def clear(self) -> int:
        """Drop every entry.

        Returns:
            Number of entries dropped
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def __contains__(self, hostname: object) -> bool:
        return hostname in self._entries

    def __len__(self) -> int:
        return len(self._entries)
