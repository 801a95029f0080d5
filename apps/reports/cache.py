"""
Cache for derived recovery statistics.

Dashboard figures are recomputed from raw records on every read, so they
are memoised per filter combination in a dedicated Django cache alias.
Invalidation does not enumerate keys: every key embeds a generation
number, and bumping that number makes all earlier entries unreachable
(they simply age out).
"""

import logging
from datetime import date, datetime
from uuid import UUID

from django.conf import settings
from django.core.cache import caches

logger = logging.getLogger(__name__)

GENERATION_KEY = 'stats:generation'
WILDCARD = '*'

_MISSING = object()


def normalize_filter(value) -> str:
    """Render one filter argument as a stable key fragment."""
    if value is None or value == '':
        return WILDCARD
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, UUID):
        return value.hex
    return str(value)


class StatsCache:
    """Generation-counted cache of computed statistics."""

    def __init__(self, alias='stats', timeout=None):
        self.alias = alias
        self._timeout = timeout

    @property
    def backend(self):
        return caches[self.alias]

    @property
    def timeout(self):
        if self._timeout is not None:
            return self._timeout
        return getattr(settings, 'STATS_CACHE_TIMEOUT', 300)

    def generation(self) -> int:
        value = self.backend.get(GENERATION_KEY)
        if value is None:
            # add() keeps a counter another process already created
            self.backend.add(GENERATION_KEY, 1, timeout=None)
            value = self.backend.get(GENERATION_KEY, 1)
        return value

    def make_key(self, kind, **filters) -> str:
        parts = [f"{name}={normalize_filter(filters[name])}" for name in sorted(filters)]
        return f"stats:{self.generation()}:{kind}:" + '|'.join(parts)

    def get_or_compute(self, kind, compute, **filters):
        """
        Return the cached value for (kind, filters), computing it on a miss.

        ``compute`` is called with no arguments; exceptions propagate and
        nothing is stored.
        """
        key = self.make_key(kind, **filters)
        value = self.backend.get(key, _MISSING)
        if value is not _MISSING:
            logger.debug("stats cache hit %s", key)
            return value

        logger.debug("stats cache miss %s", key)
        value = compute()
        self.backend.set(key, value, timeout=self.timeout)
        return value

    def invalidate(self) -> int:
        """Drop every cached statistic by moving to a new generation."""
        try:
            generation = self.backend.incr(GENERATION_KEY)
        except ValueError:
            generation = 2
            self.backend.set(GENERATION_KEY, generation, timeout=None)
        logger.info("stats cache invalidated (generation %s)", generation)
        return generation


stats_cache = StatsCache()
