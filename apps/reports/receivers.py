"""
Stats cache invalidation.

Cached statistics depend on recoveries, on store names, on owner
assignments and on user roles. Any change to one of them drops every
cached statistic, now and again once the surrounding transaction
commits, so a reader racing the commit cannot keep a stale entry.
"""

import logging

from django.db import transaction

from .cache import stats_cache

logger = logging.getLogger(__name__)

SIGN_IN_FIELDS = frozenset({'last_login'})


def invalidate_stats():
    stats_cache.invalidate()
    transaction.on_commit(stats_cache.invalidate)


def invalidate_stats_on_change(sender, action, instance, **kwargs):
    """Drop cached statistics whenever a recovery is inserted, updated or deleted."""
    logger.debug("recovery %s %s, invalidating stats", instance.pk, action)
    invalidate_stats()


def invalidate_stats_on_scope_change(sender, instance, **kwargs):
    """Drop cached statistics when a store, an assignment or a user changes."""
    update_fields = kwargs.get('update_fields')
    if update_fields and frozenset(update_fields) <= SIGN_IN_FIELDS:
        return
    logger.debug("%s %s changed, invalidating stats", sender.__name__, instance.pk)
    invalidate_stats()
