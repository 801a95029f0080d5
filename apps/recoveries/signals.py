"""
Change feed for daily recoveries.

``recovery_changed`` fires after every insert, update or delete of a
``DailyRecovery`` row, whichever code path wrote it. Receivers get
``action`` ('insert', 'update' or 'delete') and ``instance``.
"""

import logging

from django.db.models.signals import post_save, post_delete
from django.dispatch import Signal, receiver

from .models import DailyRecovery

logger = logging.getLogger(__name__)

ACTION_INSERT = 'insert'
ACTION_UPDATE = 'update'
ACTION_DELETE = 'delete'

recovery_changed = Signal()


@receiver(post_save, sender=DailyRecovery)
def _recovery_saved(sender, instance, created, **kwargs):
    action = ACTION_INSERT if created else ACTION_UPDATE
    logger.debug("recovery %s: %s", action, instance.pk)
    recovery_changed.send(sender=DailyRecovery, action=action, instance=instance)


@receiver(post_delete, sender=DailyRecovery)
def _recovery_deleted(sender, instance, **kwargs):
    logger.debug("recovery %s: %s", ACTION_DELETE, instance.pk)
    recovery_changed.send(sender=DailyRecovery, action=ACTION_DELETE, instance=instance)
