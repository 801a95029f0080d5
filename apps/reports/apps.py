from django.apps import AppConfig
from django.conf import settings
from django.db.models.signals import post_save, post_delete


class ReportsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'apps.reports'
    label = 'reports'

    def ready(self):
        from apps.recoveries.signals import recovery_changed
        from .receivers import invalidate_stats_on_change, invalidate_stats_on_scope_change

        recovery_changed.connect(
            invalidate_stats_on_change,
            dispatch_uid='reports.invalidate_stats_on_change',
        )

        # Store names, assignments and roles decide what a cached statistic shows
        for model in ('stores.Store', 'stores.StoreOwnerAssignment', settings.AUTH_USER_MODEL):
            for name, signal in (('save', post_save), ('delete', post_delete)):
                signal.connect(
                    invalidate_stats_on_scope_change,
                    sender=model,
                    dispatch_uid=f'reports.invalidate_stats.{model}.{name}',
                )
