# ==========================================
# apps/stores/admin.py
# ==========================================

from django.contrib import admin
from apps.stores.models import Store, StoreOwnerAssignment
from apps.reports.receivers import invalidate_stats


class StoreOwnerInline(admin.TabularInline):
    """Inline admin for owner assignments."""
    model = StoreOwnerAssignment
    extra = 0
    fields = ['user', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Store)
class StoreAdmin(admin.ModelAdmin):
    """Admin interface for Stores."""
    
    list_display = ['name', 'code', 'owner_count', 'is_active', 'created_at']
    list_filter = ['is_active']
    search_fields = ['name', 'code', 'address']
    readonly_fields = ['created_at', 'updated_at']
    inlines = [StoreOwnerInline]
    ordering = ['name']
    
    def owner_count(self, obj):
        return obj.owner_assignments.count()
    owner_count.short_description = 'Owners'
    
    actions = ['deactivate_stores']
    
    def deactivate_stores(self, request, queryset):
        """Soft-delete selected stores."""
        updated = queryset.update(is_active=False)
        invalidate_stats()
        self.message_user(request, f"Deactivated {updated} stores")
    deactivate_stores.short_description = "Deactivate selected stores"


@admin.register(StoreOwnerAssignment)
class StoreOwnerAssignmentAdmin(admin.ModelAdmin):
    """Admin interface for owner assignments."""
    
    list_display = ['user', 'store', 'created_at']
    search_fields = ['user__email', 'store__name', 'store__code']
    readonly_fields = ['created_at']
    ordering = ['-created_at']
    
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user', 'store')
