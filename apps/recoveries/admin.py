# ==========================================
# apps/recoveries/admin.py
# ==========================================

from django.contrib import admin
from apps.recoveries.models import DailyRecovery


@admin.register(DailyRecovery)
class DailyRecoveryAdmin(admin.ModelAdmin):
    """Admin interface for daily recoveries."""
    
    list_display = [
        'date',
        'store',
        'expected_amount',
        'recovered_amount',
        'expenses',
        'gap',
        'created_by',
    ]
    list_filter = ['store', 'date']
    search_fields = ['store__name', 'store__code', 'observations']
    readonly_fields = ['gap', 'created_by', 'created_at', 'updated_at']
    date_hierarchy = 'date'
    ordering = ['-date']
    
    fieldsets = (
        ('Day', {
            'fields': ('store', 'date')
        }),
        ('Amounts', {
            'fields': ('expected_amount', 'recovered_amount', 'expenses', 'gap')
        }),
        ('Notes', {
            'fields': ('observations',)
        }),
        ('Metadata', {
            'fields': ('created_by', 'created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )
    
    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('store', 'created_by')
    
    def save_model(self, request, obj, form, change):
        if not change and obj.created_by is None:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
