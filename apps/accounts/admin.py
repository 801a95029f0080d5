# ==========================================
# apps/accounts/admin.py
# ==========================================

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.html import format_html
from .models import User, UserRole
from apps.reports.receivers import invalidate_stats


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Custom admin interface for User model.

    Provides user management for the recovery dashboard:
    - User listing with role and status
    - Filtering by role and status
    - Bulk actions to promote owners or demote administrators
    """

    list_display = [
        'email',
        'full_name',
        'role_badge',
        'is_active',
        'created_at',
        'last_login',
    ]

    list_filter = [
        'role',
        'is_active',
        'is_staff',
        'is_superuser',
        'created_at',
    ]

    search_fields = [
        'email',
        'full_name',
    ]

    ordering = ['-created_at']
    date_hierarchy = 'created_at'

    # Remove username field references from BaseUserAdmin
    fieldsets = (
        ('Basic Information', {
            'fields': ('email', 'full_name', 'password')
        }),
        ('Dashboard Role', {
            'fields': ('role',),
        }),
        ('Permissions', {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        ('Create User', {
            'classes': ('wide',),
            'fields': ('email', 'full_name', 'role', 'password1', 'password2'),
        }),
    )

    readonly_fields = [
        'created_at',
        'last_login',
    ]

    filter_horizontal = ['groups', 'user_permissions']

    def role_badge(self, obj):
        """Display the dashboard role as colored badge."""
        if obj.is_admin:
            return format_html(
                '<span style="background: #1E3A8A; color: white; padding: 3px 8px; '
                'border-radius: 10px; font-size: 11px;">{}</span>',
                UserRole.ADMIN.label,
            )
        return format_html(
            '<span style="background: #ccc; color: #333; padding: 3px 8px; '
            'border-radius: 10px; font-size: 11px;">{}</span>',
            UserRole.OWNER.label,
        )
    role_badge.short_description = 'Role'
    role_badge.admin_order_field = 'role'

    actions = ['make_admins', 'make_owners']

    @admin.action(description='Give selected users the administrator role')
    def make_admins(self, request, queryset):
        count = queryset.update(role=UserRole.ADMIN)
        invalidate_stats()
        self.message_user(request, f'{count} user(s) are now administrators.')

    @admin.action(description='Give selected users the owner role')
    def make_owners(self, request, queryset):
        """Demote to owner (superusers keep admin rights regardless)."""
        count = queryset.filter(is_superuser=False).update(role=UserRole.OWNER)
        invalidate_stats()
        self.message_user(request, f'{count} user(s) are now store owners.')
