from django.contrib import admin
from django.utils.html import format_html
from .models import Agency


@admin.register(Agency)
class AgencyAdmin(admin.ModelAdmin):

    list_display = [
        'name',
        'contact_info',
        'status_badge',
        'users_count',
        'created_at'
    ]
    list_filter = ['status', 'created_at']
    search_fields = ['name', 'email', 'phone']
    prepopulated_fields = {'slug': ('name',)}
    readonly_fields = ['created_at', 'updated_at']

    fieldsets = (
        ('Basic Information', {
            'fields': ('name', 'slug', 'logo', 'primary_color')
        }),
        ('Contact Information', {
            'fields': ('phone', 'email', 'website', 'address')
        }),
        ('Status', {
            'fields': ('status',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        }),
    )

    def contact_info(self, obj):
        if not (obj.phone or obj.email):
            return '-'
        return format_html(
            '<div style="line-height: 1.5;">{}<br>{}</div>',
            obj.phone,
            obj.email
        )

    contact_info.short_description = 'Contact'

    def status_badge(self, obj):

        if obj.is_active():
            return format_html(
                '<span style="background-color: #28a745; color: white; '
                'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
                'Active</span>'
            )
        return format_html(
            '<span style="background-color: #dc3545; color: white; '
            'padding: 3px 10px; border-radius: 3px; font-size: 11px;">'
            'Suspended</span>'
        )

    status_badge.short_description = 'Status'

    def users_count(self, obj):
        return obj.get_active_users_count()

    users_count.short_description = 'Users'
