from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.db.models import Count, Q
from django.utils.translation import gettext_lazy as _
from django.utils.html import format_html

from apps.deals.models import TERMINAL_STATUSES
from .models import User


ROLE_COLORS = {
    'ADMIN': '#1E3A5F',
    'BROKER': '#17a2b8',
}


# BROKERS & AGENCY ADMINS
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ('email', 'full_name', 'agency', 'role_badge', 'open_deals', 'is_active', 'last_login')
    list_display_links = ('email', 'full_name')
    list_filter = ('agency', 'role', 'is_active', 'is_superuser')
    search_fields = ('email', 'first_name', 'last_name', 'phone', 'agency__name')
    list_select_related = ('agency',)
    ordering = ('agency__name', 'email')
    list_per_page = 50

    fieldsets = (
        (None, {'fields': ('email', 'password')}),
        (_('Broker'), {
            'fields': ('first_name', 'last_name', 'phone', 'avatar'),
        }),
        (_('Agency & Role'), {
            'fields': ('agency', 'role'),
            'description': _('Admins see every deal of the agency, brokers only the deals they own'),
        }),
        (_('Permissions'), {
            'fields': ('is_active', 'is_staff', 'is_superuser', 'groups', 'user_permissions'),
            'classes': ('collapse',),
        }),
        (_('Dates'), {
            'fields': ('date_joined', 'last_login'),
            'classes': ('collapse',),
        }),
    )

    add_fieldsets = (
        (None, {
            'classes': ('wide',),
            'fields': ('email', 'password1', 'password2', 'first_name', 'last_name', 'agency', 'role'),
        }),
    )

    readonly_fields = ('date_joined', 'last_login')

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(
            open_deal_count=Count('requests', filter=~Q(requests__status__in=TERMINAL_STATUSES))
        )

    def full_name(self, obj):
        return obj.get_full_name()

    full_name.short_description = _('Name')
    full_name.admin_order_field = 'first_name'

    def role_badge(self, obj):
        return format_html(
            '<span style="background: {}; color: white; padding: 3px 10px; border-radius: 3px;">{}</span>',
            ROLE_COLORS.get(obj.role, '#6c757d'), obj.get_role_display()
        )

    role_badge.short_description = _('Role')
    role_badge.admin_order_field = 'role'

    def open_deals(self, obj):
        return obj.open_deal_count

    open_deals.short_description = _('Open deals')
    open_deals.admin_order_field = 'open_deal_count'

    def has_delete_permission(self, request, obj=None):
        # Brokers own deals and offers (PROTECT): deactivate instead
        if obj and (obj == request.user or obj.requests.exists()):
            return False
        return super().has_delete_permission(request, obj)


admin.site.site_header = _('Brokerage CRM Administration')
admin.site.site_title = _('Brokerage CRM')
admin.site.index_title = _('Agencies, deals and offers')
