from django.contrib import admin
from django.utils.html import format_html
from .models import PropertyRequest, Activity, Tenant


class ActivityInline(admin.TabularInline):

    model = Activity
    extra = 0
    readonly_fields = ['user', 'activity_type', 'title', 'is_system', 'created_at']
    fields = ['created_at', 'user', 'activity_type', 'title', 'done', 'is_system']
    classes = ['collapse']
    max_num = 20

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('user').order_by('-created_at')


class TenantInline(admin.TabularInline):

    model = Tenant
    extra = 0
    fields = ['unit', 'company', 'start_date', 'end_date']
    raw_id_fields = ['unit', 'company']


@admin.register(PropertyRequest)
class PropertyRequestAdmin(admin.ModelAdmin):

    list_display = [
        'id',
        'name',
        'status_badge',
        'request_type',
        'number_of_sqm',
        'estimated_fee_value',
        'company',
        'user',
        'created_at',
    ]

    list_filter = [
        'agency',
        'status',
        'request_type',
        'user',
        'created_at',
    ]

    search_fields = [
        'name',
        'company__name',
        'person__name',
        'notes',
    ]

    ordering = ['-created_at']
    list_per_page = 50
    date_hierarchy = 'created_at'

    fieldsets = [
        ('Request', {
            'fields': ['agency', 'user', 'name', 'company', 'person', 'locations']
        }),
        ('Requirements', {
            'fields': [
                'request_type', 'number_of_sqm', 'min_height', 'estimated_fee_value',
                'contract_period', 'break_option_after', 'start_date', 'notes', 'tags',
            ]
        }),
        ('Pipeline', {
            'fields': ['status', 'lost_reason', 'hold_reason', 'last_status_change', 'closed_at']
        }),
        ('Closure', {
            'fields': [
                'agreed_price', 'actual_fee', 'signed_date', 'contract_start_date',
                'contract_end_date', 'won_building', 'won_unit_ids', 'closure_notes',
            ],
            'classes': ['collapse'],
        }),
        ('Timestamps', {
            'fields': ['created_at', 'updated_at'],
            'classes': ['collapse'],
        }),
    ]

    readonly_fields = ['last_status_change', 'closed_at', 'created_at', 'updated_at']
    filter_horizontal = ['locations']
    inlines = [ActivityInline, TenantInline]

    def status_badge(self, obj):
        """Display status with colored badge"""
        colors = {
            'NEW': '#17a2b8',
            'OFFERING': '#6f42c1',
            'TOUR': '#fd7e14',
            'SHORTLIST': '#ffc107',
            'NEGOTIATION': '#007bff',
            'HOT_SIGNED': '#e83e8c',
            'ON_HOLD': '#6c757d',
            'WON': '#28a745',
            'LOST': '#dc3545',
        }
        return format_html(
            '<span style="background-color: {}; color: white; padding: 3px 8px; '
            'border-radius: 3px; font-size: 11px;">{}</span>',
            colors.get(obj.status, '#6c757d'),
            obj.get_status_display()
        )
    status_badge.short_description = 'Status'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('agency', 'company', 'person', 'user')


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = [
        'id',
        'request',
        'user',
        'activity_type',
        'title',
        'date',
        'done',
        'is_system',
    ]

    list_filter = [
        'activity_type',
        'done',
        'is_system',
        'date',
    ]

    search_fields = [
        'title',
        'notes',
        'request__name',
    ]

    ordering = ['-created_at']
    list_per_page = 100
    readonly_fields = ['is_system', 'created_at', 'updated_at']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('request', 'user')


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ['id', 'company', 'unit', 'start_date', 'end_date', 'deal']
    list_filter = ['end_date']
    search_fields = ['company__name', 'unit__name', 'unit__building__name']
    raw_id_fields = ['unit', 'company', 'deal']

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('company', 'unit__building', 'deal')
