from django.contrib import admin
from .models import Offer, OfferGroup, GroupItem


class OfferGroupInline(admin.StackedInline):

    model = OfferGroup
    extra = 0
    fields = [
        'name', 'status', 'building', 'price_calc_option',
        'lease_term_months', 'incentive_months', 'early_access_months',
    ]
    show_change_link = True


class GroupItemInline(admin.TabularInline):

    model = GroupItem
    extra = 0
    fields = ['unit', 'unit_name', 'warehouse_sqm']
    raw_id_fields = ['unit']


@admin.register(Offer)
class OfferAdmin(admin.ModelAdmin):

    list_display = ['id', 'offer_code', 'request', 'company', 'user', 'downloadable', 'created_at']
    list_filter = ['downloadable', 'created_at']
    search_fields = ['offer_code', 'request__name', 'company__name']
    readonly_fields = ['offer_code', 'created_at', 'updated_at']
    inlines = [OfferGroupInline]

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('request', 'company', 'user')


@admin.register(OfferGroup)
class OfferGroupAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'offer', 'building', 'status', 'price_calc_option', 'effective_rent']
    list_filter = ['status', 'price_calc_option']
    search_fields = ['name', 'offer__offer_code', 'building__name']
    inlines = [GroupItemInline]

    def effective_rent(self, obj):
        return round(obj.get_pricing()['effective_rent'], 2)
    effective_rent.short_description = 'Effective Rent'

    def get_queryset(self, request):
        qs = super().get_queryset(request)
        return qs.select_related('offer', 'building')
