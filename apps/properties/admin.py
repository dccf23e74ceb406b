from django.contrib import admin
from .models import Location, Building, Unit


class UnitInline(admin.TabularInline):

    model = Unit
    extra = 0
    fields = [
        'name',
        'warehouse_sqm', 'warehouse_rent_price',
        'office_sqm', 'office_rent_price',
        'docks', 'driveins', 'cross_dock',
    ]
    show_change_link = True


@admin.register(Location)
class LocationAdmin(admin.ModelAdmin):

    list_display = ['name', 'county']
    search_fields = ['name', 'county']


@admin.register(Building)
class BuildingAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'property_code', 'location', 'transaction_type', 'available_sqm', 'agency']
    list_filter = ['agency', 'transaction_type', 'location']
    search_fields = ['name', 'property_code', 'address']
    inlines = [UnitInline]


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):

    list_display = ['id', 'name', 'building', 'warehouse_sqm', 'office_sqm', 'docks', 'cross_dock']
    list_filter = ['building__agency', 'cross_dock']
    search_fields = ['name', 'building__name']

    fieldsets = [
        ('Unit', {'fields': ['building', 'name', 'transaction_type']}),
        ('Spaces', {'fields': [
            ('warehouse_sqm', 'warehouse_rent_price'),
            ('office_sqm', 'office_rent_price'),
            ('sanitary_sqm', 'sanitary_rent_price'),
            ('others_sqm', 'others_rent_price'),
        ]}),
        ('Loading', {'fields': ['docks', 'driveins', 'cross_dock', 'useful_height']}),
        ('Commercial', {'fields': ['service_charge', 'available_from', 'sale_price']}),
    ]
