from django import forms

from apps.contacts.models import Company
from .models import Building, Unit, SPACE_CATEGORIES


class BuildingForm(forms.ModelForm):
    class Meta:
        model = Building
        fields = [
            'name', 'property_code', 'transaction_type', 'address', 'latitude', 'longitude',
            'location', 'total_sqm', 'available_sqm', 'service_charge', 'available_from',
            'min_contract_years', 'description', 'clear_height', 'floor_loading', 'sprinkler',
            'developer',
        ]

        error_messages = {
            'name': {'required': 'Name is required'},
        }

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)

        self.fields['developer'].queryset = Company.objects.filter(agency=self.agency)
        self.fields['transaction_type'].required = False

    def clean_transaction_type(self):
        return self.cleaned_data.get('transaction_type') or 'RENT'

    def clean(self):
        cleaned_data = super().clean()

        for field in ('total_sqm', 'available_sqm', 'service_charge'):
            value = cleaned_data.get(field)
            if value is not None and value < 0:
                self.add_error(field, 'Cannot be negative')

        latitude = cleaned_data.get('latitude')
        if latitude is not None and not -90 <= latitude <= 90:
            self.add_error('latitude', 'Latitude must be between -90 and 90')

        longitude = cleaned_data.get('longitude')
        if longitude is not None and not -180 <= longitude <= 180:
            self.add_error('longitude', 'Longitude must be between -180 and 180')

        return cleaned_data


class UnitForm(forms.ModelForm):
    class Meta:
        model = Unit
        fields = [
            'name', 'transaction_type',
            'warehouse_sqm', 'warehouse_rent_price', 'office_sqm', 'office_rent_price',
            'sanitary_sqm', 'sanitary_rent_price', 'others_sqm', 'others_rent_price',
            'docks', 'driveins', 'cross_dock', 'useful_height', 'service_charge',
            'available_from', 'sale_price',
        ]

        error_messages = {
            'name': {'required': 'Name is required'},
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['transaction_type'].required = False

    def clean_transaction_type(self):
        return self.cleaned_data.get('transaction_type') or 'RENT'

    def clean(self):
        cleaned_data = super().clean()

        # Offer pricing assumes areas and prices are never negative
        numeric_fields = [f'{category}_{suffix}' for category in SPACE_CATEGORIES for suffix in ('sqm', 'rent_price')]
        numeric_fields += ['useful_height', 'service_charge', 'sale_price']
        for field in numeric_fields:
            value = cleaned_data.get(field)
            if value is not None and value < 0:
                self.add_error(field, 'Cannot be negative')

        return cleaned_data
