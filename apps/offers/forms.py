from django import forms
from django.core.exceptions import ValidationError

from apps.deals.models import PropertyRequest
from apps.properties.models import Building
from .models import Offer, OfferGroup


class OfferCreateForm(forms.Form):

    request_id = forms.ModelChoiceField(
        queryset=PropertyRequest.objects.none(),
        error_messages={'invalid_choice': 'Request not found'},
    )

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user')
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)
        self.fields['request_id'].queryset = PropertyRequest.objects.visible_to(self.user, self.agency)


class GroupCreateForm(forms.Form):

    name = forms.CharField(max_length=200)
    building_id = forms.ModelChoiceField(
        queryset=Building.objects.none(),
        error_messages={'invalid_choice': 'Building not found'},
    )
    unit_ids = forms.JSONField()

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)
        self.fields['building_id'].queryset = Building.objects.filter(agency=self.agency)

    def clean_unit_ids(self):
        unit_ids = self.cleaned_data.get('unit_ids')
        if not isinstance(unit_ids, list) or not all(
            isinstance(unit_id, int) and not isinstance(unit_id, bool) for unit_id in unit_ids
        ):
            raise ValidationError('unit_ids must be a list of integers')
        return unit_ids


class GroupUpdateForm(forms.ModelForm):
    class Meta:
        model = OfferGroup
        fields = [
            'name', 'status',
            'lease_term_months', 'incentive_months', 'early_access_months',
            'start_date', 'price_calc_option',
            'warehouse_rent_price', 'office_rent_price', 'sanitary_rent_price', 'others_rent_price',
            'service_charge', 'service_charge_type',
            'address', 'latitude', 'longitude', 'description',
            'docks', 'driveins', 'cross_dock',
        ]

    def clean(self):
        cleaned_data = super().clean()
        for field in ('warehouse_rent_price', 'office_rent_price', 'sanitary_rent_price',
                      'others_rent_price', 'service_charge'):
            value = cleaned_data.get(field)
            if value is not None and value < 0:
                self.add_error(field, 'Value cannot be negative')
        return cleaned_data


class OfferUpdateForm(forms.ModelForm):
    """Follow-up data only: code and request snapshot stay as created"""

    class Meta:
        model = Offer
        fields = ['feedback', 'sent_at', 'downloadable']
