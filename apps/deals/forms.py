from django import forms
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError

from apps.contacts.models import Company, Person
from apps.properties.models import Building, Unit
from .models import PropertyRequest, Activity, STATUS_CHOICES


User = get_user_model()


class PropertyRequestForm(forms.ModelForm):
    class Meta:
        model = PropertyRequest
        fields = [
            'name', 'request_type', 'number_of_sqm', 'min_height',
            'estimated_fee_value', 'contract_period', 'break_option_after',
            'start_date', 'notes', 'company', 'person', 'locations',
        ]

        error_messages = {
            'name': {'required': 'Name is required', 'max_length': 'Name is too long (max 200 characters)'},
        }

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency', None)
        super().__init__(*args, **kwargs)

        # Contacts of other agencies are not selectable
        if self.agency:
            self.fields['company'].queryset = Company.objects.filter(agency=self.agency)
            self.fields['person'].queryset = Person.objects.filter(agency=self.agency)

    def clean_number_of_sqm(self):
        sqm = self.cleaned_data.get('number_of_sqm')
        if sqm is not None and sqm < 0:
            raise ValidationError('Surface cannot be negative')
        return sqm

    def clean_estimated_fee_value(self):
        fee = self.cleaned_data.get('estimated_fee_value')
        if fee is not None and fee < 0:
            raise ValidationError('Estimated fee cannot be negative')
        return fee

    def clean(self):
        cleaned_data = super().clean()
        company = cleaned_data.get('company')
        person = cleaned_data.get('person')

        if person and company and person.company_id and person.company_id != company.id:
            self.add_error('person', 'This person works for another company')

        return cleaned_data


class StatusChangeForm(forms.Form):

    status = forms.ChoiceField(choices=STATUS_CHOICES)
    lost_reason = forms.CharField(required=False)
    hold_reason = forms.CharField(required=False)


class CloseDealForm(forms.Form):

    agreed_price = forms.FloatField(min_value=0)
    actual_fee = forms.FloatField(min_value=0)
    signed_date = forms.DateField()
    contract_start_date = forms.DateField()
    contract_end_date = forms.DateField(required=False)
    won_building = forms.ModelChoiceField(queryset=Building.objects.none())
    won_unit_ids = forms.ModelMultipleChoiceField(queryset=Unit.objects.none())
    closure_notes = forms.CharField(required=False)

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency', None)
        super().__init__(*args, **kwargs)

        if self.agency:
            self.fields['won_building'].queryset = Building.objects.filter(agency=self.agency)
            self.fields['won_unit_ids'].queryset = Unit.objects.filter(building__agency=self.agency)

    def clean(self):
        cleaned_data = super().clean()
        building = cleaned_data.get('won_building')
        units = cleaned_data.get('won_unit_ids')
        start = cleaned_data.get('contract_start_date')
        end = cleaned_data.get('contract_end_date')

        if building and units and any(unit.building_id != building.id for unit in units):
            self.add_error('won_unit_ids', 'All units must belong to the won building')

        if start and end and end <= start:
            self.add_error('contract_end_date', 'Contract end must be after its start')

        return cleaned_data


class ReassignForm(forms.Form):

    user_id = forms.ModelChoiceField(
        queryset=User.objects.none(),
        error_messages={'invalid_choice': 'User not found in this agency'},
    )

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)
        self.fields['user_id'].queryset = User.objects.filter(agency=self.agency, is_active=True)


class ActivityForm(forms.ModelForm):
    class Meta:
        model = Activity
        fields = [
            'activity_type', 'title', 'date', 'time', 'duration', 'done', 'notes',
            'request', 'company', 'persons',
        ]

        error_messages = {
            'title': {'required': 'Title is required'},
            'date': {'required': 'Date is required'},
        }

    def __init__(self, *args, **kwargs):
        self.user = kwargs.pop('user')
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)

        self.fields['request'].queryset = PropertyRequest.objects.visible_to(self.user, self.agency)
        self.fields['company'].queryset = Company.objects.filter(agency=self.agency)
        self.fields['persons'].queryset = Person.objects.filter(agency=self.agency)
