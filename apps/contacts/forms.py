from django import forms
from django.core.exceptions import ValidationError

from .models import Company, Person


class CompanyForm(forms.ModelForm):
    class Meta:
        model = Company
        fields = ['name', 'vat_number', 'j_number', 'iban', 'address']

        error_messages = {
            'name': {'required': 'Name is required', 'max_length': 'Name is too long (max 200 characters)'},
        }


def _string_list(value, label):
    if value in (None, ''):
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValidationError(f'{label} must be a list of strings')
    return [item.strip() for item in value if item.strip()]


class PersonForm(forms.ModelForm):
    class Meta:
        model = Person
        fields = ['name', 'job_title', 'emails', 'phones', 'source', 'company']

        error_messages = {
            'name': {'required': 'Name is required'},
        }

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)

        self.fields['company'].queryset = Company.objects.filter(agency=self.agency)

    def clean_emails(self):
        emails = _string_list(self.cleaned_data.get('emails'), 'Emails')
        validator = forms.EmailField()
        for email in emails:
            validator.clean(email)
        return emails

    def clean_phones(self):
        return _string_list(self.cleaned_data.get('phones'), 'Phones')


class AssignCompanyForm(forms.Form):
    """company_id null detaches the person"""

    company_id = forms.ModelChoiceField(
        queryset=Company.objects.none(),
        required=False,
        error_messages={'invalid_choice': 'Company not found'},
    )

    def __init__(self, *args, **kwargs):
        self.agency = kwargs.pop('agency')
        super().__init__(*args, **kwargs)
        self.fields['company_id'].queryset = Company.objects.filter(agency=self.agency)
