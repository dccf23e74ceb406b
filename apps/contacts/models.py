from django.db import models
from django.conf import settings


class Company(models.Model):
    """Client company: the tenant-to-be a deal is run for"""

    agency = models.ForeignKey('core.Agency', on_delete=models.CASCADE, related_name='companies', help_text='Agency that owns this contact')
    name = models.CharField(max_length=200, help_text='Legal name')
    vat_number = models.CharField(max_length=50, blank=True, help_text='Fiscal code / VAT number')
    j_number = models.CharField(max_length=50, blank=True, help_text='Trade register number')
    iban = models.CharField(max_length=50, blank=True)
    address = models.TextField(blank=True)

    # Kept in sync by the deal signals (recalculate_deal_counts)
    open_deals = models.PositiveIntegerField(default=0)
    closed_deals = models.PositiveIntegerField(default=0)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='companies', help_text='Broker who added this company')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Company'
        verbose_name_plural = 'Companies'
        ordering = ['name']
        indexes = [
            models.Index(fields=['agency', 'name'], name='company_agency_name_idx'),
        ]

    def __str__(self):
        return self.name

    def to_summary(self):
        return {'id': self.id, 'name': self.name}


class Person(models.Model):
    """Contact person, optionally working for a Company"""

    agency = models.ForeignKey('core.Agency', on_delete=models.CASCADE, related_name='persons')
    name = models.CharField(max_length=200)
    job_title = models.CharField(max_length=100, blank=True)
    emails = models.JSONField(default=list, blank=True, help_text='List of e-mail addresses')
    phones = models.JSONField(default=list, blank=True, help_text='List of phone numbers')
    source = models.CharField(max_length=100, blank=True, help_text='Where the contact came from')
    company = models.ForeignKey(Company, on_delete=models.SET_NULL, null=True, blank=True, related_name='persons')

    open_deals = models.PositiveIntegerField(default=0)
    closed_deals = models.PositiveIntegerField(default=0)

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='persons')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'Person'
        verbose_name_plural = 'Persons'
        ordering = ['name']

    def __str__(self):
        return self.name

    def to_summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'emails': self.emails,
            'phones': self.phones,
        }
