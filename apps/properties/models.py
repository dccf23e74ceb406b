from django.db import models
from django.conf import settings


# The four space categories a unit (and an offer group) is priced by
SPACE_CATEGORIES = ('warehouse', 'office', 'sanitary', 'others')

TRANSACTION_TYPE_CHOICES = [
    ('RENT', 'Rent'),
    ('SALE', 'Sale'),
]


class Location(models.Model):

    name = models.CharField(max_length=120, help_text='City or logistics hub (e.g. Chiajna)')
    county = models.CharField(max_length=120, help_text='County (e.g. Ilfov)')

    class Meta:
        ordering = ['name']
        unique_together = ['name', 'county']

    def __str__(self):
        return f"{self.name}, {self.county}"


class Building(models.Model):

    agency = models.ForeignKey('core.Agency', on_delete=models.CASCADE, related_name='buildings')
    name = models.CharField(max_length=200)
    property_code = models.CharField(max_length=50, blank=True, db_index=True)
    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPE_CHOICES, default='RENT')

    # Position
    address = models.CharField(max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    location = models.ForeignKey(Location, on_delete=models.SET_NULL, null=True, blank=True, related_name='buildings')

    # Commercial
    total_sqm = models.FloatField(null=True, blank=True)
    available_sqm = models.FloatField(null=True, blank=True)
    service_charge = models.FloatField(null=True, blank=True, help_text='EUR/sqm/month')
    available_from = models.DateField(null=True, blank=True)
    min_contract_years = models.PositiveIntegerField(null=True, blank=True)
    description = models.TextField(blank=True)

    # Technical
    clear_height = models.FloatField(null=True, blank=True, help_text='Meters')
    floor_loading = models.FloatField(null=True, blank=True, help_text='t/sqm')
    sprinkler = models.BooleanField(default=False)

    developer = models.ForeignKey('contacts.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='developed_buildings')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='buildings')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        indexes = [
            models.Index(fields=['agency', 'transaction_type'], name='building_agency_type_idx'),
        ]

    def __str__(self):
        return self.name

    def to_summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'location': str(self.location) if self.location else None,
        }


class Unit(models.Model):

    building = models.ForeignKey(Building, on_delete=models.CASCADE, related_name='units')
    name = models.CharField(max_length=100)
    transaction_type = models.CharField(max_length=10, choices=TRANSACTION_TYPE_CHOICES, default='RENT')

    # Space categories: area (sqm) and asking rent (EUR/sqm/month)
    warehouse_sqm = models.FloatField(null=True, blank=True)
    warehouse_rent_price = models.FloatField(null=True, blank=True)
    office_sqm = models.FloatField(null=True, blank=True)
    office_rent_price = models.FloatField(null=True, blank=True)
    sanitary_sqm = models.FloatField(null=True, blank=True)
    sanitary_rent_price = models.FloatField(null=True, blank=True)
    others_sqm = models.FloatField(null=True, blank=True)
    others_rent_price = models.FloatField(null=True, blank=True)

    # Loading
    docks = models.PositiveIntegerField(null=True, blank=True)
    driveins = models.PositiveIntegerField(null=True, blank=True)
    cross_dock = models.BooleanField(default=False)

    useful_height = models.FloatField(null=True, blank=True)
    service_charge = models.FloatField(null=True, blank=True)
    available_from = models.DateField(null=True, blank=True)
    sale_price = models.FloatField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['building', 'name']

    def __str__(self):
        return f"{self.building.name} / {self.name}"

    def get_space(self, category):
        """Returns (sqm, rent_price) of one space category, None when unset"""
        return (
            getattr(self, f'{category}_sqm'),
            getattr(self, f'{category}_rent_price'),
        )

    def get_total_sqm(self):
        return sum(self.get_space(category)[0] or 0 for category in SPACE_CATEGORIES)

    def to_summary(self):
        data = {'id': self.id, 'name': self.name, 'building_id': self.building_id}
        for category in SPACE_CATEGORIES:
            sqm, rent_price = self.get_space(category)
            data[f'{category}_sqm'] = sqm
            data[f'{category}_rent_price'] = rent_price
        return data
