import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.conf import settings
from django.utils import timezone

from apps.properties.models import SPACE_CATEGORIES
from .pricing import PRICE_CALC_OPTION_CHOICES, calculate_effective_rent, pricing_input


logger = logging.getLogger(__name__)


class OfferQuerySet(models.QuerySet):

    def visible_to(self, user, agency):
        """Offers hang off deals, so they follow the deal's visibility"""
        from apps.deals.models import PropertyRequest

        return self.filter(request__in=PropertyRequest.objects.visible_to(user, agency))


class Offer(models.Model):
    """A set of proposed spaces sent to the client of a deal"""

    offer_code = models.CharField(max_length=255, unique=True)
    request = models.ForeignKey('deals.PropertyRequest', on_delete=models.CASCADE, related_name='offers')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='offers')
    company = models.ForeignKey('contacts.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='offers')
    person = models.ForeignKey('contacts.Person', on_delete=models.SET_NULL, null=True, blank=True, related_name='offers')

    # Snapshot of the request at the time the offer was made
    requested_sqm = models.FloatField(null=True, blank=True)
    requested_type = models.CharField(max_length=10, blank=True)
    requested_start_date = models.DateField(null=True, blank=True)
    requested_locations = models.JSONField(default=list, blank=True)

    downloadable = models.BooleanField(default=False)
    sent_at = models.DateTimeField(null=True, blank=True)
    feedback = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OfferQuerySet.as_manager()

    class Meta:
        ordering = ['-created_at']

    def __str__(self):
        return self.offer_code

    @classmethod
    def next_sequence(cls, deal):
        """Highest sequence used on the deal + 1, so deleted offers never free a number"""
        sequences = [
            int(code.rsplit('-', 1)[-1])
            for code in cls.objects.filter(request=deal).values_list('offer_code', flat=True)
            if code.rsplit('-', 1)[-1].isdigit()
        ]
        return max(sequences, default=0) + 1

    @classmethod
    def generate_code(cls, deal):
        """
        <company>-<first location>-<DD-MM-YYYY>-<sequence>

        The sequence numbers the offers made on the deal, starting at 1.
        Deals sharing a company and location on the same day can reach the
        same prefix, so a taken code moves on to the next free number.
        """
        company_name = deal.company.name if deal.company else 'NO-COMPANY'
        first_location = deal.locations.order_by('pk').first()
        location_name = first_location.name if first_location else 'NO-LOCATION'
        date_str = timezone.localdate().strftime('%d-%m-%Y')
        sequence = cls.next_sequence(deal)

        while True:
            code = f"{company_name}-{location_name}-{date_str}-{sequence:06d}"
            if not cls.objects.filter(offer_code=code).exists():
                return code
            sequence += 1

    @classmethod
    def create_for_request(cls, deal, user):
        from apps.deals.models import PropertyRequest

        with transaction.atomic():
            # Serializes code generation per deal
            PropertyRequest.objects.select_for_update().filter(pk=deal.pk).first()

            offer = cls.objects.create(
                offer_code=cls.generate_code(deal),
                request=deal,
                user=user,
                company_id=deal.company_id,
                person_id=deal.person_id,
                requested_sqm=deal.number_of_sqm,
                requested_type=deal.request_type or '',
                requested_start_date=deal.start_date,
                requested_locations=deal.get_location_names(),
            )

        logger.info(f"Offer {offer.offer_code} created for deal {deal.pk}")
        return offer

    def add_group(self, name, building, unit_ids):
        """
        Build a group from units of one building

        Areas are summed per space category and the rent prices become
        sqm-weighted averages over the units that have that category.

        Raises:
            ValidationError: a unit id is unknown or belongs to another building
        """
        unit_ids = list(unit_ids)
        units = list(building.units.filter(pk__in=unit_ids).order_by('pk'))

        if len(units) != len(unit_ids):
            raise ValidationError('Some unit IDs are invalid or do not belong to the specified building')

        group = OfferGroup(
            offer=self,
            building=building,
            name=name,
            address=building.address,
            latitude=building.latitude,
            longitude=building.longitude,
            docks=0,
            driveins=0,
        )

        for category in SPACE_CATEGORIES:
            total_sqm = 0
            weighted_price = 0
            for unit in units:
                sqm, rent_price = unit.get_space(category)
                if sqm:
                    weighted_price += (rent_price or 0) * sqm
                    total_sqm += sqm
            setattr(group, f'{category}_sqm', total_sqm)
            setattr(group, f'{category}_rent_price', weighted_price / total_sqm if total_sqm > 0 else 0)

        for unit in units:
            group.docks += unit.docks or 0
            group.driveins += unit.driveins or 0
        group.cross_dock = any(unit.cross_dock for unit in units)

        with transaction.atomic():
            group.save()
            GroupItem.objects.bulk_create([
                GroupItem(
                    offer_group=group,
                    unit=unit,
                    unit_name=unit.name,
                    warehouse_sqm=unit.warehouse_sqm,
                )
                for unit in units
            ])

        logger.info(f"Group '{name}' added to offer {self.offer_code} with {len(units)} unit(s)")
        return group

    def to_dict(self, include_groups=False):
        data = {
            'id': self.id,
            'offer_code': self.offer_code,
            'request': self.request.to_summary(),
            'user': self.user.to_summary(),
            'company': self.company.to_summary() if self.company else None,
            'person': self.person.to_summary() if self.person else None,
            'requested_sqm': self.requested_sqm,
            'requested_type': self.requested_type,
            'requested_start_date': self.requested_start_date.isoformat() if self.requested_start_date else None,
            'requested_locations': self.requested_locations,
            'downloadable': self.downloadable,
            'sent_at': self.sent_at.isoformat() if self.sent_at else None,
            'feedback': self.feedback,
            'created_at': self.created_at.isoformat(),
            'updated_at': self.updated_at.isoformat(),
        }
        if include_groups:
            data['groups'] = [group.to_dict() for group in self.groups.all()]
        return data


class OfferGroup(models.Model):
    """A lease terms package for one building inside an offer"""

    STATUS_CHOICES = [
        ('UNFINISHED', 'Unfinished'),
        ('READY', 'Ready'),
    ]

    offer = models.ForeignKey(Offer, on_delete=models.CASCADE, related_name='groups')
    building = models.ForeignKey('properties.Building', on_delete=models.PROTECT, related_name='offer_groups')
    name = models.CharField(max_length=200)
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='UNFINISHED')

    # Lease terms
    lease_term_months = models.PositiveIntegerField(null=True, blank=True)
    incentive_months = models.PositiveIntegerField(null=True, blank=True)
    early_access_months = models.PositiveIntegerField(null=True, blank=True)
    start_date = models.DateField(null=True, blank=True)
    price_calc_option = models.CharField(max_length=20, choices=PRICE_CALC_OPTION_CHOICES, null=True, blank=True)

    # Space categories (sqm and EUR/sqm/month)
    warehouse_sqm = models.FloatField(null=True, blank=True)
    warehouse_rent_price = models.FloatField(null=True, blank=True)
    office_sqm = models.FloatField(null=True, blank=True)
    office_rent_price = models.FloatField(null=True, blank=True)
    sanitary_sqm = models.FloatField(null=True, blank=True)
    sanitary_rent_price = models.FloatField(null=True, blank=True)
    others_sqm = models.FloatField(null=True, blank=True)
    others_rent_price = models.FloatField(null=True, blank=True)

    service_charge = models.FloatField(null=True, blank=True)
    service_charge_type = models.CharField(max_length=50, blank=True)

    docks = models.PositiveIntegerField(null=True, blank=True)
    driveins = models.PositiveIntegerField(null=True, blank=True)
    cross_dock = models.BooleanField(default=False)

    address = models.CharField(max_length=255, blank=True)
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    description = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['created_at']

    def __str__(self):
        return f"{self.offer.offer_code} / {self.name}"

    def get_pricing(self):
        """
        Effective rent of the group's current terms

        Out-of-range coefficients are reported, never corrected.
        """
        pricing = calculate_effective_rent(**pricing_input(self))
        pricing['coefficient_in_range'] = 0 <= pricing['coefficient'] <= 1

        if not pricing['coefficient_in_range']:
            logger.warning(
                f"Offer group {self.pk} has coefficient {pricing['coefficient']} "
                f"(lease={self.lease_term_months}, incentive={self.incentive_months}, "
                f"early_access={self.early_access_months}, option={self.price_calc_option})"
            )

        return pricing

    def to_dict(self):
        data = {
            'id': self.id,
            'offer_id': self.offer_id,
            'name': self.name,
            'status': self.status,
            'building': self.building.to_summary(),
            'lease_term_months': self.lease_term_months,
            'incentive_months': self.incentive_months,
            'early_access_months': self.early_access_months,
            'start_date': self.start_date.isoformat() if self.start_date else None,
            'price_calc_option': self.price_calc_option,
        }
        for category in SPACE_CATEGORIES:
            data[f'{category}_sqm'] = getattr(self, f'{category}_sqm')
            data[f'{category}_rent_price'] = getattr(self, f'{category}_rent_price')
        data.update({
            'service_charge': self.service_charge,
            'service_charge_type': self.service_charge_type,
            'docks': self.docks,
            'driveins': self.driveins,
            'cross_dock': self.cross_dock,
            'address': self.address,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'description': self.description,
            'items': [item.to_dict() for item in self.group_items.all()],
            'pricing': self.get_pricing(),
        })
        return data


class GroupItem(models.Model):
    """Snapshot of one unit proposed in a group"""

    offer_group = models.ForeignKey(OfferGroup, on_delete=models.CASCADE, related_name='group_items')
    unit = models.ForeignKey('properties.Unit', on_delete=models.CASCADE, related_name='group_items')
    unit_name = models.CharField(max_length=100)
    warehouse_sqm = models.FloatField(null=True, blank=True)

    class Meta:
        ordering = ['pk']

    def __str__(self):
        return self.unit_name

    def to_dict(self):
        return {
            'id': self.id,
            'unit_id': self.unit_id,
            'unit_name': self.unit_name,
            'warehouse_sqm': self.warehouse_sqm,
        }
