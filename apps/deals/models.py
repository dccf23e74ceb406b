import logging

from django.core.exceptions import ValidationError
from django.db import models, transaction
from django.db.models import Q
from django.conf import settings
from django.utils import timezone
from taggit.managers import TaggableManager

from apps.properties.models import TRANSACTION_TYPE_CHOICES


logger = logging.getLogger(__name__)


STATUS_CHOICES = [
    ('NEW', 'New'),
    ('OFFERING', 'Offering'),
    ('TOUR', 'Tour'),
    ('SHORTLIST', 'Shortlist'),
    ('NEGOTIATION', 'Negotiation'),
    ('HOT_SIGNED', 'Hot Signed'),
    ('ON_HOLD', 'On Hold'),
    ('WON', 'Won'),
    ('LOST', 'Lost'),
]

# Pipeline order == declaration order
STATUS_ORDER = [value for value, _label in STATUS_CHOICES]

TERMINAL_STATUSES = ['WON', 'LOST']

VALID_TRANSITIONS = {
    'NEW': ['OFFERING', 'LOST', 'ON_HOLD'],
    'OFFERING': ['TOUR', 'SHORTLIST', 'NEGOTIATION', 'LOST', 'ON_HOLD'],
    'TOUR': ['SHORTLIST', 'NEGOTIATION', 'LOST', 'ON_HOLD'],
    'SHORTLIST': ['NEGOTIATION', 'TOUR', 'LOST', 'ON_HOLD'],
    'NEGOTIATION': ['HOT_SIGNED', 'WON', 'LOST', 'ON_HOLD'],
    'HOT_SIGNED': ['WON', 'LOST', 'ON_HOLD', 'NEGOTIATION'],
    'ON_HOLD': ['NEW', 'OFFERING', 'TOUR', 'SHORTLIST', 'NEGOTIATION', 'HOT_SIGNED', 'LOST'],
    'WON': [],
    'LOST': [],
}

# A deal can only be closed as won from these
CLOSABLE_STATUSES = ['NEGOTIATION', 'HOT_SIGNED']


class PropertyRequestQuerySet(models.QuerySet):

    def active(self):
        return self.exclude(status__in=TERMINAL_STATUSES)

    def closed(self):
        return self.filter(status__in=TERMINAL_STATUSES)

    def visible_to(self, user, agency):
        """Admins see the whole agency, brokers only their own deals"""
        qs = self.filter(agency=agency)
        if not user.is_admin():
            qs = qs.filter(user=user)
        return qs


class PropertyRequest(models.Model):
    """A client's space request, tracked through the deal pipeline"""

    agency = models.ForeignKey('core.Agency', on_delete=models.CASCADE, related_name='requests')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.PROTECT, related_name='requests', help_text='Broker responsible for the deal')
    company = models.ForeignKey('contacts.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='requests')
    person = models.ForeignKey('contacts.Person', on_delete=models.SET_NULL, null=True, blank=True, related_name='requests')
    locations = models.ManyToManyField('properties.Location', blank=True, related_name='requests')

    # Requirements
    name = models.CharField(max_length=200)
    request_type = models.CharField(max_length=10, choices=TRANSACTION_TYPE_CHOICES, null=True, blank=True)
    number_of_sqm = models.FloatField(null=True, blank=True)
    min_height = models.FloatField(null=True, blank=True)
    estimated_fee_value = models.FloatField(null=True, blank=True, help_text='Expected brokerage fee (EUR)')
    contract_period = models.PositiveIntegerField(null=True, blank=True, help_text='Months')
    break_option_after = models.PositiveIntegerField(null=True, blank=True, help_text='Months')
    start_date = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    tags = TaggableManager(blank=True)

    # Pipeline
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default='NEW', db_index=True)
    lost_reason = models.TextField(blank=True)
    hold_reason = models.TextField(blank=True)
    last_status_change = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True, db_index=True)

    # Closure (won deals)
    agreed_price = models.FloatField(null=True, blank=True)
    actual_fee = models.FloatField(null=True, blank=True)
    signed_date = models.DateField(null=True, blank=True)
    contract_start_date = models.DateField(null=True, blank=True)
    contract_end_date = models.DateField(null=True, blank=True)
    won_building = models.ForeignKey('properties.Building', on_delete=models.SET_NULL, null=True, blank=True, related_name='won_requests')
    won_unit_ids = models.JSONField(default=list, blank=True)
    closure_notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = PropertyRequestQuerySet.as_manager()

    class Meta:
        verbose_name = 'Property Request'
        verbose_name_plural = 'Property Requests'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['agency', 'status'], name='request_agency_status_idx'),
            models.Index(fields=['user', 'status'], name='request_user_status_idx'),
        ]

    def __str__(self):
        return f"{self.name} - {self.get_status_display()}"

    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    def can_transition_to(self, new_status):
        return new_status in VALID_TRANSITIONS.get(self.status, [])

    def change_status(self, new_status, user=None, lost_reason='', hold_reason=''):
        """
        Move the deal through the pipeline

        Raises:
            ValidationError: terminal deal, illegal transition,
                or LOST without a reason
        """
        if self.is_terminal():
            raise ValidationError(f'Request is already in terminal status: {self.status}')

        if not self.can_transition_to(new_status):
            raise ValidationError(f'Cannot move from {self.status} to {new_status}')

        if new_status == 'LOST' and not lost_reason:
            raise ValidationError('lost_reason is required when setting status to LOST')

        old_status = self.status
        now = timezone.now()

        title = f'Status: {old_status} → {new_status}'
        if new_status == 'LOST':
            title = f'{title} ({lost_reason})'

        with transaction.atomic():
            self.status = new_status
            self.last_status_change = now
            if new_status == 'LOST':
                self.lost_reason = lost_reason
            if new_status == 'ON_HOLD':
                self.hold_reason = hold_reason
            if new_status in TERMINAL_STATUSES:
                self.closed_at = now
            self.save()

            Activity.log_system(
                self,
                title=title,
                user=user,
                notes=lost_reason if new_status == 'LOST' else '',
            )

        logger.info(f"Deal {self.pk} moved from {old_status} to {new_status}")

    def close_as_won(self, user, agreed_price, actual_fee, signed_date, contract_start_date,
                     won_building, won_units, contract_end_date=None, closure_notes=''):
        """
        Finalize a deal in NEGOTIATION or HOT_SIGNED as WON

        Creates one Tenant per won unit when the deal has a company
        and a contract end date.
        """
        if self.status not in CLOSABLE_STATUSES:
            raise ValidationError('The deal must be in NEGOTIATION or HOT_SIGNED to be closed')

        now = timezone.now()

        with transaction.atomic():
            self.status = 'WON'
            self.closed_at = now
            self.last_status_change = now
            self.agreed_price = agreed_price
            self.actual_fee = actual_fee
            self.signed_date = signed_date
            self.contract_start_date = contract_start_date
            self.contract_end_date = contract_end_date
            self.won_building = won_building
            self.won_unit_ids = [unit.pk for unit in won_units]
            self.closure_notes = closure_notes
            self.save()

            if self.company_id and contract_end_date and won_units:
                Tenant.objects.bulk_create([
                    Tenant(
                        unit=unit,
                        company_id=self.company_id,
                        deal=self,
                        start_date=contract_start_date,
                        end_date=contract_end_date,
                    )
                    for unit in won_units
                ])

            Activity.log_system(
                self,
                title=f'Deal won! Price: {agreed_price}€, Fee: {actual_fee}€',
                user=user,
            )

        logger.info(f"Deal {self.pk} closed as WON by {user}")

    def reassign(self, new_user, by_user=None):
        """Hand the deal to another broker of the same agency"""
        if new_user.agency_id != self.agency_id or not new_user.is_active:
            raise ValidationError('The new owner must be an active user of the same agency')

        if new_user.pk == self.user_id:
            return

        old_user = self.user

        with transaction.atomic():
            self.user = new_user
            self.save(update_fields=['user', 'updated_at'])

            Activity.log_system(
                self,
                title=f'Reassigned from {old_user.get_full_name()} to {new_user.get_full_name()}',
                user=by_user,
            )

        logger.info(f"Deal {self.pk} reassigned from user {old_user.pk} to user {new_user.pk}")

    def check_can_delete(self):
        if self.offers.exists():
            raise ValidationError('Cannot delete request with attached offers. Remove offers first.')

    def get_location_names(self):
        return [location.name for location in self.locations.all()]

    def to_summary(self):
        return {
            'id': self.id,
            'name': self.name,
            'status': self.status,
            'status_display': self.get_status_display(),
        }


def recalculate_deal_counts(company_id=None, person_id=None):
    """Recompute open/closed deal counters of a Company and/or Person"""
    from apps.contacts.models import Company, Person

    if company_id:
        deals = PropertyRequest.objects.filter(company_id=company_id)
        Company.objects.filter(pk=company_id).update(
            open_deals=deals.active().count(),
            closed_deals=deals.closed().count(),
        )

    if person_id:
        deals = PropertyRequest.objects.filter(person_id=person_id)
        Person.objects.filter(pk=person_id).update(
            open_deals=deals.active().count(),
            closed_deals=deals.closed().count(),
        )


class ActivityQuerySet(models.QuerySet):

    def visible_to(self, user, agency):
        """Admins see the agency's timeline, brokers their own entries and those on their deals"""
        if user.is_admin():
            return self.filter(Q(user__agency=agency) | Q(request__agency=agency))
        return self.filter(Q(user=user) | Q(request__user=user, request__agency=agency))

    def open(self):
        return self.filter(done=False)


class Activity(models.Model):

    ACTIVITY_TYPE_CHOICES = [
        ('CALL', 'Call'),
        ('EMAIL', 'Email'),
        ('MEETING', 'Meeting'),
        ('TOUR', 'Tour'),
        ('NOTE', 'Note'),
        ('TASK', 'Task'),
    ]

    request = models.ForeignKey(PropertyRequest, on_delete=models.CASCADE, null=True, blank=True, related_name='activities')
    company = models.ForeignKey('contacts.Company', on_delete=models.SET_NULL, null=True, blank=True, related_name='activities')
    persons = models.ManyToManyField('contacts.Person', blank=True, related_name='activities')
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='activities', help_text='Who performed (or owns) this activity')

    activity_type = models.CharField(max_length=20, choices=ACTIVITY_TYPE_CHOICES, default='NOTE')
    title = models.CharField(max_length=255)
    date = models.DateField(default=timezone.localdate)
    time = models.TimeField(null=True, blank=True)
    duration = models.PositiveIntegerField(null=True, blank=True, help_text='Minutes')
    done = models.BooleanField(default=False)
    is_system = models.BooleanField(default=False, help_text='Generated by the CRM, not by a broker')
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ActivityQuerySet.as_manager()

    class Meta:
        verbose_name = 'Activity'
        verbose_name_plural = 'Activities'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['request', '-created_at'], name='activity_request_created_idx'),
            models.Index(fields=['user', 'done'], name='activity_user_done_idx'),
        ]

    def __str__(self):
        user_name = self.user.get_full_name() if self.user else 'System'
        return f"{user_name}: {self.title}"

    @classmethod
    def log_system(cls, deal, title, user=None, notes='', activity_type='NOTE'):
        """Record a CRM-generated entry on a deal's timeline"""
        return cls.objects.create(
            request=deal,
            company_id=deal.company_id,
            user=user or deal.user,
            activity_type=activity_type,
            title=title,
            notes=notes,
            done=activity_type == 'NOTE',
            is_system=True,
        )


class Tenant(models.Model):
    """A company occupying a unit under a signed lease"""

    unit = models.ForeignKey('properties.Unit', on_delete=models.CASCADE, related_name='tenants')
    company = models.ForeignKey('contacts.Company', on_delete=models.CASCADE, related_name='leases')
    deal = models.ForeignKey(PropertyRequest, on_delete=models.SET_NULL, null=True, blank=True, related_name='tenants')
    start_date = models.DateField()
    end_date = models.DateField(db_index=True)

    class Meta:
        ordering = ['end_date']

    def __str__(self):
        return f"{self.company} @ {self.unit} until {self.end_date}"
