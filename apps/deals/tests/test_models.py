"""
Deal Models Tests
=================

Comprehensive tests for PropertyRequest, Activity and Tenant.

Test Coverage:
1. PropertyRequest
   - Pipeline transitions (allowed and rejected)
   - LOST / ON_HOLD reasons, closed_at stamping
   - close_as_won and tenant creation
   - Delete guard

2. Signals
   - "Deal created" activity
   - Company/person open and closed counters

3. Tasks
   - flag_expiring_leases

Run tests:
    python manage.py test apps.deals.tests.test_models
"""

from unittest.mock import patch
from django.core.exceptions import ValidationError
from django.test import TestCase
from django.utils import timezone
from datetime import date, timedelta
from apps.core.models import Agency
from apps.accounts.models import User
from apps.contacts.models import Company, Person
from apps.properties.models import Building, Unit
from apps.deals.models import (
    PropertyRequest,
    Activity,
    Tenant,
    VALID_TRANSITIONS,
    STATUS_ORDER,
)
from apps.deals.tasks import flag_expiring_leases


class DealTestMixin:

    def setUp(self):
        """Setup test data before each test"""
        self.agency = Agency.objects.create(name='Test Agency')

        self.broker = User.objects.create_user(
            email='broker@test.com',
            password='testpass123',
            first_name='Andrei',
            last_name='Popescu',
            agency=self.agency,
        )

        self.company = Company.objects.create(agency=self.agency, name='Acme')
        self.person = Person.objects.create(agency=self.agency, name='Ion Pop', company=self.company)

        self.deal = PropertyRequest.objects.create(
            agency=self.agency,
            user=self.broker,
            company=self.company,
            person=self.person,
            name='Acme logistics hub',
            number_of_sqm=2000,
            estimated_fee_value=15000,
        )

        self.building = Building.objects.create(agency=self.agency, name='West Park A')
        self.unit_1 = Unit.objects.create(building=self.building, name='A1', warehouse_sqm=1000)
        self.unit_2 = Unit.objects.create(building=self.building, name='A2', warehouse_sqm=1000)

    def move(self, *statuses):
        for status in statuses:
            self.deal.change_status(status, user=self.broker)


class PipelineTransitionTest(DealTestMixin, TestCase):

    def test_new_deal_starts_as_new(self):
        self.assertEqual(self.deal.status, 'NEW')
        self.assertIsNone(self.deal.closed_at)

    def test_every_listed_transition_is_accepted(self):
        for from_status, targets in VALID_TRANSITIONS.items():
            for to_status in targets:
                with self.subTest(from_status=from_status, to_status=to_status):
                    deal = PropertyRequest.objects.create(
                        agency=self.agency, user=self.broker, name='t', status=from_status,
                    )
                    deal.change_status(to_status, lost_reason='Budget')
                    self.assertEqual(deal.status, to_status)

    def test_unlisted_transitions_are_rejected(self):
        for from_status in STATUS_ORDER:
            for to_status in STATUS_ORDER:
                if to_status in VALID_TRANSITIONS[from_status]:
                    continue
                with self.subTest(from_status=from_status, to_status=to_status):
                    deal = PropertyRequest.objects.create(
                        agency=self.agency, user=self.broker, name='t', status=from_status,
                    )
                    with self.assertRaises(ValidationError):
                        deal.change_status(to_status, lost_reason='Budget')
                    deal.refresh_from_db()
                    self.assertEqual(deal.status, from_status)

    def test_lost_requires_reason(self):
        with self.assertRaises(ValidationError):
            self.deal.change_status('LOST')

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.status, 'NEW')

    def test_lost_records_reason_and_closes(self):
        self.deal.change_status('LOST', user=self.broker, lost_reason='Went with competitor')

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.lost_reason, 'Went with competitor')
        self.assertIsNotNone(self.deal.closed_at)
        self.assertIsNotNone(self.deal.last_status_change)

    def test_on_hold_records_reason(self):
        self.deal.change_status('ON_HOLD', hold_reason='Board approval')

        self.assertEqual(self.deal.hold_reason, 'Board approval')
        self.assertIsNone(self.deal.closed_at)

    def test_terminal_deal_cannot_move(self):
        self.deal.change_status('LOST', lost_reason='Budget')

        with self.assertRaises(ValidationError) as ctx:
            self.deal.change_status('NEW')

        self.assertIn('terminal', ctx.exception.messages[0])

    def test_status_change_logs_system_activity(self):
        self.move('OFFERING')

        activity = self.deal.activities.filter(is_system=True).exclude(title='Deal created').get()
        self.assertEqual(activity.title, 'Status: NEW → OFFERING')
        self.assertEqual(activity.activity_type, 'NOTE')
        self.assertTrue(activity.done)
        self.assertEqual(activity.user, self.broker)

    @patch('apps.deals.models.Activity.log_system')
    def test_status_rolled_back_when_timeline_entry_fails(self, mock_log):
        """Status and its timeline entry are saved together or not at all"""
        mock_log.side_effect = RuntimeError('activity insert failed')

        with self.assertRaises(RuntimeError):
            self.deal.change_status('OFFERING', user=self.broker)

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.status, 'NEW')
        self.assertIsNone(self.deal.last_status_change)

    def test_lost_activity_mentions_reason(self):
        self.deal.change_status('LOST', lost_reason='Budget cut')

        self.assertTrue(
            self.deal.activities.filter(title='Status: NEW → LOST (Budget cut)').exists()
        )


class CloseAsWonTest(DealTestMixin, TestCase):

    def close(self, **overrides):
        kwargs = dict(
            user=self.broker,
            agreed_price=4.2,
            actual_fee=18000,
            signed_date=date(2026, 5, 10),
            contract_start_date=date(2026, 6, 1),
            contract_end_date=date(2031, 5, 31),
            won_building=self.building,
            won_units=[self.unit_1, self.unit_2],
        )
        kwargs.update(overrides)
        self.deal.close_as_won(**kwargs)

    def test_close_from_negotiation(self):
        self.move('OFFERING', 'NEGOTIATION')

        self.close()

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.status, 'WON')
        self.assertIsNotNone(self.deal.closed_at)
        self.assertEqual(self.deal.agreed_price, 4.2)
        self.assertEqual(self.deal.won_building, self.building)
        self.assertEqual(self.deal.won_unit_ids, [self.unit_1.pk, self.unit_2.pk])

    def test_close_creates_one_tenant_per_unit(self):
        self.move('OFFERING', 'NEGOTIATION', 'HOT_SIGNED')

        self.close()

        tenants = Tenant.objects.filter(deal=self.deal)
        self.assertEqual(tenants.count(), 2)
        for tenant in tenants:
            self.assertEqual(tenant.company, self.company)
            self.assertEqual(tenant.start_date, date(2026, 6, 1))
            self.assertEqual(tenant.end_date, date(2031, 5, 31))

    def test_no_tenants_without_end_date(self):
        self.move('OFFERING', 'NEGOTIATION')

        self.close(contract_end_date=None)

        self.assertFalse(Tenant.objects.exists())

    def test_no_tenants_without_company(self):
        self.deal.company = None
        self.deal.save()
        self.move('OFFERING', 'NEGOTIATION')

        self.close()

        self.assertFalse(Tenant.objects.exists())

    def test_cannot_close_from_early_stage(self):
        self.move('OFFERING')

        with self.assertRaises(ValidationError):
            self.close()

        self.deal.refresh_from_db()
        self.assertEqual(self.deal.status, 'OFFERING')
        self.assertFalse(Tenant.objects.exists())

    def test_close_logs_activity(self):
        self.move('OFFERING', 'NEGOTIATION')

        self.close()

        self.assertTrue(self.deal.activities.filter(title__startswith='Deal won!').exists())


class DealSignalsTest(DealTestMixin, TestCase):

    def test_creation_logs_activity(self):
        activity = self.deal.activities.get()

        self.assertEqual(activity.title, 'Deal created')
        self.assertTrue(activity.is_system)

    def test_counters_follow_deal_lifecycle(self):
        self.company.refresh_from_db()
        self.person.refresh_from_db()
        self.assertEqual((self.company.open_deals, self.company.closed_deals), (1, 0))
        self.assertEqual((self.person.open_deals, self.person.closed_deals), (1, 0))

        self.deal.change_status('LOST', lost_reason='Budget')

        self.company.refresh_from_db()
        self.person.refresh_from_db()
        self.assertEqual((self.company.open_deals, self.company.closed_deals), (0, 1))
        self.assertEqual((self.person.open_deals, self.person.closed_deals), (0, 1))

    def test_counters_move_with_company_change(self):
        other = Company.objects.create(agency=self.agency, name='Other')

        self.deal.company = other
        self.deal.save()

        self.company.refresh_from_db()
        other.refresh_from_db()
        self.assertEqual(self.company.open_deals, 0)
        self.assertEqual(other.open_deals, 1)

    def test_counters_after_delete(self):
        self.deal.delete()

        self.company.refresh_from_db()
        self.assertEqual(self.company.open_deals, 0)

    def test_delete_allowed_without_offers(self):
        self.deal.check_can_delete()


class FlagExpiringLeasesTaskTest(DealTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        today = timezone.localdate()
        self.soon = Tenant.objects.create(
            unit=self.unit_1, company=self.company, deal=self.deal,
            start_date=today - timedelta(days=1000), end_date=today + timedelta(days=30),
        )
        other_deal = PropertyRequest.objects.create(agency=self.agency, user=self.broker, name='Far lease')
        self.far = Tenant.objects.create(
            unit=self.unit_2, company=self.company, deal=other_deal,
            start_date=today, end_date=today + timedelta(days=300),
        )

    def test_reminder_created_for_lease_inside_window(self):
        result = flag_expiring_leases()

        self.assertEqual(result, '1 lease reminders created.')
        reminder = Activity.objects.get(activity_type='TASK')
        self.assertEqual(reminder.request, self.deal)
        self.assertFalse(reminder.done)
        self.assertTrue(reminder.title.startswith('Lease expiring on'))

    def test_reminder_not_duplicated(self):
        flag_expiring_leases()
        result = flag_expiring_leases()

        self.assertEqual(result, '0 lease reminders created.')
        self.assertEqual(Activity.objects.filter(activity_type='TASK').count(), 1)
