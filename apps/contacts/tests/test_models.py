"""
Contact Models Tests
====================

Test Coverage:
1. Summaries embedded in deal payloads
2. Deal counters on companies and persons

Run tests:
    python manage.py test apps.contacts.tests.test_models
"""

from django.test import TestCase
from apps.core.models import Agency
from apps.accounts.models import User
from apps.contacts.models import Company, Person
from apps.deals.models import PropertyRequest


class ContactTest(TestCase):

    def setUp(self):
        self.agency = Agency.objects.create(name='Test Agency')
        self.broker = User.objects.create_user(email='broker@test.com', password='testpass123', agency=self.agency)
        self.company = Company.objects.create(agency=self.agency, name='Acme')
        self.person = Person.objects.create(
            agency=self.agency, name='Ion Pop', company=self.company,
            emails=['ion@acme.ro'], phones=['+40 700 000 000'],
        )

    def test_summaries(self):
        self.assertEqual(self.company.to_summary(), {'id': self.company.pk, 'name': 'Acme'})
        self.assertEqual(self.person.to_summary()['emails'], ['ion@acme.ro'])

    def test_counters_start_at_zero(self):
        self.assertEqual((self.company.open_deals, self.company.closed_deals), (0, 0))

    def test_counters_count_open_and_closed_deals(self):
        PropertyRequest.objects.create(agency=self.agency, user=self.broker, company=self.company, name='One')
        lost = PropertyRequest.objects.create(agency=self.agency, user=self.broker, company=self.company, name='Two')
        lost.change_status('LOST', lost_reason='Budget')

        self.company.refresh_from_db()
        self.assertEqual((self.company.open_deals, self.company.closed_deals), (1, 1))

    def test_deleting_company_keeps_person(self):
        self.company.delete()

        self.person.refresh_from_db()
        self.assertIsNone(self.person.company)
