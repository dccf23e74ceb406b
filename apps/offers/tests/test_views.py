"""
Offer Views Tests
=================

Test Coverage:
1. offer_list_view (list + create)
2. offer_detail_view (detail + delete)
3. offers_by_request_view
4. offer_group_create_view
5. offer_group_detail_view (detail + update + delete)

Run tests:
    python manage.py test apps.offers.tests.test_views
"""

from django.test import TestCase, Client
from django.urls import reverse
from django.contrib.auth import get_user_model
from apps.core.models import Agency
from apps.contacts.models import Company
from apps.properties.models import Location, Building, Unit
from apps.deals.models import PropertyRequest
from apps.offers.models import Offer, OfferGroup
import json

User = get_user_model()


class OfferViewTestMixin:

    def setUp(self):
        self.client = Client()

        self.agency = Agency.objects.create(name='Test Agency')
        self.other_agency = Agency.objects.create(name='Other Agency')

        self.broker = User.objects.create_user(
            email='broker@test.com',
            password='testpass123',
            first_name='Andrei',
            agency=self.agency,
        )
        self.other_broker = User.objects.create_user(
            email='broker2@test.com',
            password='testpass123',
            first_name='Maria',
            agency=self.agency,
        )
        self.admin = User.objects.create_user(
            email='admin@test.com',
            password='testpass123',
            first_name='Admin',
            agency=self.agency,
            role='ADMIN',
        )

        self.company = Company.objects.create(agency=self.agency, name='Acme')
        self.location = Location.objects.create(name='Chiajna', county='Ilfov')

        self.deal = PropertyRequest.objects.create(
            agency=self.agency,
            user=self.broker,
            company=self.company,
            name='Acme logistics hub',
            number_of_sqm=1100,
        )
        self.deal.locations.add(self.location)

        self.building = Building.objects.create(agency=self.agency, name='West Park A', address='A1 km 13')
        self.unit_1 = Unit.objects.create(
            building=self.building, name='A1',
            warehouse_sqm=1000, warehouse_rent_price=4,
            office_sqm=100, office_rent_price=8,
        )
        self.unit_2 = Unit.objects.create(
            building=self.building, name='A2',
            warehouse_sqm=500, warehouse_rent_price=5,
        )

    def post_json(self, url, data):
        return self.client.post(url, data=json.dumps(data), content_type='application/json')


class OfferListViewTest(OfferViewTestMixin, TestCase):

    def test_requires_login(self):
        response = self.client.get(reverse('offers:offer_list'))

        self.assertEqual(response.status_code, 401)

    def test_create_offer(self):
        self.client.force_login(self.broker)

        response = self.post_json(reverse('offers:offer_list'), {'request_id': self.deal.pk})

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertTrue(data['offer_code'].startswith('Acme-Chiajna-'))
        self.assertEqual(data['requested_sqm'], 1100)
        self.assertEqual(data['request']['id'], self.deal.pk)

    def test_cannot_create_offer_for_foreign_deal(self):
        foreign_broker = User.objects.create_user(email='x@other.com', password='x', agency=self.other_agency)
        foreign_deal = PropertyRequest.objects.create(agency=self.other_agency, user=foreign_broker, name='Foreign')
        self.client.force_login(self.broker)

        response = self.post_json(reverse('offers:offer_list'), {'request_id': foreign_deal.pk})

        self.assertEqual(response.status_code, 400)
        self.assertIn('request_id', response.json()['errors'])
        self.assertFalse(Offer.objects.exists())

    def test_invalid_json(self):
        self.client.force_login(self.broker)

        response = self.client.post(reverse('offers:offer_list'), data='{not json', content_type='application/json')

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'Invalid JSON format')

    def test_list_is_paginated(self):
        for _ in range(3):
            Offer.create_for_request(self.deal, self.broker)
        self.client.force_login(self.broker)

        response = self.client.get(reverse('offers:offer_list'), {'limit': 2})

        data = response.json()
        self.assertEqual(len(data['data']), 2)
        self.assertEqual(data['meta'], {'total': 3, 'page': 1, 'limit': 2, 'total_pages': 2})

    def test_broker_only_sees_offers_of_own_deals(self):
        Offer.create_for_request(self.deal, self.broker)

        self.client.force_login(self.other_broker)
        response = self.client.get(reverse('offers:offer_list'))
        self.assertEqual(response.json()['meta']['total'], 0)

        self.client.force_login(self.admin)
        response = self.client.get(reverse('offers:offer_list'))
        self.assertEqual(response.json()['meta']['total'], 1)


class OfferDetailViewTest(OfferViewTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.offer = Offer.create_for_request(self.deal, self.broker)
        self.offer.add_group('Option A', self.building, [self.unit_1.pk])

    def test_detail_includes_groups_with_pricing(self):
        self.client.force_login(self.broker)

        response = self.client.get(reverse('offers:offer_detail', args=[self.offer.pk]))

        self.assertEqual(response.status_code, 200)
        groups = response.json()['groups']
        self.assertEqual(len(groups), 1)
        self.assertEqual(groups[0]['pricing']['total_rent'], 4800)
        self.assertEqual(groups[0]['items'][0]['unit_name'], 'A1')

    def test_other_broker_gets_404(self):
        self.client.force_login(self.other_broker)

        response = self.client.get(reverse('offers:offer_detail', args=[self.offer.pk]))

        self.assertEqual(response.status_code, 404)

    def test_delete_offer(self):
        self.client.force_login(self.broker)

        response = self.client.delete(reverse('offers:offer_detail', args=[self.offer.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(Offer.objects.exists())
        self.assertFalse(OfferGroup.objects.exists())

    def test_create_after_delete(self):
        Offer.create_for_request(self.deal, self.broker)
        self.client.force_login(self.broker)

        self.client.delete(reverse('offers:offer_detail', args=[self.offer.pk]))
        response = self.post_json(reverse('offers:offer_list'), {'request_id': self.deal.pk})

        self.assertEqual(response.status_code, 201)
        self.assertTrue(response.json()['offer_code'].endswith('-000003'))

    def test_update_offer_follow_up(self):
        self.client.force_login(self.broker)

        response = self.post_json(reverse('offers:offer_detail', args=[self.offer.pk]), {
            'feedback': 'Client liked option A',
            'sent_at': '2026-05-10T09:30:00+03:00',
            'downloadable': True,
        })

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['feedback'], 'Client liked option A')
        self.assertTrue(data['downloadable'])
        self.assertIsNotNone(data['sent_at'])
        self.assertEqual(len(data['groups']), 1)

    def test_update_keeps_offer_code_and_snapshot(self):
        code = self.offer.offer_code
        self.client.force_login(self.broker)

        response = self.post_json(reverse('offers:offer_detail', args=[self.offer.pk]), {
            'feedback': 'Waiting for board',
            'offer_code': 'HACKED',
            'requested_sqm': 1,
        })

        self.assertEqual(response.status_code, 200)
        self.offer.refresh_from_db()
        self.assertEqual(self.offer.offer_code, code)
        self.assertEqual(self.offer.requested_sqm, 1100)
        self.assertEqual(self.offer.feedback, 'Waiting for board')

    def test_offers_by_request(self):
        Offer.create_for_request(self.deal, self.broker)
        self.client.force_login(self.broker)

        response = self.client.get(reverse('offers:offers_by_request', args=[self.deal.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()['data']), 2)


class OfferGroupViewTest(OfferViewTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.offer = Offer.create_for_request(self.deal, self.broker)
        self.client.force_login(self.broker)

    def test_create_group(self):
        response = self.post_json(
            reverse('offers:offer_group_create', args=[self.offer.pk]),
            {'name': 'Option A', 'building_id': self.building.pk, 'unit_ids': [self.unit_1.pk, self.unit_2.pk]},
        )

        self.assertEqual(response.status_code, 201)
        data = response.json()
        self.assertEqual(data['warehouse_sqm'], 1500)
        self.assertEqual(data['warehouse_rent_price'], 6500 / 1500)
        self.assertEqual(len(data['items']), 2)
        self.assertEqual(data['pricing']['coefficient'], 1)

    def test_create_group_with_foreign_unit(self):
        other = Building.objects.create(agency=self.agency, name='East Park')
        foreign_unit = Unit.objects.create(building=other, name='E1')

        response = self.post_json(
            reverse('offers:offer_group_create', args=[self.offer.pk]),
            {'name': 'Option A', 'building_id': self.building.pk, 'unit_ids': [foreign_unit.pk]},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()['error'],
            'Some unit IDs are invalid or do not belong to the specified building',
        )

    def test_create_group_rejects_non_integer_unit_ids(self):
        response = self.post_json(
            reverse('offers:offer_group_create', args=[self.offer.pk]),
            {'name': 'Option A', 'building_id': self.building.pk, 'unit_ids': ['A1']},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('unit_ids', response.json()['errors'])

    def test_update_terms_recomputes_pricing(self):
        group = self.offer.add_group('Option A', self.building, [self.unit_1.pk])

        response = self.post_json(
            reverse('offers:offer_group_detail', args=[group.pk]),
            {
                'lease_term_months': 36,
                'incentive_months': 3,
                'early_access_months': 1,
                'price_calc_option': 'OPTION_ONE',
            },
        )

        self.assertEqual(response.status_code, 200)
        pricing = response.json()['pricing']
        self.assertEqual(pricing['total_rent'], 4800)
        self.assertEqual(pricing['coefficient'], 0.9)
        self.assertEqual(pricing['effective_rent'], 4320)

        # Fields missing from the payload keep their value
        group.refresh_from_db()
        self.assertEqual(group.name, 'Option A')
        self.assertEqual(group.warehouse_rent_price, 4)

    def test_update_status_and_price(self):
        group = self.offer.add_group('Option A', self.building, [self.unit_1.pk])

        response = self.post_json(
            reverse('offers:offer_group_detail', args=[group.pk]),
            {'status': 'READY', 'warehouse_rent_price': 4.25},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'READY')
        self.assertEqual(response.json()['pricing']['total_rent'], 1000 * 4.25 + 100 * 8)

    def test_update_rejects_unknown_option(self):
        group = self.offer.add_group('Option A', self.building, [self.unit_1.pk])

        response = self.post_json(
            reverse('offers:offer_group_detail', args=[group.pk]),
            {'price_calc_option': 'OPTION_THREE'},
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn('price_calc_option', response.json()['errors'])

    def test_delete_group(self):
        group = self.offer.add_group('Option A', self.building, [self.unit_1.pk])

        response = self.client.delete(reverse('offers:offer_group_detail', args=[group.pk]))

        self.assertEqual(response.status_code, 200)
        self.assertFalse(OfferGroup.objects.filter(pk=group.pk).exists())
