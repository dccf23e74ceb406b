"""
Effective Rent Tests
====================

Tests for calculate_effective_rent (no database).

Test Coverage:
1. Gross rent over the four space categories
2. OPTION_ONE / OPTION_TWO coefficients and their fallbacks
3. Missing and falsy inputs
4. Worked example from the leasing team

Run tests:
    python manage.py test apps.offers.tests.test_pricing
"""
import math
from types import SimpleNamespace

from django.test import SimpleTestCase

from apps.offers.pricing import (
    OPTION_ONE,
    OPTION_TWO,
    calculate_effective_rent,
    pricing_input,
)


class GrossRentTest(SimpleTestCase):

    def test_sums_area_times_price_over_all_categories(self):
        result = calculate_effective_rent(
            warehouse_sqm=1000, warehouse_rent_price=4,
            office_sqm=100, office_rent_price=8,
            sanitary_sqm=20, sanitary_rent_price=5,
            others_sqm=50, others_rent_price=2,
        )

        self.assertEqual(result['total_rent'], 1000 * 4 + 100 * 8 + 20 * 5 + 50 * 2)

    def test_missing_values_count_as_zero(self):
        result = calculate_effective_rent(warehouse_sqm=1000, office_rent_price=8)

        self.assertEqual(result['total_rent'], 0)
        self.assertEqual(result['coefficient'], 1)
        self.assertEqual(result['effective_rent'], 0)

    def test_falsy_values_count_as_zero(self):
        """None, 0, empty string and NaN never poison the total"""
        result = calculate_effective_rent(
            warehouse_sqm=500, warehouse_rent_price=3,
            office_sqm=None, office_rent_price=10,
            sanitary_sqm='', sanitary_rent_price=10,
            others_sqm=float('nan'), others_rent_price=10,
        )

        self.assertEqual(result['total_rent'], 1500)
        self.assertFalse(math.isnan(result['effective_rent']))

    def test_no_arguments_at_all(self):
        self.assertEqual(
            calculate_effective_rent(),
            {'total_rent': 0.0, 'coefficient': 1.0, 'effective_rent': 0.0},
        )

    def test_results_are_floats(self):
        result = calculate_effective_rent(warehouse_sqm=10, warehouse_rent_price=3)

        for value in result.values():
            self.assertIsInstance(value, float)


class CoefficientTest(SimpleTestCase):

    def test_option_one_prorates_over_extended_period(self):
        result = calculate_effective_rent(
            lease_term_months=10, incentive_months=2, early_access_months=0,
            price_calc_option=OPTION_ONE,
        )

        self.assertEqual(result['coefficient'], 10 / 12)
        self.assertAlmostEqual(result['coefficient'], 0.8333, places=4)

    def test_option_one_without_months_is_one(self):
        result = calculate_effective_rent(
            warehouse_sqm=100, warehouse_rent_price=5,
            price_calc_option=OPTION_ONE,
        )

        self.assertEqual(result['coefficient'], 1)
        self.assertEqual(result['effective_rent'], 500)

    def test_option_two_subtracts_concessions(self):
        result = calculate_effective_rent(
            lease_term_months=12, incentive_months=2, early_access_months=1,
            price_calc_option=OPTION_TWO,
        )

        self.assertEqual(result['coefficient'], 0.75)

    def test_option_two_without_lease_term_is_one(self):
        result = calculate_effective_rent(
            lease_term_months=0, incentive_months=3, early_access_months=1,
            price_calc_option=OPTION_TWO,
        )

        self.assertEqual(result['coefficient'], 1)

    def test_option_two_goes_negative_when_concessions_outlast_lease(self):
        """Not clamped: callers see the raw coefficient"""
        result = calculate_effective_rent(
            warehouse_sqm=100, warehouse_rent_price=5,
            lease_term_months=6, incentive_months=6, early_access_months=3,
            price_calc_option=OPTION_TWO,
        )

        self.assertEqual(result['coefficient'], -0.5)
        self.assertEqual(result['effective_rent'], -250)

    def test_unknown_or_missing_option_leaves_rent_untouched(self):
        for option in (None, '', 'OPTION_THREE', 'option_one'):
            with self.subTest(option=option):
                result = calculate_effective_rent(
                    warehouse_sqm=100, warehouse_rent_price=5,
                    lease_term_months=36, incentive_months=3,
                    price_calc_option=option,
                )
                self.assertEqual(result['coefficient'], 1)
                self.assertEqual(result['effective_rent'], result['total_rent'])

    def test_effective_rent_is_total_times_coefficient(self):
        cases = [
            dict(warehouse_sqm=1234.5, warehouse_rent_price=3.75, lease_term_months=60,
                 incentive_months=4, early_access_months=2, price_calc_option=OPTION_ONE),
            dict(office_sqm=333.3, office_rent_price=11.1, lease_term_months=7,
                 incentive_months=1, price_calc_option=OPTION_TWO),
            dict(others_sqm=10, others_rent_price=0.1),
        ]
        for kwargs in cases:
            with self.subTest(**kwargs):
                result = calculate_effective_rent(**kwargs)
                self.assertEqual(result['effective_rent'], result['total_rent'] * result['coefficient'])


class WorkedExampleTest(SimpleTestCase):

    def test_warehouse_with_office_option_one(self):
        result = calculate_effective_rent(
            warehouse_sqm=1000, warehouse_rent_price=4,
            office_sqm=100, office_rent_price=8,
            sanitary_sqm=0, others_sqm=0,
            lease_term_months=36, incentive_months=3, early_access_months=1,
            price_calc_option=OPTION_ONE,
        )

        self.assertEqual(result['total_rent'], 4800)
        self.assertEqual(result['coefficient'], 0.9)
        self.assertEqual(result['effective_rent'], 4320)


class PricingInputTest(SimpleTestCase):

    def test_reads_group_fields(self):
        group = SimpleNamespace(
            warehouse_sqm=1000, warehouse_rent_price=4,
            office_sqm=100, office_rent_price=8,
            sanitary_sqm=None, sanitary_rent_price=None,
            others_sqm=None, others_rent_price=None,
            lease_term_months=36, incentive_months=3, early_access_months=1,
            price_calc_option=OPTION_ONE,
        )

        self.assertEqual(calculate_effective_rent(**pricing_input(group))['effective_rent'], 4320)

    def test_missing_attributes_become_none(self):
        kwargs = pricing_input(SimpleNamespace(warehouse_sqm=5))

        self.assertEqual(kwargs['warehouse_sqm'], 5)
        self.assertIsNone(kwargs['price_calc_option'])
        self.assertIsNone(kwargs['others_rent_price'])
