"""
Effective rent of an offer group

Gross rent is the sum of area x unit price over the four space
categories. The coefficient prorates it over the lease term:

    OPTION_ONE  lease / (lease + incentive + early_access)
    OPTION_TWO  (lease - incentive - early_access) / lease

Any other option leaves the rent untouched (coefficient 1).
"""
from apps.properties.models import SPACE_CATEGORIES


OPTION_ONE = 'OPTION_ONE'
OPTION_TWO = 'OPTION_TWO'

PRICE_CALC_OPTION_CHOICES = [
    (OPTION_ONE, 'Lease / (lease + incentive + early access)'),
    (OPTION_TWO, '(Lease - incentive - early access) / lease'),
]


def _num(value):
    # None, 0, '' and NaN all count as zero
    if not value or value != value:
        return 0.0
    return float(value)


def calculate_effective_rent(warehouse_sqm=None, warehouse_rent_price=None,
                             office_sqm=None, office_rent_price=None,
                             sanitary_sqm=None, sanitary_rent_price=None,
                             others_sqm=None, others_rent_price=None,
                             lease_term_months=None, incentive_months=None,
                             early_access_months=None, price_calc_option=None):
    """
    Returns:
        dict with `total_rent`, `coefficient` and `effective_rent`

    Never raises. The coefficient is not clamped: OPTION_TWO goes negative
    when the concessions outlast the lease.
    """
    total_rent = (
        _num(warehouse_sqm) * _num(warehouse_rent_price)
        + _num(office_sqm) * _num(office_rent_price)
        + _num(sanitary_sqm) * _num(sanitary_rent_price)
        + _num(others_sqm) * _num(others_rent_price)
    )

    lease = _num(lease_term_months)
    incentive = _num(incentive_months)
    early_access = _num(early_access_months)

    coefficient = 1.0

    if price_calc_option == OPTION_ONE:
        denominator = lease + incentive + early_access
        coefficient = lease / denominator if denominator > 0 else 1.0
    elif price_calc_option == OPTION_TWO:
        numerator = lease - incentive - early_access
        coefficient = numerator / lease if lease > 0 else 1.0

    return {
        'total_rent': total_rent,
        'coefficient': coefficient,
        'effective_rent': total_rent * coefficient,
    }


def pricing_input(source):
    """Keyword arguments for calculate_effective_rent read off any object with the group's field names"""
    kwargs = {}
    for category in SPACE_CATEGORIES:
        kwargs[f'{category}_sqm'] = getattr(source, f'{category}_sqm', None)
        kwargs[f'{category}_rent_price'] = getattr(source, f'{category}_rent_price', None)
    for field in ('lease_term_months', 'incentive_months', 'early_access_months', 'price_calc_option'):
        kwargs[field] = getattr(source, field, None)
    return kwargs
