"""
Dashboard aggregations

Every function takes the requesting user and the agency:
- Admins: the whole agency
- Brokers: only their own deals (and the leases those deals produced)
"""
from dateutil.relativedelta import relativedelta
from django.conf import settings
from django.db.models import Count, Sum
from django.utils import timezone

from apps.deals.models import PropertyRequest, Tenant, STATUS_ORDER, TERMINAL_STATUSES


MONTH_LABELS = ['Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun', 'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec']


def _deals(user, agency):
    return PropertyRequest.objects.visible_to(user, agency)


def get_kpis(user, agency):
    active = _deals(user, agency).active()
    totals = active.aggregate(
        total_estimated_fee=Sum('estimated_fee_value'),
        total_sqm=Sum('number_of_sqm'),
    )

    return {
        'active_requests': active.count(),
        'total_estimated_fee': totals['total_estimated_fee'] or 0,
        'total_sqm': totals['total_sqm'] or 0,
        'closed_deals_count': _deals(user, agency).filter(status='WON').count(),
    }


def get_monthly_sales(user, agency):
    """Won and lost deals per month of the current year, by closing date"""
    year = timezone.localdate().year

    # __year/__month are evaluated in the current time zone
    counts = _deals(user, agency) \
        .filter(status__in=TERMINAL_STATUSES, closed_at__year=year) \
        .values('closed_at__month', 'status') \
        .annotate(count=Count('id')).order_by()

    count_map = {(item['closed_at__month'], item['status']): item['count'] for item in counts}

    return [
        {
            'month': label,
            'won': count_map.get((month, 'WON'), 0),
            'lost': count_map.get((month, 'LOST'), 0),
        }
        for month, label in enumerate(MONTH_LABELS, start=1)
    ]


def get_pipeline(user, agency):
    counts = _deals(user, agency).values('status').annotate(count=Count('id')).order_by()
    count_map = {item['status']: item['count'] for item in counts}

    return [{'status': status, 'count': count_map.get(status, 0)} for status in STATUS_ORDER]


def lease_priority(days_until_expiry):
    if days_until_expiry <= settings.CRM_LEASE_CRITICAL_DAYS:
        return 'critical'
    if days_until_expiry <= settings.CRM_LEASE_WARNING_DAYS:
        return 'warning'
    return 'normal'


def get_expiring_leases(user, agency):
    today = timezone.localdate()
    horizon = today + relativedelta(months=settings.CRM_EXPIRING_LEASE_MONTHS)

    # Whole dates: a lease ending today is still listed, with 0 days left
    tenants = Tenant.objects.filter(
        unit__building__agency=agency,
        end_date__gte=today,
        end_date__lte=horizon,
    ).select_related('company', 'unit__building__location').order_by('end_date')

    if not user.is_admin():
        tenants = tenants.filter(deal__user=user)

    leases = []
    for tenant in tenants:
        days_until_expiry = (tenant.end_date - today).days
        building = tenant.unit.building
        leases.append({
            'id': tenant.id,
            'company': tenant.company.to_summary(),
            'unit': {'id': tenant.unit.id, 'name': tenant.unit.name},
            'building': building.to_summary(),
            'start_date': tenant.start_date.isoformat(),
            'end_date': tenant.end_date.isoformat(),
            'days_until_expiry': days_until_expiry,
            'priority': lease_priority(days_until_expiry),
        })

    return leases
