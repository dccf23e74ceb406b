import logging
from datetime import timedelta

from celery import shared_task
from django.conf import settings
from django.utils import timezone

from .models import Activity, Tenant


logger = logging.getLogger(__name__)


@shared_task
def flag_expiring_leases():
    """
    Put a renewal TASK on the deal of every lease ending inside the
    critical window, once per deal while the task is still open.
    """
    today = timezone.localdate()
    horizon = today + timedelta(days=settings.CRM_LEASE_CRITICAL_DAYS)

    tenants = Tenant.objects.filter(
        end_date__gte=today,
        end_date__lte=horizon,
        deal__isnull=False,
    ).select_related('deal', 'unit', 'company')

    reminders_created = 0

    for tenant in tenants:
        already_flagged = tenant.deal.activities.filter(
            activity_type='TASK',
            is_system=True,
            done=False,
            title__startswith='Lease expiring',
        ).exists()
        if already_flagged:
            continue

        Activity.log_system(
            tenant.deal,
            title=f'Lease expiring on {tenant.end_date:%Y-%m-%d}: {tenant.company} / {tenant.unit.name}',
            activity_type='TASK',
        )
        reminders_created += 1

    logger.info(f"Expiring lease check: {reminders_created} reminder(s) created")
    return f'{reminders_created} lease reminders created.'
