from django.http import JsonResponse
from django.views.decorators.http import require_GET

from apps.accounts.decorators import api_login_required, agency_required
from . import dashboard


@api_login_required
@agency_required
@require_GET
def kpis_view(request):
    """
    Headline numbers of the dashboard
    - Admin: whole agency
    - Broker: own deals only
    """
    return JsonResponse(dashboard.get_kpis(request.user, request.agency))


@api_login_required
@agency_required
@require_GET
def monthly_sales_view(request):
    return JsonResponse({'data': dashboard.get_monthly_sales(request.user, request.agency)})


@api_login_required
@agency_required
@require_GET
def pipeline_view(request):
    return JsonResponse({'data': dashboard.get_pipeline(request.user, request.agency)})


@api_login_required
@agency_required
@require_GET
def expiring_leases_view(request):
    return JsonResponse({'data': dashboard.get_expiring_leases(request.user, request.agency)})
