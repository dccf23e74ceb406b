import logging

from django.core.exceptions import ValidationError
from django.db.models import Q
from django.http import JsonResponse, HttpResponse
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django.views.decorators.http import require_http_methods, require_POST, require_GET
import openpyxl
from openpyxl.styles import Font, PatternFill

from apps.accounts.decorators import api_login_required, agency_required, admin_required
from apps.core.utils import (
    parse_json_body, paginate, instance_form_data, form_errors, error_message, isoformat,
)
from .forms import PropertyRequestForm, StatusChangeForm, CloseDealForm, ReassignForm, ActivityForm
from .models import PropertyRequest, Activity, STATUS_ORDER


logger = logging.getLogger(__name__)


def serialize_deal(deal):
    return {
        'id': deal.id,
        'name': deal.name,
        'status': deal.status,
        'status_display': deal.get_status_display(),
        'request_type': deal.request_type,
        'number_of_sqm': deal.number_of_sqm,
        'min_height': deal.min_height,
        'estimated_fee_value': deal.estimated_fee_value,
        'contract_period': deal.contract_period,
        'break_option_after': deal.break_option_after,
        'start_date': isoformat(deal.start_date),
        'notes': deal.notes,
        'tags': list(deal.tags.names()),
        'lost_reason': deal.lost_reason,
        'hold_reason': deal.hold_reason,
        'closed_at': isoformat(deal.closed_at),
        'agreed_price': deal.agreed_price,
        'actual_fee': deal.actual_fee,
        'won_building_id': deal.won_building_id,
        'won_unit_ids': deal.won_unit_ids,
        'company': deal.company.to_summary() if deal.company else None,
        'person': deal.person.to_summary() if deal.person else None,
        'user': deal.user.to_summary(),
        'locations': [{'id': location.id, 'name': location.name} for location in deal.locations.all()],
        'created_at': isoformat(deal.created_at),
        'updated_at': isoformat(deal.updated_at),
    }


def serialize_activity(activity):
    return {
        'id': activity.id,
        'type': activity.activity_type,
        'title': activity.title,
        'date': isoformat(activity.date),
        'time': isoformat(activity.time),
        'duration': activity.duration,
        'done': activity.done,
        'is_system': activity.is_system,
        'notes': activity.notes,
        'request': activity.request.to_summary() if activity.request else None,
        'company': activity.company.to_summary() if activity.company else None,
        'persons': [person.to_summary() for person in activity.persons.all()],
        'user': activity.user.to_summary() if activity.user else None,
        'created_at': isoformat(activity.created_at),
    }


def _get_deal(request, pk):
    return get_object_or_404(
        PropertyRequest.objects.visible_to(request.user, request.agency)
        .select_related('company', 'person', 'user'),
        pk=pk,
    )


def _filtered_deals(request):
    deals = PropertyRequest.objects.visible_to(request.user, request.agency) \
        .select_related('company', 'person', 'user') \
        .prefetch_related('locations', 'tags')

    search_query = request.GET.get('search', '').strip()
    if search_query:
        deals = deals.filter(
            Q(name__icontains=search_query) |
            Q(company__name__icontains=search_query) |
            Q(person__name__icontains=search_query)
        )

    status = request.GET.get('status')
    if status in STATUS_ORDER:
        deals = deals.filter(status=status)

    request_type = request.GET.get('request_type')
    if request_type:
        deals = deals.filter(request_type=request_type)

    return deals.order_by('-created_at')


def _set_tags(deal, data):
    tags = data.get('tags')
    if isinstance(tags, list):
        deal.tags.set([str(tag) for tag in tags])


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def deal_list_view(request):
    if request.method == 'GET':
        return JsonResponse(paginate(_filtered_deals(request), request, serialize_deal))

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = PropertyRequestForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    deal = form.save(commit=False)
    deal.agency = request.agency
    deal.user = request.user
    deal.save()
    form.save_m2m()
    _set_tags(deal, data)

    logger.info(f"Deal {deal.pk} created by {request.user.email}")

    return JsonResponse(serialize_deal(deal), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def deal_detail_view(request, pk):
    deal = _get_deal(request, pk)

    if request.method == 'GET':
        data = serialize_deal(deal)
        data['activities'] = [
            serialize_activity(activity)
            for activity in deal.activities.select_related('request', 'company', 'user').prefetch_related('persons')
        ]
        data['offers'] = [
            {'id': offer.id, 'offer_code': offer.offer_code}
            for offer in deal.offers.all()
        ]
        return JsonResponse(data)

    if request.method == 'DELETE':
        try:
            deal.check_can_delete()
        except ValidationError as e:
            return JsonResponse({'success': False, 'error': error_message(e)}, status=400)

        deal.delete()
        logger.info(f"Deal {pk} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Request deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(deal, PropertyRequestForm.Meta.fields)
    data.update(payload)

    form = PropertyRequestForm(data, instance=deal, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    deal = form.save()
    _set_tags(deal, payload)

    return JsonResponse(serialize_deal(deal))


@api_login_required
@agency_required
@require_POST
def deal_change_status_view(request, pk):
    deal = _get_deal(request, pk)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = StatusChangeForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    try:
        deal.change_status(
            form.cleaned_data['status'],
            user=request.user,
            lost_reason=form.cleaned_data['lost_reason'],
            hold_reason=form.cleaned_data['hold_reason'],
        )
    except ValidationError as e:
        return JsonResponse({'success': False, 'error': error_message(e)}, status=400)

    return JsonResponse(serialize_deal(deal))


@api_login_required
@agency_required
@require_POST
def deal_close_view(request, pk):
    deal = _get_deal(request, pk)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = CloseDealForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    cleaned = form.cleaned_data
    try:
        deal.close_as_won(
            user=request.user,
            agreed_price=cleaned['agreed_price'],
            actual_fee=cleaned['actual_fee'],
            signed_date=cleaned['signed_date'],
            contract_start_date=cleaned['contract_start_date'],
            contract_end_date=cleaned['contract_end_date'],
            won_building=cleaned['won_building'],
            won_units=list(cleaned['won_unit_ids']),
            closure_notes=cleaned['closure_notes'],
        )
    except ValidationError as e:
        return JsonResponse({'success': False, 'error': error_message(e)}, status=400)

    return JsonResponse(serialize_deal(deal))


@api_login_required
@agency_required
@admin_required
@require_POST
def deal_reassign_view(request, pk):
    deal = _get_deal(request, pk)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = ReassignForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    try:
        deal.reassign(form.cleaned_data['user_id'], by_user=request.user)
    except ValidationError as e:
        return JsonResponse({'success': False, 'error': error_message(e)}, status=400)

    return JsonResponse(serialize_deal(deal))


@api_login_required
@agency_required
@admin_required
@require_GET
def deal_export_view(request):
    deals = _filtered_deals(request)

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = "Deals"

    headers = [
        'ID', 'Name', 'Status', 'Type', 'Sqm', 'Estimated Fee',
        'Company', 'Person', 'Broker', 'Created Date', 'Closed Date',
    ]

    for col, header in enumerate(headers, start=1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = Font(bold=True, color="FFFFFF")
        cell.fill = PatternFill(start_color="1E3A5F", end_color="1E3A5F", fill_type="solid")

    for row, deal in enumerate(deals, start=2):
        ws.cell(row=row, column=1, value=deal.id)
        ws.cell(row=row, column=2, value=deal.name)
        ws.cell(row=row, column=3, value=deal.get_status_display())
        ws.cell(row=row, column=4, value=deal.get_request_type_display() if deal.request_type else '')
        ws.cell(row=row, column=5, value=deal.number_of_sqm)
        ws.cell(row=row, column=6, value=deal.estimated_fee_value)
        ws.cell(row=row, column=7, value=deal.company.name if deal.company else '')
        ws.cell(row=row, column=8, value=deal.person.name if deal.person else '')
        ws.cell(row=row, column=9, value=deal.user.get_full_name())
        ws.cell(row=row, column=10, value=deal.created_at.strftime('%Y-%m-%d %H:%M'))
        ws.cell(row=row, column=11, value=deal.closed_at.strftime('%Y-%m-%d %H:%M') if deal.closed_at else '')

    for col in ws.columns:
        max_length = max(len(str(cell.value)) if cell.value is not None else 0 for cell in col)
        ws.column_dimensions[col[0].column_letter].width = min(max_length + 2, 50)

    response = HttpResponse(
        content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
    )
    response['Content-Disposition'] = f'attachment; filename="deals_{timezone.now().strftime("%Y%m%d_%H%M%S")}.xlsx"'
    wb.save(response)

    return response


# ACTIVITIES
# The timeline entries of deals, companies and persons, plus each
# broker's own to-do lists (done / overdue / planned)

def _activities(request):
    return Activity.objects.visible_to(request.user, request.agency) \
        .select_related('request', 'company', 'user') \
        .prefetch_related('persons')


def _filtered_activities(request):
    activities = _activities(request)

    activity_type = request.GET.get('activity_type')
    if activity_type:
        activities = activities.filter(activity_type=activity_type)

    done = request.GET.get('done')
    if done in ('true', 'false'):
        activities = activities.filter(done=done == 'true')

    for param, field in (('request_id', 'request_id'), ('company_id', 'company_id'), ('user_id', 'user_id')):
        value = request.GET.get(param)
        if value and value.isdigit():
            activities = activities.filter(**{field: value})

    date_from = request.GET.get('date_from')
    if date_from:
        activities = activities.filter(date__gte=date_from)

    date_to = request.GET.get('date_to')
    if date_to:
        activities = activities.filter(date__lte=date_to)

    return activities.order_by('-date', '-created_at')


def _my_open_activities(request):
    return _activities(request).filter(user=request.user).open()


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def activity_list_view(request):
    if request.method == 'GET':
        try:
            return JsonResponse(paginate(_filtered_activities(request), request, serialize_activity))
        except ValidationError:
            return JsonResponse({'success': False, 'error': 'Dates must use the YYYY-MM-DD format'}, status=400)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = ActivityForm(data, user=request.user, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    activity = form.save(commit=False)
    activity.user = request.user
    if activity.request_id and not activity.company_id:
        activity.company_id = activity.request.company_id
    activity.save()
    form.save_m2m()

    return JsonResponse(serialize_activity(activity), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def activity_detail_view(request, pk):
    activity = get_object_or_404(_activities(request), pk=pk)

    if request.method == 'GET':
        return JsonResponse(serialize_activity(activity))

    if request.method == 'DELETE':
        activity.delete()
        return JsonResponse({'success': True, 'message': 'Activity deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(activity, ActivityForm.Meta.fields)
    data.update(payload)

    form = ActivityForm(data, instance=activity, user=request.user, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    activity = form.save()

    return JsonResponse(serialize_activity(activity))


@api_login_required
@agency_required
@require_GET
def my_done_activities_view(request):
    activities = _activities(request).filter(user=request.user, done=True).order_by('-date', '-created_at')
    return JsonResponse(paginate(activities, request, serialize_activity))


@api_login_required
@agency_required
@require_GET
def my_overdue_activities_view(request):
    activities = _my_open_activities(request).filter(date__lt=timezone.localdate()).order_by('date', 'time')
    return JsonResponse(paginate(activities, request, serialize_activity))


@api_login_required
@agency_required
@require_GET
def my_planned_activities_view(request):
    activities = _my_open_activities(request).filter(date__gte=timezone.localdate()).order_by('date', 'time')
    return JsonResponse(paginate(activities, request, serialize_activity))


@api_login_required
@agency_required
@require_GET
def overdue_count_view(request):
    count = _my_open_activities(request).filter(date__lt=timezone.localdate()).count()
    return JsonResponse({'overdue_count': count})
