import logging

from django.db.models import Q, ProtectedError
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods, require_GET

from apps.accounts.decorators import api_login_required, agency_required
from apps.core.utils import parse_json_body, paginate, instance_form_data, form_errors, isoformat
from .forms import BuildingForm, UnitForm
from .models import Location, Building, Unit, TRANSACTION_TYPE_CHOICES


logger = logging.getLogger(__name__)

TRANSACTION_TYPES = [choice[0] for choice in TRANSACTION_TYPE_CHOICES]


def serialize_location(location):
    return {'id': location.id, 'name': location.name, 'county': location.county}


def serialize_building(building):
    data = building.to_summary()
    data.update({
        'property_code': building.property_code,
        'transaction_type': building.transaction_type,
        'location_id': building.location_id,
        'total_sqm': building.total_sqm,
        'available_sqm': building.available_sqm,
        'service_charge': building.service_charge,
        'available_from': isoformat(building.available_from),
        'min_contract_years': building.min_contract_years,
        'description': building.description,
        'clear_height': building.clear_height,
        'floor_loading': building.floor_loading,
        'sprinkler': building.sprinkler,
        'developer': building.developer.to_summary() if building.developer else None,
        'created_at': isoformat(building.created_at),
    })
    return data


def serialize_unit(unit):
    data = unit.to_summary()
    data.update({
        'transaction_type': unit.transaction_type,
        'total_sqm': unit.get_total_sqm(),
        'docks': unit.docks,
        'driveins': unit.driveins,
        'cross_dock': unit.cross_dock,
        'useful_height': unit.useful_height,
        'service_charge': unit.service_charge,
        'available_from': isoformat(unit.available_from),
        'sale_price': unit.sale_price,
    })
    return data


def _buildings(request):
    return Building.objects.filter(agency=request.agency).select_related('location', 'developer')


@api_login_required
@agency_required
@require_GET
def location_list_view(request):
    """Locations are shared reference data, not owned by an agency"""
    locations = Location.objects.all()

    search_query = request.GET.get('q', '').strip()
    if search_query:
        locations = locations.filter(Q(name__icontains=search_query) | Q(county__icontains=search_query))

    return JsonResponse({'data': [serialize_location(location) for location in locations]})


# BUILDINGS

@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def building_list_view(request):
    if request.method == 'GET':
        buildings = _buildings(request)

        search_query = request.GET.get('search', '').strip()
        if search_query:
            buildings = buildings.filter(
                Q(name__icontains=search_query) |
                Q(address__icontains=search_query) |
                Q(property_code__icontains=search_query)
            )

        location_id = request.GET.get('location_id')
        if location_id and location_id.isdigit():
            buildings = buildings.filter(location_id=location_id)

        transaction_type = request.GET.get('transaction_type')
        if transaction_type in TRANSACTION_TYPES:
            buildings = buildings.filter(transaction_type=transaction_type)

        return JsonResponse(paginate(buildings.order_by('name'), request, serialize_building))

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = BuildingForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    building = form.save(commit=False)
    building.agency = request.agency
    building.user = request.user
    building.save()

    logger.info(f"Building {building.pk} created by {request.user.email}")

    return JsonResponse(serialize_building(building), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def building_detail_view(request, pk):
    building = get_object_or_404(_buildings(request), pk=pk)

    if request.method == 'GET':
        data = serialize_building(building)
        data['units'] = [serialize_unit(unit) for unit in building.units.all()]
        return JsonResponse(data)

    if request.method == 'DELETE':
        if not request.user.is_admin():
            return JsonResponse({'success': False, 'error': 'Admin access required'}, status=403)

        try:
            building.delete()
        except ProtectedError:
            return JsonResponse(
                {'success': False, 'error': 'Building is used in offers and cannot be deleted'},
                status=400,
            )

        logger.info(f"Building {pk} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Building deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(building, BuildingForm.Meta.fields)
    data.update(payload)

    form = BuildingForm(data, instance=building, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    building = form.save()

    return JsonResponse(serialize_building(building))


# UNITS

@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def unit_list_view(request, pk):
    building = get_object_or_404(Building.objects.filter(agency=request.agency), pk=pk)

    if request.method == 'GET':
        return JsonResponse({'data': [serialize_unit(unit) for unit in building.units.all()]})

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = UnitForm(data)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    unit = form.save(commit=False)
    unit.building = building
    unit.save()

    return JsonResponse(serialize_unit(unit), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def unit_detail_view(request, pk):
    unit = get_object_or_404(Unit.objects.filter(building__agency=request.agency), pk=pk)

    if request.method == 'GET':
        return JsonResponse(serialize_unit(unit))

    if request.method == 'DELETE':
        unit.delete()
        logger.info(f"Unit {pk} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Unit deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(unit, UnitForm.Meta.fields)
    data.update(payload)

    form = UnitForm(data, instance=unit)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    unit = form.save()

    return JsonResponse(serialize_unit(unit))
