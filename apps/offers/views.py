import logging

from django.core.exceptions import ValidationError
from django.db.models import Prefetch
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.http import require_http_methods, require_POST, require_GET

from apps.accounts.decorators import api_login_required, agency_required
from apps.core.utils import parse_json_body, paginate, instance_form_data, form_errors, error_message
from apps.deals.models import PropertyRequest
from .forms import OfferCreateForm, OfferUpdateForm, GroupCreateForm, GroupUpdateForm
from .models import Offer, OfferGroup


logger = logging.getLogger(__name__)


def _offers(request):
    return Offer.objects.visible_to(request.user, request.agency) \
        .select_related('request', 'user', 'company', 'person')


def _with_groups(offers):
    return offers.prefetch_related(
        Prefetch('groups', queryset=OfferGroup.objects.select_related('building__location').prefetch_related('group_items'))
    )


def _get_group(request, pk):
    return get_object_or_404(
        OfferGroup.objects.select_related('offer', 'building__location').prefetch_related('group_items'),
        pk=pk,
        offer__in=Offer.objects.visible_to(request.user, request.agency),
    )


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST'])
def offer_list_view(request):
    if request.method == 'GET':
        return JsonResponse(paginate(_offers(request).order_by('-created_at'), request, Offer.to_dict))

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = OfferCreateForm(data, user=request.user, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    offer = Offer.create_for_request(form.cleaned_data['request_id'], request.user)

    return JsonResponse(offer.to_dict(), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def offer_detail_view(request, pk):
    offer = get_object_or_404(_with_groups(_offers(request)), pk=pk)

    if request.method == 'GET':
        return JsonResponse(offer.to_dict(include_groups=True))

    if request.method == 'DELETE':
        offer.delete()
        logger.info(f"Offer {offer.offer_code} deleted by {request.user.email}")
        return JsonResponse({'success': True, 'message': 'Offer deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(offer, OfferUpdateForm.Meta.fields)
    data.update(payload)

    form = OfferUpdateForm(data, instance=offer)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    offer = form.save()

    return JsonResponse(offer.to_dict(include_groups=True))


@api_login_required
@agency_required
@require_GET
def offers_by_request_view(request, request_id):
    deal = get_object_or_404(PropertyRequest.objects.visible_to(request.user, request.agency), pk=request_id)
    offers = _with_groups(_offers(request).filter(request=deal)).order_by('-created_at')

    return JsonResponse({'data': [offer.to_dict(include_groups=True) for offer in offers]})


@api_login_required
@agency_required
@require_POST
def offer_group_create_view(request, pk):
    offer = get_object_or_404(_offers(request), pk=pk)

    try:
        data = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    form = GroupCreateForm(data, agency=request.agency)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    try:
        group = offer.add_group(
            name=form.cleaned_data['name'],
            building=form.cleaned_data['building_id'],
            unit_ids=form.cleaned_data['unit_ids'],
        )
    except ValidationError as e:
        return JsonResponse({'success': False, 'error': error_message(e)}, status=400)

    return JsonResponse(group.to_dict(), status=201)


@api_login_required
@agency_required
@require_http_methods(['GET', 'POST', 'DELETE'])
def offer_group_detail_view(request, pk):
    group = _get_group(request, pk)

    if request.method == 'GET':
        return JsonResponse(group.to_dict())

    if request.method == 'DELETE':
        group.delete()
        return JsonResponse({'success': True, 'message': 'Offer group deleted successfully'})

    try:
        payload = parse_json_body(request)
    except ValueError:
        return JsonResponse({'success': False, 'error': 'Invalid JSON format'}, status=400)

    data = instance_form_data(group, GroupUpdateForm.Meta.fields)
    data.update(payload)

    form = GroupUpdateForm(data, instance=group)
    if not form.is_valid():
        return JsonResponse({'success': False, 'errors': form_errors(form)}, status=400)

    group = form.save()
    logger.info(f"Offer group {group.pk} updated by {request.user.email}")

    return JsonResponse(group.to_dict())
