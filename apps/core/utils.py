"""
Helpers shared by the JSON views
"""
import json

from django.conf import settings
from django.core.paginator import Paginator
from django.forms.models import model_to_dict


def get_user_agency(request):
    """
    Get the agency for the current user:
    - Superuser: from the `agency` query parameter (any agency)
    - Regular users: from user.agency

    Returns:
        Agency object or None
    """
    if not request.user.is_authenticated:
        return None

    if request.user.is_superuser and not request.user.agency:
        from apps.core.models import Agency

        agency_id = request.GET.get('agency')
        if agency_id:
            return Agency.objects.filter(pk=agency_id).first()
        return None

    return request.user.agency


def parse_json_body(request):
    """
    Decode a JSON request body into a dict

    Raises:
        ValueError: body is not a JSON object
    """
    if not request.body:
        return {}
    data = json.loads(request.body)
    if not isinstance(data, dict):
        raise ValueError('JSON body must be an object')
    return data


def paginate(queryset, request, serializer):
    """
    Slice a queryset with the `page`/`limit` query parameters

    Returns the envelope the web client expects:
        {"data": [...], "meta": {"total", "page", "limit", "total_pages"}}
    """
    try:
        limit = int(request.GET.get('limit', settings.CRM_PAGE_SIZE))
    except (TypeError, ValueError):
        limit = settings.CRM_PAGE_SIZE
    limit = max(1, min(limit, 100))

    paginator = Paginator(queryset, limit)
    page_obj = paginator.get_page(request.GET.get('page', 1))

    return {
        'data': [serializer(obj) for obj in page_obj],
        'meta': {
            'total': paginator.count,
            'page': page_obj.number,
            'limit': limit,
            'total_pages': paginator.num_pages if paginator.count else 0,
        },
    }


def instance_form_data(instance, fields):
    """
    Current field values of a model instance, shaped as form data

    Partial JSON updates are merged on top of this so fields missing
    from the payload keep their stored value.
    """
    data = model_to_dict(instance, fields=fields)
    for key, value in data.items():
        # many-to-many fields come back as model instances
        if isinstance(value, list):
            data[key] = [getattr(item, 'pk', item) for item in value]
    return data


def form_errors(form):
    """{field: [message, ...]} for a JSON error response"""
    return {
        field: [error['message'] for error in errors]
        for field, errors in form.errors.get_json_data().items()
    }


def error_message(exc):
    """Flatten a ValidationError into one line"""
    return '; '.join(exc.messages)


def isoformat(value):
    return value.isoformat() if value else None
