# Decorators in this file:
# 1. api_login_required - Session must be authenticated
# 2. agency_required - User must belong to an agency
# 3. admin_required - Only agency admins can access
#
# Every decorator answers with JSON, the CRM has no HTML pages
# ==============================================================================

from functools import wraps
from django.http import JsonResponse
from django.utils.translation import gettext_lazy as _

from apps.core.utils import get_user_agency


def _error(message, status):
    return JsonResponse({'success': False, 'error': str(message)}, status=status)


def api_login_required(view_func):
    """
    Decorator: Session must belong to an authenticated user

    Unlike django's login_required it never redirects:
    the browser client gets a 401 and shows its own login screen.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _error(_('Authentication required'), 401)
        return view_func(request, *args, **kwargs)

    return wrapper


# AGENCY-BASED DECORATORS
def agency_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User has an agency (superusers pick one with ?agency=<id>)

    The resolved agency is stored on request.agency so views never
    touch user.agency directly.
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _error(_('Authentication required'), 401)

        agency = get_user_agency(request)
        if agency is None:
            return _error(_('You must be assigned to an agency to access this resource.'), 403)

        if not agency.is_active():
            return _error(_('This agency is suspended.'), 403)

        request.agency = agency
        return view_func(request, *args, **kwargs)

    return wrapper


# ROLE-BASED DECORATORS
def admin_required(view_func):
    """
    Decorator: Only agency admins (or superusers) can access this view

    Checks:
    1. User is authenticated
    2. User role is 'ADMIN' OR is superuser
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return _error(_('Authentication required'), 401)

        if request.user.is_admin():
            return view_func(request, *args, **kwargs)

        return _error(_('Admin access required'), 403)

    return wrapper
