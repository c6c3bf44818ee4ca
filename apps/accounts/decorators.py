# Decorators in this file:
# 1. company_required - User must belong to a company
#
# Views in this project answer the single-page frontend with JSON, so
# access failures are JSON errors instead of redirects.
# ==============================================================================

from functools import wraps
from django.http import JsonResponse
from django.utils.translation import gettext_lazy as _


# COMPANY-BASED DECORATORS
def company_required(view_func):
    """
    Checks:
    1. User is authenticated
    2. User has company assigned

    Why needed?
    - Contacts are owned by a company (multi-tenancy)
    - Prevents errors when accessing user.company

    Example flow:
    User without company calls a contact endpoint
    → @company_required checks user.company
    → user.company = None → 403 JSON error
    """

    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        if not request.user.is_authenticated:
            return JsonResponse({
                'success': False,
                'error': str(_('Please login to continue.'))
            }, status=401)

        if request.user.company:
            return view_func(request, *args, **kwargs)

        return JsonResponse({
            'success': False,
            'error': str(_('You must be assigned to a company to access this page.'))
        }, status=403)

    return wrapper
