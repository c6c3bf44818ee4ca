import json
import logging
from functools import partial

from asgiref.sync import async_to_sync
from django.http import JsonResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST

from apps.accounts.decorators import company_required
from . import lifecycle
from .lifecycle import ContactStatus
from .models import Contact
from .orchestrator import TransitionOrchestrator
from .services import asubmit_transition
from .tasks import process_lead_activity

logger = logging.getLogger(__name__)


def _read_body(request):
    """JSON body from the SPA, form data otherwise"""
    if request.content_type == 'application/json':
        try:
            data = json.loads(request.body or b'{}')
        except json.JSONDecodeError:
            return None
        return data if isinstance(data, dict) else None
    return request.POST


@company_required
@require_GET
def contact_transition_options_view(request, pk):
    """Statuses the contact can move to, with what each one asks for"""
    contact = get_object_or_404(
        Contact,
        pk=pk,
        company=request.user.company
    )

    transitions = []
    for target in lifecycle.available_targets(contact.status):
        rule = lifecycle.get_rule(target)
        transitions.append({
            'status': target,
            'label': ContactStatus(target).label,
            'description': rule.description,
            'value_label': rule.value_label,
            'requires_value': rule.requires_value,
            'requires_product_name': rule.requires_product_name,
        })

    return JsonResponse({
        'contact_id': contact.pk,
        'status': contact.status,
        'status_display': contact.get_status_display(),
        'transitions': transitions,
    })


@company_required
@require_POST
def contact_transition_view(request, pk):
    contact = get_object_or_404(
        Contact,
        pk=pk,
        company=request.user.company
    )

    data = _read_body(request)
    if data is None:
        return JsonResponse({'success': False, 'error': 'Invalid request body'}, status=400)

    target_status = data.get('target_status')
    if target_status not in ContactStatus.values:
        return JsonResponse({'success': False, 'error': 'Invalid status'}, status=400)

    orchestrator = TransitionOrchestrator(
        partial(asubmit_transition, user=request.user, company=request.user.company)
    )
    orchestrator.open(contact, target_status)

    confirmed = async_to_sync(orchestrator.confirm)(
        data.get('expected_value'),
        data.get('product_name'),
    )

    if confirmed:
        contact.refresh_from_db()
        return JsonResponse({
            'success': True,
            'status': contact.status,
            'status_display': contact.get_status_display()
        })

    if orchestrator.error:
        return JsonResponse({
            'success': False,
            'code': orchestrator.error.code.value,
            'field': orchestrator.error.field,
            'error': orchestrator.error.message,
        }, status=400)

    return JsonResponse({
        'success': False,
        'error': orchestrator.submission_error,
    }, status=409)


@csrf_exempt
@require_POST
def lead_activity_view(request):
    """
    Internal endpoint for the tracking server.
    Queues LEAD → MQL marketing automation.
    """
    data = _read_body(request)
    if not data or not data.get('contact_id') or not data.get('token'):
        return JsonResponse({'success': False, 'error': 'contact_id and token are required'}, status=400)

    try:
        contact_id = int(data['contact_id'])
    except (TypeError, ValueError):
        return JsonResponse({'success': False, 'error': 'contact_id must be an integer'}, status=400)

    process_lead_activity.delay(contact_id, str(data['token']))
    logger.info(f"Queued lead activity for contact {contact_id}")

    return JsonResponse({'success': True}, status=202)
