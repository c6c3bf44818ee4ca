"""
Application layer - records confirmed contact transitions.

submit_transition() is the persistence collaborator of the
TransitionOrchestrator: it re-checks the transition against the stored
contact, applies the pipeline side effects (opportunity, deal) and writes the
status history, all in one transaction.
"""

import logging
from decimal import Decimal

from asgiref.sync import sync_to_async
from django.db import transaction
from django.utils import timezone

from .lifecycle import ContactStatus, requires_product_name, requires_value
from .models import Contact, Deal, Opportunity, StatusHistory
from .workflows import TransitionSubmissionError, check_transition

logger = logging.getLogger(__name__)


# Opportunity.expected_value / Deal.deal_value: max_digits=14, decimal_places=2
MAX_AMOUNT = Decimal('1e12')
CENT = Decimal('0.01')


def _to_decimal(value):
    """Money amount as stored, TransitionSubmissionError if it does not fit."""
    if value is None:
        return None

    amount = Decimal(str(value))
    if abs(amount) >= MAX_AMOUNT:
        raise TransitionSubmissionError('Deal value is too large')

    amount = amount.quantize(CENT)
    # 999999999999.995 rounds up past the limit
    if abs(amount) >= MAX_AMOUNT:
        raise TransitionSubmissionError('Deal value is too large')
    return amount


def _open_opportunity(contact, user, amount):
    return Opportunity.objects.create(
        contact=contact,
        owner=user,
        expected_value=amount,
    )


def _close_deal(contact, user, amount, product_name):
    """Mark the open opportunity as won and record the deal."""
    now = timezone.now()
    opportunity = contact.get_open_opportunity()

    if opportunity is None:
        # Closed without a recorded opportunity: keep the deal linked anyway
        opportunity = Opportunity.objects.create(
            contact=contact,
            owner=user,
            expected_value=amount,
        )

    opportunity.status = Opportunity.STATUS_WON
    opportunity.closed_at = now
    opportunity.save(update_fields=['status', 'closed_at'])

    return Deal.objects.create(
        opportunity=opportunity,
        deal_value=amount,
        product_name=product_name,
        closed_by=user,
    )


def _lose_open_opportunities(contact):
    return contact.opportunities.filter(status=Opportunity.STATUS_OPEN).update(
        status=Opportunity.STATUS_LOST,
        closed_at=timezone.now(),
    )


@transaction.atomic
def submit_transition(
    *,
    contact_id,
    current_status,
    target_status,
    value=None,
    product_name=None,
    user=None,
    company=None,
) -> Contact:
    """
    Move a contact to `target_status`.

    `current_status` is the status the caller saw when the transition was
    confirmed; the transition is refused if the stored status differs.

    Raises:
        TransitionSubmissionError: contact not found, status changed or
            deal value too large to store.
        InvalidTransitionError: the pipeline does not allow the move.
    """
    contacts = Contact.objects.select_for_update()
    if company is not None:
        contacts = contacts.filter(company=company)

    try:
        contact = contacts.get(pk=contact_id)
    except Contact.DoesNotExist:
        raise TransitionSubmissionError('Contact not found')

    if current_status is not None and contact.status != current_status:
        raise TransitionSubmissionError(
            f"Contact status changed from '{current_status}' to "
            f"'{contact.status}'. Reload and try again."
        )

    old_status = contact.status
    check_transition(old_status, target_status)

    if requires_value(target_status) and value is None:
        raise TransitionSubmissionError(f"A deal value is required for {target_status}.")
    if requires_product_name(target_status) and not product_name:
        raise TransitionSubmissionError(f"A product name is required for {target_status}.")

    # Before any write, so an amount that does not fit leaves nothing behind
    amount = _to_decimal(value)

    if target_status == ContactStatus.OPPORTUNITY:
        _open_opportunity(contact, user, amount)
    elif target_status == ContactStatus.CUSTOMER:
        _close_deal(contact, user, amount, product_name)
    elif target_status == ContactStatus.DORMANT:
        _lose_open_opportunities(contact)

    contact.status = target_status
    contact.save(update_fields=['status', 'updated_at'])

    StatusHistory.objects.create(
        contact=contact,
        old_status=old_status,
        new_status=target_status,
        changed_by=user,
    )

    logger.info(
        f"Contact {contact.pk} status {old_status} → {target_status} "
        f"by {user.email if user else 'system'}"
    )
    return contact


async def asubmit_transition(payload, *, user=None, company=None):
    """Async entry point for TransitionOrchestrator"""
    return await sync_to_async(submit_transition, thread_sensitive=True)(
        user=user, company=company, **payload
    )


def record_lead_activity(contact_id, token) -> bool:
    """
    Handle a tracked interaction (opened email, clicked link) of a contact.

    Increments the interest score. A contact still in LEAD is promoted to
    MQL by the system. Returns False when the contact does not exist or the
    token does not match.
    """
    with transaction.atomic():
        contact = Contact.objects.select_for_update().filter(pk=contact_id).first()
        if contact is None or str(contact.tracking_token) != str(token):
            logger.warning(f"Rejected lead activity for contact {contact_id}")
            return False

        contact.interest_score += 1
        contact.save(update_fields=['interest_score', 'updated_at'])

        if contact.status == ContactStatus.LEAD:
            submit_transition(
                contact_id=contact.pk,
                current_status=ContactStatus.LEAD,
                target_status=ContactStatus.MQL,
            )

    return True
