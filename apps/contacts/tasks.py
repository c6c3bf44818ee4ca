from celery import shared_task
import logging

from .services import record_lead_activity

logger = logging.getLogger(__name__)


@shared_task
def process_lead_activity(contact_id, token):
    """
    Marketing automation hook, queued by the tracking endpoint.
    A tracked interaction promotes a LEAD to MQL.
    """
    accepted = record_lead_activity(contact_id, token)

    if accepted:
        logger.info(f"Processed lead activity for contact {contact_id}")
        return f'Lead activity recorded for contact {contact_id}.'
    return f'Lead activity rejected for contact {contact_id}.'
