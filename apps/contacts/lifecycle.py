"""
Contact lifecycle rule table.

Declares the pipeline statuses, which fields each target status needs when a
contact is moved into it, and the texts shown to the user while confirming.

Pipeline:
    LEAD → MQL → SQL → OPPORTUNITY → CUSTOMER → EVANGELIST
    any status (except DORMANT) → DORMANT
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional

from django.db import models
from django.utils.translation import gettext_lazy as _


class ContactStatus(models.TextChoices):
    LEAD = 'LEAD', _('Lead')
    MQL = 'MQL', _('Marketing Qualified Lead')
    SQL = 'SQL', _('Sales Qualified Lead')
    OPPORTUNITY = 'OPPORTUNITY', _('Opportunity')
    CUSTOMER = 'CUSTOMER', _('Customer')
    EVANGELIST = 'EVANGELIST', _('Evangelist')
    DORMANT = 'DORMANT', _('Dormant')


@dataclass(frozen=True)
class TransitionRule:
    """What moving a contact INTO a status requires"""
    requires_value: bool = False
    requires_product_name: bool = False
    value_label: str = 'Expected Deal Value'
    description: str = ''


# Statuses without special requirements only change the status
DEFAULT_RULE = TransitionRule()

TRANSITION_RULES: Dict[str, TransitionRule] = {
    ContactStatus.LEAD: TransitionRule(
        description='New contact - Not yet engaged with marketing',
    ),
    ContactStatus.MQL: TransitionRule(
        description='Marketing Qualified Lead - Ready for marketing engagement',
    ),
    ContactStatus.SQL: TransitionRule(
        description='Sales Qualified Lead - Ready for sales outreach',
    ),
    ContactStatus.OPPORTUNITY: TransitionRule(
        requires_value=True,
        description='Active sales opportunity with expected deal value',
    ),
    ContactStatus.CUSTOMER: TransitionRule(
        requires_value=True,
        requires_product_name=True,
        value_label='Closed Deal Value',
        description='Converted customer - Deal closed successfully',
    ),
    ContactStatus.EVANGELIST: TransitionRule(
        description='Brand advocate - Highly satisfied customer',
    ),
    ContactStatus.DORMANT: TransitionRule(
        description='Inactive contact - No longer actively engaged',
    ),
}


# (current_status) -> statuses it may move to
ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    ContactStatus.LEAD: frozenset({ContactStatus.MQL, ContactStatus.DORMANT}),
    ContactStatus.MQL: frozenset({ContactStatus.SQL, ContactStatus.DORMANT}),
    ContactStatus.SQL: frozenset({ContactStatus.OPPORTUNITY, ContactStatus.DORMANT}),
    ContactStatus.OPPORTUNITY: frozenset({ContactStatus.CUSTOMER, ContactStatus.DORMANT}),
    ContactStatus.CUSTOMER: frozenset({ContactStatus.EVANGELIST, ContactStatus.DORMANT}),
    ContactStatus.EVANGELIST: frozenset({ContactStatus.DORMANT}),
    ContactStatus.DORMANT: frozenset(),
}

# Forward order, DORMANT is a side-exit and not part of it
PIPELINE: List[str] = [
    ContactStatus.LEAD,
    ContactStatus.MQL,
    ContactStatus.SQL,
    ContactStatus.OPPORTUNITY,
    ContactStatus.CUSTOMER,
    ContactStatus.EVANGELIST,
]


def get_rule(status) -> TransitionRule:
    """
    Look up the rule for a target status.

    Unknown values fall back to DEFAULT_RULE (status change only).
    """
    if status in ContactStatus.values:
        return TRANSITION_RULES[ContactStatus(status)]
    return DEFAULT_RULE


def requires_value(status) -> bool:
    return get_rule(status).requires_value


def requires_product_name(status) -> bool:
    return get_rule(status).requires_product_name


def value_label(status) -> str:
    return get_rule(status).value_label


def description(status) -> str:
    return get_rule(status).description


def next_status(status) -> Optional[str]:
    """Next forward step in the pipeline, None at the end or for DORMANT"""
    if status not in PIPELINE:
        return None
    index = PIPELINE.index(status)
    if index + 1 < len(PIPELINE):
        return PIPELINE[index + 1]
    return None


def available_targets(status) -> List[str]:
    """
    Statuses a contact may be moved to from `status`.

    Forward step first, then DORMANT, so the UI can render them in order.
    """
    allowed = ALLOWED_TRANSITIONS.get(status, frozenset())
    forward = next_status(status)

    targets = []
    if forward and forward in allowed:
        targets.append(forward)
    if ContactStatus.DORMANT in allowed:
        targets.append(ContactStatus.DORMANT)
    return targets
