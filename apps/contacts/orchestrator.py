"""
Interactive lifecycle of one pending contact transition.

One TransitionOrchestrator backs one "Promote contact" / "Move to dormant"
dialog (or one request). It holds the chosen contact and target status,
runs the validator when the user confirms and hands the normalized payload
to the persistence collaborator exactly once.

States:
    IDLE            nothing pending
    AWAITING_INPUT  contact + target chosen, fields being edited
    VALIDATING      confirm pressed, validator running (synchronous)
    SUBMITTING      waiting for the persistence collaborator

Usage:
    orchestrator = TransitionOrchestrator(asubmit_transition)
    orchestrator.open(contact, ContactStatus.CUSTOMER)
    if not await orchestrator.confirm('10000', 'Acme Tool'):
        show(orchestrator.error_message)
"""

import asyncio
import logging
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

from .workflows import TransitionPreconditionError, ValidationFailure, validate

logger = logging.getLogger(__name__)


SubmitTransition = Callable[[Dict[str, Any]], Awaitable[Any]]


class OrchestratorState(str, Enum):
    IDLE = 'IDLE'
    AWAITING_INPUT = 'AWAITING_INPUT'
    VALIDATING = 'VALIDATING'
    SUBMITTING = 'SUBMITTING'


class TransitionOrchestrator:

    def __init__(self, submit_transition: SubmitTransition):
        self._submit_transition = submit_transition
        self._state = OrchestratorState.IDLE
        self._reset()

    def _reset(self):
        self._contact = None
        self._target_status = None
        self._clear_input()

    def _clear_input(self):
        self._expected_value = ''
        self._product_name = ''
        self._error: Optional[ValidationFailure] = None
        self._submission_error: Optional[str] = None

    # READ-ONLY STATE
    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def contact(self):
        return self._contact

    @property
    def target_status(self):
        return self._target_status

    @property
    def expected_value(self):
        return self._expected_value

    @property
    def product_name(self):
        return self._product_name

    @property
    def error(self) -> Optional[ValidationFailure]:
        return self._error

    @property
    def submission_error(self) -> Optional[str]:
        return self._submission_error

    @property
    def is_loading(self) -> bool:
        return self._state == OrchestratorState.SUBMITTING

    @property
    def error_message(self) -> Optional[str]:
        """The single message to show, validation first"""
        if self._error:
            return self._error.message
        return self._submission_error

    # COMMANDS
    def open(self, contact, target_status) -> bool:
        """
        Start a transition for `contact` to `target_status`.

        Opening while another transition is pending replaces it
        (last-open-wins). Returns False without changing anything when
        contact or target status is missing.
        """
        if self._state == OrchestratorState.SUBMITTING:
            raise TransitionPreconditionError(
                'Cannot open a new transition while one is being submitted.'
            )

        if contact is None or not target_status:
            return False

        if self._state == OrchestratorState.AWAITING_INPUT:
            logger.debug(
                f"Replacing pending transition to {self._target_status} "
                f"with {target_status}"
            )

        self._contact = contact
        self._target_status = target_status
        self._clear_input()
        self._state = OrchestratorState.AWAITING_INPUT
        return True

    def cancel(self):
        """Discard the pending transition without contacting persistence."""
        if self._state != OrchestratorState.AWAITING_INPUT:
            raise TransitionPreconditionError(
                f'Cannot cancel while {self._state.value}.'
            )

        self._reset()
        self._state = OrchestratorState.IDLE

    async def confirm(self, raw_expected_value=None, raw_product_name=None) -> bool:
        """
        Validate the entered fields and submit the transition.

        Returns True once persistence accepted it (orchestrator back to
        IDLE). Returns False when validation or submission failed (back to
        AWAITING_INPUT with the error attached and the fields kept) or when
        a submission is already in flight.
        """
        if self._state == OrchestratorState.SUBMITTING:
            logger.debug('Ignoring confirm while a submission is in flight')
            return False

        if self._state != OrchestratorState.AWAITING_INPUT:
            raise TransitionPreconditionError(
                f'Cannot confirm while {self._state.value}.'
            )

        self._expected_value = raw_expected_value
        self._product_name = raw_product_name
        self._error = None
        self._submission_error = None

        self._state = OrchestratorState.VALIDATING
        try:
            outcome, failure = validate(
                self._target_status, raw_expected_value, raw_product_name
            )
        except TransitionPreconditionError:
            self._state = OrchestratorState.AWAITING_INPUT
            raise

        if failure:
            self._error = failure
            self._state = OrchestratorState.AWAITING_INPUT
            return False

        payload = {
            'contact_id': self._contact.pk,
            'current_status': getattr(self._contact, 'status', None),
            'target_status': self._target_status,
            'value': outcome.value,
            'product_name': outcome.product_name,
        }

        self._state = OrchestratorState.SUBMITTING
        try:
            await self._submit_transition(payload)
        except asyncio.CancelledError:
            self._state = OrchestratorState.AWAITING_INPUT
            raise
        except Exception as e:
            logger.warning(
                f"Transition of contact {payload['contact_id']} to "
                f"{payload['target_status']} failed: {e}",
                exc_info=True,
            )
            self._submission_error = str(e)
            self._state = OrchestratorState.AWAITING_INPUT
            return False

        logger.info(
            f"Contact {payload['contact_id']} moved to {payload['target_status']}"
        )
        self._reset()
        self._state = OrchestratorState.IDLE
        return True
