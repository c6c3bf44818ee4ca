"""
Transition Orchestrator Tests
=============================

The persistence collaborator is an AsyncMock, no database is used.

Test Coverage:
1. open / cancel / last-open-wins
2. confirm with validation failure
3. confirm with successful and failing submission
4. Duplicate confirm while submitting
5. Precondition errors

Run tests:
    python manage.py test apps.contacts.tests.test_orchestrator
"""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock

from django.test import SimpleTestCase

from apps.contacts.lifecycle import ContactStatus
from apps.contacts.orchestrator import OrchestratorState, TransitionOrchestrator
from apps.contacts.workflows import (
    TransitionPreconditionError,
    TransitionSubmissionError,
    ValidationCode,
)


def make_contact(pk=1, status=ContactStatus.OPPORTUNITY):
    return SimpleNamespace(pk=pk, status=status)


class OpenCancelTest(SimpleTestCase):
    """Test open() and cancel()"""

    def setUp(self):
        self.submit = AsyncMock()
        self.orchestrator = TransitionOrchestrator(self.submit)

    def test_starts_idle(self):
        self.assertEqual(self.orchestrator.state, OrchestratorState.IDLE)
        self.assertIsNone(self.orchestrator.contact)
        self.assertFalse(self.orchestrator.is_loading)
        self.assertIsNone(self.orchestrator.error_message)

    def test_open_awaits_input(self):
        contact = make_contact()
        self.assertTrue(self.orchestrator.open(contact, ContactStatus.CUSTOMER))

        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.assertIs(self.orchestrator.contact, contact)
        self.assertEqual(self.orchestrator.target_status, ContactStatus.CUSTOMER)
        self.assertEqual(self.orchestrator.expected_value, '')
        self.assertEqual(self.orchestrator.product_name, '')

    def test_open_without_contact_or_target_is_noop(self):
        """
        Test: open() with a missing contact or target

        Expected: Returns False, stays IDLE
        """
        self.assertFalse(self.orchestrator.open(None, ContactStatus.MQL))
        self.assertFalse(self.orchestrator.open(make_contact(), None))
        self.assertFalse(self.orchestrator.open(make_contact(), ''))
        self.assertEqual(self.orchestrator.state, OrchestratorState.IDLE)

    def test_last_open_wins(self):
        """
        Test: open() while another transition is pending

        Expected: Pending pair replaced, errors cleared
        """
        first = make_contact(pk=1)
        second = make_contact(pk=2, status=ContactStatus.SQL)

        self.orchestrator.open(first, ContactStatus.CUSTOMER)
        self.orchestrator.open(second, ContactStatus.DORMANT)

        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.assertIs(self.orchestrator.contact, second)
        self.assertEqual(self.orchestrator.target_status, ContactStatus.DORMANT)
        self.assertIsNone(self.orchestrator.error)

    def test_cancel_discards_without_persistence(self):
        """
        Test: cancel() from AWAITING_INPUT

        Expected: IDLE, state cleared, collaborator never called
        """
        self.orchestrator.open(make_contact(), ContactStatus.CUSTOMER)
        self.orchestrator.cancel()

        self.assertEqual(self.orchestrator.state, OrchestratorState.IDLE)
        self.assertIsNone(self.orchestrator.contact)
        self.assertIsNone(self.orchestrator.target_status)
        self.submit.assert_not_called()

    def test_cancel_while_idle_raises(self):
        with self.assertRaises(TransitionPreconditionError):
            self.orchestrator.cancel()


class ConfirmTest(SimpleTestCase):
    """Test confirm() outcomes"""

    def setUp(self):
        self.submit = AsyncMock(return_value=None)
        self.orchestrator = TransitionOrchestrator(self.submit)
        self.contact = make_contact(pk=7, status=ContactStatus.OPPORTUNITY)

    async def test_confirm_while_idle_raises(self):
        with self.assertRaises(TransitionPreconditionError):
            await self.orchestrator.confirm('100', 'Tool')
        self.submit.assert_not_called()

    async def test_validation_failure_keeps_dialog_open(self):
        """
        Test: confirm() with an invalid value

        Expected: AWAITING_INPUT, error set, fields kept, no persistence
        """
        self.orchestrator.open(self.contact, ContactStatus.CUSTOMER)

        confirmed = await self.orchestrator.confirm('abc', 'Tool')

        self.assertFalse(confirmed)
        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.assertEqual(self.orchestrator.error.code, ValidationCode.INVALID_VALUE)
        self.assertEqual(self.orchestrator.error_message, 'Please enter a valid number')
        self.assertEqual(self.orchestrator.expected_value, 'abc')
        self.assertEqual(self.orchestrator.product_name, 'Tool')
        self.submit.assert_not_called()

    async def test_success_submits_normalized_payload_once(self):
        """
        Test: confirm() with valid CUSTOMER input

        Expected: One call with the normalized payload, back to IDLE
        """
        self.orchestrator.open(self.contact, ContactStatus.CUSTOMER)

        confirmed = await self.orchestrator.confirm('10000', 'Acme Tool')

        self.assertTrue(confirmed)
        self.submit.assert_awaited_once_with({
            'contact_id': 7,
            'current_status': ContactStatus.OPPORTUNITY,
            'target_status': ContactStatus.CUSTOMER,
            'value': 10000.0,
            'product_name': 'acme tool',
        })
        self.assertEqual(self.orchestrator.state, OrchestratorState.IDLE)
        self.assertIsNone(self.orchestrator.contact)
        self.assertIsNone(self.orchestrator.error_message)

    async def test_status_only_transition_payload(self):
        self.orchestrator.open(self.contact, ContactStatus.DORMANT)

        self.assertTrue(await self.orchestrator.confirm())

        payload = self.submit.await_args.args[0]
        self.assertIsNone(payload['value'])
        self.assertIsNone(payload['product_name'])

    async def test_submission_failure_keeps_fields(self):
        """
        Test: Persistence raises

        Expected: AWAITING_INPUT, fields kept, message verbatim
        """
        self.submit.side_effect = TransitionSubmissionError('Contact not found')
        self.orchestrator.open(self.contact, ContactStatus.CUSTOMER)

        with self.assertLogs('apps.contacts.orchestrator', level='WARNING'):
            confirmed = await self.orchestrator.confirm('10000', 'Acme Tool')

        self.assertFalse(confirmed)
        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.assertEqual(self.orchestrator.submission_error, 'Contact not found')
        self.assertEqual(self.orchestrator.error_message, 'Contact not found')
        self.assertIsNone(self.orchestrator.error)
        self.assertEqual(self.orchestrator.expected_value, '10000')
        self.assertEqual(self.orchestrator.product_name, 'Acme Tool')

    async def test_retry_after_submission_failure(self):
        self.submit.side_effect = [ConnectionError('timeout'), None]
        self.orchestrator.open(self.contact, ContactStatus.CUSTOMER)

        with self.assertLogs('apps.contacts.orchestrator', level='WARNING'):
            self.assertFalse(await self.orchestrator.confirm('10000', 'Acme Tool'))
        self.assertEqual(self.orchestrator.submission_error, 'timeout')

        self.assertTrue(await self.orchestrator.confirm('10000', 'Acme Tool'))
        self.assertEqual(self.submit.await_count, 2)
        self.assertEqual(self.orchestrator.state, OrchestratorState.IDLE)

    async def test_new_confirm_clears_previous_error(self):
        self.orchestrator.open(self.contact, ContactStatus.OPPORTUNITY)

        await self.orchestrator.confirm('', None)
        self.assertEqual(self.orchestrator.error.code, ValidationCode.MISSING_VALUE)

        self.assertTrue(await self.orchestrator.confirm('2500', None))
        self.assertIsNone(self.orchestrator.error)

    async def test_unknown_target_raises_and_stays_open(self):
        self.orchestrator.open(self.contact, 'ARCHIVED')

        with self.assertRaises(TransitionPreconditionError):
            await self.orchestrator.confirm()

        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.submit.assert_not_called()


class ConcurrentConfirmTest(SimpleTestCase):
    """Test the duplicate-submission guard"""

    def setUp(self):
        self.gate = asyncio.Event()

        async def slow_submit(payload):
            await self.gate.wait()

        self.submit = AsyncMock(side_effect=slow_submit)
        self.orchestrator = TransitionOrchestrator(self.submit)
        self.orchestrator.open(make_contact(), ContactStatus.CUSTOMER)

    async def test_second_confirm_while_submitting_is_ignored(self):
        """
        Test: Two rapid confirm() calls

        Expected: Exactly one persistence call, second returns False
        """
        first = asyncio.create_task(self.orchestrator.confirm('10000', 'Acme Tool'))
        await asyncio.sleep(0)

        self.assertEqual(self.orchestrator.state, OrchestratorState.SUBMITTING)
        self.assertTrue(self.orchestrator.is_loading)

        self.assertFalse(await self.orchestrator.confirm('10000', 'Acme Tool'))

        self.gate.set()
        self.assertTrue(await first)
        self.assertEqual(self.submit.await_count, 1)

    async def test_open_and_cancel_refused_while_submitting(self):
        first = asyncio.create_task(self.orchestrator.confirm('10000', 'Acme Tool'))
        await asyncio.sleep(0)

        with self.assertRaises(TransitionPreconditionError):
            self.orchestrator.open(make_contact(pk=2), ContactStatus.DORMANT)
        with self.assertRaises(TransitionPreconditionError):
            self.orchestrator.cancel()

        self.gate.set()
        await first

    async def test_cancelled_submission_returns_to_awaiting_input(self):
        first = asyncio.create_task(self.orchestrator.confirm('10000', 'Acme Tool'))
        await asyncio.sleep(0)

        first.cancel()
        with self.assertRaises(asyncio.CancelledError):
            await first

        self.assertEqual(self.orchestrator.state, OrchestratorState.AWAITING_INPUT)
        self.assertEqual(self.orchestrator.expected_value, '10000')
