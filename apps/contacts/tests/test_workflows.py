"""
Transition Validator Tests
==========================

Test Coverage:
1. Statuses without requirements
2. MISSING_VALUE / INVALID_VALUE / MISSING_PRODUCT_NAME
3. Normalization of the outcome
4. Pipeline edge check
5. Precondition errors

Run tests:
    python manage.py test apps.contacts.tests.test_workflows
"""

from django.test import SimpleTestCase

from apps.contacts.lifecycle import ContactStatus
from apps.contacts.workflows import (
    InvalidTransitionError,
    TransitionError,
    TransitionOutcome,
    TransitionPreconditionError,
    ValidationCode,
    check_transition,
    validate,
)


class ValidateTest(SimpleTestCase):
    """Test validate() for every target status"""

    def test_statuses_without_requirements_always_pass(self):
        """
        Test: MQL, SQL, EVANGELIST, DORMANT, LEAD with any input

        Expected: Empty outcome, no error, input ignored
        """
        for status in (
            ContactStatus.LEAD,
            ContactStatus.MQL,
            ContactStatus.SQL,
            ContactStatus.EVANGELIST,
            ContactStatus.DORMANT,
        ):
            for raw_value, raw_product in ((None, None), ('', ''), ('abc', 'Widget')):
                with self.subTest(status=status, value=raw_value):
                    outcome, failure = validate(status, raw_value, raw_product)
                    self.assertIsNone(failure)
                    self.assertEqual(outcome, TransitionOutcome(value=None, product_name=None))

    def test_missing_value(self):
        """
        Test: OPPORTUNITY / CUSTOMER without a value

        Expected: MISSING_VALUE on expected_value, message depends on target
        """
        for raw in (None, ''):
            with self.subTest(raw=raw):
                outcome, failure = validate(ContactStatus.OPPORTUNITY, raw, None)
                self.assertIsNone(outcome)
                self.assertEqual(failure.code, ValidationCode.MISSING_VALUE)
                self.assertEqual(failure.field, 'expected_value')
                self.assertEqual(failure.message, 'Expected deal value is required')

        outcome, failure = validate(ContactStatus.CUSTOMER, '', 'Widget')
        self.assertIsNone(outcome)
        self.assertEqual(failure.code, ValidationCode.MISSING_VALUE)
        self.assertEqual(failure.message, 'Deal value is required')

    def test_whitespace_value_is_invalid_not_missing(self):
        """
        Test: OPPORTUNITY / CUSTOMER with a whitespace-only value

        Expected: INVALID_VALUE, only None and '' count as missing
        """
        for status in (ContactStatus.OPPORTUNITY, ContactStatus.CUSTOMER):
            with self.subTest(status=status):
                outcome, failure = validate(status, '   ', 'Widget')
                self.assertIsNone(outcome)
                self.assertEqual(failure.code, ValidationCode.INVALID_VALUE)
                self.assertEqual(failure.message, 'Please enter a valid number')

    def test_invalid_value(self):
        """
        Test: Non-numeric value for OPPORTUNITY

        Expected: INVALID_VALUE, whole input must parse as a finite number
        """
        for raw in ('abc', '10abc', 'nan', 'inf', '-inf', '1,000', '1_000', '0x10', True):
            with self.subTest(raw=raw):
                outcome, failure = validate(ContactStatus.OPPORTUNITY, raw, None)
                self.assertIsNone(outcome)
                self.assertEqual(failure.code, ValidationCode.INVALID_VALUE)
                self.assertEqual(failure.field, 'expected_value')
                self.assertEqual(failure.message, 'Please enter a valid number')

    def test_numeric_inputs_accepted(self):
        cases = [
            ('5000', 5000.0),
            (' 5000.50 ', 5000.5),
            ('1e3', 1000.0),
            ('0', 0.0),
            ('-250', -250.0),
            (750, 750.0),
            (12.5, 12.5),
        ]
        for raw, expected in cases:
            with self.subTest(raw=raw):
                outcome, failure = validate(ContactStatus.OPPORTUNITY, raw, None)
                self.assertIsNone(failure)
                self.assertEqual(outcome.value, expected)
                self.assertIsNone(outcome.product_name)

    def test_missing_product_name(self):
        """
        Test: CUSTOMER with value but blank product name

        Expected: MISSING_PRODUCT_NAME on product_name
        """
        for raw in (None, '', '   '):
            with self.subTest(raw=raw):
                outcome, failure = validate(ContactStatus.CUSTOMER, '500', raw)
                self.assertIsNone(outcome)
                self.assertEqual(failure.code, ValidationCode.MISSING_PRODUCT_NAME)
                self.assertEqual(failure.field, 'product_name')
                self.assertEqual(failure.message, 'Product name is required')

    def test_value_checked_before_product_name(self):
        """
        Test: CUSTOMER with both fields wrong

        Expected: Only the value error is reported
        """
        _, failure = validate(ContactStatus.CUSTOMER, 'abc', '')
        self.assertEqual(failure.code, ValidationCode.INVALID_VALUE)

    def test_customer_outcome_is_normalized(self):
        """
        Test: CUSTOMER "10000" / "Acme Tool"

        Expected: value 10000.0, product name trimmed and lower-cased
        """
        outcome, failure = validate(ContactStatus.CUSTOMER, '10000', '  Acme Tool ')
        self.assertIsNone(failure)
        self.assertEqual(outcome, TransitionOutcome(value=10000.0, product_name='acme tool'))

    def test_revalidating_outcome_is_idempotent(self):
        outcome, _ = validate(ContactStatus.CUSTOMER, '10000', 'Acme Tool')
        again, failure = validate(
            ContactStatus.CUSTOMER, str(outcome.value), outcome.product_name
        )
        self.assertIsNone(failure)
        self.assertEqual(again, outcome)

        again, failure = validate(ContactStatus.CUSTOMER, outcome.value, outcome.product_name)
        self.assertEqual(again, outcome)

    def test_accepts_plain_string_status(self):
        outcome, failure = validate('CUSTOMER', '10', 'Tool')
        self.assertIsNone(failure)
        self.assertEqual(outcome.product_name, 'tool')

    def test_unknown_status_raises(self):
        """
        Test: Target outside ContactStatus

        Expected: TransitionPreconditionError, not a validation result
        """
        with self.assertRaises(TransitionPreconditionError):
            validate('ARCHIVED', '10', 'Tool')

        with self.assertRaises(TransitionPreconditionError):
            validate(None)


class CheckTransitionTest(SimpleTestCase):
    """Test pipeline edge check"""

    def test_allowed_edges(self):
        check_transition(ContactStatus.LEAD, ContactStatus.MQL)
        check_transition(ContactStatus.OPPORTUNITY, ContactStatus.CUSTOMER)
        check_transition(ContactStatus.EVANGELIST, ContactStatus.DORMANT)

    def test_skipping_a_stage_is_refused(self):
        with self.assertRaises(InvalidTransitionError) as ctx:
            check_transition(ContactStatus.LEAD, ContactStatus.SQL)
        self.assertIn("'LEAD' to 'SQL'", str(ctx.exception))

    def test_nothing_leaves_dormant(self):
        for status in ContactStatus:
            with self.subTest(status=status):
                with self.assertRaises(InvalidTransitionError):
                    check_transition(ContactStatus.DORMANT, status)

    def test_unknown_current_status(self):
        with self.assertRaises(InvalidTransitionError) as ctx:
            check_transition('ARCHIVED', ContactStatus.MQL)
        self.assertIn('no defined transitions', str(ctx.exception))

    def test_error_hierarchy(self):
        """
        Test: Exception types

        Expected: Edge errors are TransitionErrors, precondition errors are not
        """
        self.assertTrue(issubclass(InvalidTransitionError, TransitionError))
        self.assertTrue(issubclass(TransitionPreconditionError, RuntimeError))
        self.assertFalse(issubclass(TransitionPreconditionError, TransitionError))
