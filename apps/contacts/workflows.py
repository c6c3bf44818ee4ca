"""
Domain layer - pure, ORM-free validation of contact status transitions.

validate() decides whether the data entered for a transition is acceptable
and produces the normalized outcome that is handed to persistence.
Bad input is a normal result, returned as a ValidationFailure, never raised.
"""

import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from . import lifecycle
from .lifecycle import ContactStatus


class TransitionError(Exception):
    """Base class for transitions refused by the workflow or by persistence."""
    pass


class InvalidTransitionError(TransitionError):
    """The pipeline does not allow moving between these two statuses."""
    pass


class TransitionSubmissionError(TransitionError):
    """Persistence refused the transition (contact missing, stale status, ...)."""
    pass


class TransitionPreconditionError(RuntimeError):
    """
    Programming/integration error: the workflow was driven out of order or
    with a status outside ContactStatus.
    """
    pass


class ValidationCode(str, Enum):
    MISSING_VALUE = 'MISSING_VALUE'
    INVALID_VALUE = 'INVALID_VALUE'
    MISSING_PRODUCT_NAME = 'MISSING_PRODUCT_NAME'


EXPECTED_VALUE_FIELD = 'expected_value'
PRODUCT_NAME_FIELD = 'product_name'


@dataclass(frozen=True)
class ValidationFailure:
    code: ValidationCode
    field: str
    message: str


@dataclass(frozen=True)
class TransitionOutcome:
    value: Optional[float] = None
    product_name: Optional[str] = None


def _coerce_status(target_status) -> ContactStatus:
    try:
        return ContactStatus(target_status)
    except ValueError:
        raise TransitionPreconditionError(
            f"Unknown contact status '{target_status}'."
        )


# Plain decimal notation only: no digit separators, no nan/inf literals
NUMBER_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?')


def _is_empty(raw) -> bool:
    # Whitespace is not empty, it fails as an invalid number
    return raw is None or raw == ''


def _parse_number(raw) -> Optional[float]:
    """Parse the whole input as a finite float, None if it is not one."""
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    else:
        text = str(raw).strip()
        if not NUMBER_RE.fullmatch(text):
            return None
        number = float(text)

    if not math.isfinite(number):
        return None
    return number


def _missing_value_message(target_status) -> str:
    if target_status == ContactStatus.CUSTOMER:
        return 'Deal value is required'
    return 'Expected deal value is required'


def validate(
    target_status, raw_expected_value=None, raw_product_name=None
) -> Tuple[Optional[TransitionOutcome], Optional[ValidationFailure]]:
    """
    Validate the input entered for moving a contact to `target_status`.

    Rules are checked in a fixed order and the first failing one is
    returned:
        1. value required and empty        -> MISSING_VALUE
        2. value required and not a number -> INVALID_VALUE
        3. product name required and blank -> MISSING_PRODUCT_NAME

    Returns:
        (TransitionOutcome, None) on success, (None, ValidationFailure)
        otherwise.

    Raises:
        TransitionPreconditionError: target_status is not a ContactStatus.
    """
    status = _coerce_status(target_status)
    needs_value = lifecycle.requires_value(status)
    needs_product = lifecycle.requires_product_name(status)

    value = None
    if needs_value:
        if _is_empty(raw_expected_value):
            return None, ValidationFailure(
                ValidationCode.MISSING_VALUE,
                EXPECTED_VALUE_FIELD,
                _missing_value_message(status),
            )

        value = _parse_number(raw_expected_value)
        if value is None:
            return None, ValidationFailure(
                ValidationCode.INVALID_VALUE,
                EXPECTED_VALUE_FIELD,
                'Please enter a valid number',
            )

    product_name = None
    if needs_product:
        if not isinstance(raw_product_name, str) or not raw_product_name.strip():
            return None, ValidationFailure(
                ValidationCode.MISSING_PRODUCT_NAME,
                PRODUCT_NAME_FIELD,
                'Product name is required',
            )
        # Stored lower-cased so the same product never shows up twice
        product_name = raw_product_name.strip().lower()

    return TransitionOutcome(value=value, product_name=product_name), None


def check_transition(current_status, target_status):
    """
    Raises InvalidTransitionError if the pipeline does not allow moving a
    contact from `current_status` to `target_status`.
    """
    if current_status not in lifecycle.ALLOWED_TRANSITIONS:
        raise InvalidTransitionError(
            f"Status '{current_status}' has no defined transitions."
        )

    if target_status not in lifecycle.ALLOWED_TRANSITIONS[current_status]:
        raise InvalidTransitionError(
            f"Transition from '{current_status}' to '{target_status}'"
            " is not allowed."
        )
